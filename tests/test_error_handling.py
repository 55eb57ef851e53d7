"""
Tests for the error model.

Covers failure rendering, ParseResult unwrapping, and the batch
ErrorHandler that counts and logs failures.
"""

import logging

import pytest

from uniprot_header import parse_canonical
from uniprot_header.errors import (
    ErrorHandler, ErrorKind, FailureReport, FailureType, HeaderParseError,
    HeaderParserError, IncompleteInput, MalformedInput, ParseFailure, ParseResult,
    SubParserError, get_error_handler, set_error_handler,
)


class TestParseFailure:
    """Test failure classification and rendering."""

    def test_malformed_message(self):
        failure = ParseFailure(
            failure_type=FailureType.MALFORMED,
            kind=ErrorKind.TAKE_UNTIL,
            field_name="protein_name",
            position=24,
            remaining=b"Kappa-casein",
        )
        assert failure.message == "Failed to parse `Kappa-casein` : TakeUntil"
        assert str(failure) == failure.message
        assert not failure.is_incomplete

    def test_incomplete_message(self):
        failure = ParseFailure(failure_type=FailureType.INCOMPLETE, kind=ErrorKind.TAG)
        assert failure.message == "Incomplete"
        assert failure.is_incomplete

    def test_message_decodes_invalid_utf8(self):
        failure = ParseFailure(
            failure_type=FailureType.MALFORMED,
            kind=ErrorKind.TAG,
            remaining=b"\xffab",
        )
        assert failure.message == "Failed to parse `\ufffdab` : Tag"

    @pytest.mark.parametrize("kind,description", [
        (ErrorKind.TAG, "Tag"),
        (ErrorKind.REGEXP_CAPTURE, "RegexpCapture"),
        (ErrorKind.TAKE_WHILE_M_N, "TakeWhileMN"),
        (ErrorKind.EXISTENCE, "Protein existence code"),
    ])
    def test_kind_descriptions(self, kind, description):
        assert kind.description == description

    def test_failures_are_immutable(self):
        failure = ParseFailure(failure_type=FailureType.MALFORMED)
        with pytest.raises(AttributeError):
            failure.position = 3


class TestSubParserErrors:
    """Test the internal exceptions raised by sub-parsers."""

    def test_malformed_to_failure(self):
        exc = MalformedInput(4, ErrorKind.TAG, field_name="database")
        failure = exc.to_failure(b">xx|P12345")

        assert failure.failure_type == FailureType.MALFORMED
        assert failure.kind == ErrorKind.TAG
        assert failure.field_name == "database"
        assert failure.position == 4
        assert failure.remaining == b"P12345"

    def test_incomplete_to_failure(self):
        exc = IncompleteInput(1, ErrorKind.TAG)
        failure = exc.to_failure(bytearray(b">s"))

        assert failure.is_incomplete
        assert failure.remaining == b"s"
        assert isinstance(failure.remaining, bytes)

    def test_incomplete_is_not_malformed(self):
        assert not issubclass(IncompleteInput, MalformedInput)
        assert issubclass(IncompleteInput, SubParserError)
        assert issubclass(MalformedInput, HeaderParserError)


class TestParseResult:
    """Test ParseResult behaviour."""

    def test_unwrap_success(self, canonical_headers):
        result = parse_canonical(canonical_headers["CASK_BOVIN"])
        assert result.ok
        assert result.unwrap().entry_name == "CASK_BOVIN"

    def test_unwrap_failure_raises(self):
        result = parse_canonical(b">xx|P02668|CASK_BOVIN")
        assert not result.ok

        with pytest.raises(HeaderParseError) as exc_info:
            result.unwrap()

        assert exc_info.value.failure is result.failure
        assert exc_info.value.kind == ErrorKind.TAG
        assert str(exc_info.value) == result.failure.message

    def test_empty_result_is_ok(self):
        assert ParseResult().ok


class TestErrorHandler:
    """Test the batch failure handler."""

    def _report(self, kind=ErrorKind.TAG, failure_type=FailureType.MALFORMED, **kwargs):
        failure = ParseFailure(failure_type=failure_type, kind=kind, field_name="database")
        return FailureReport(failure=failure, variant="canonical", **kwargs)

    def test_counts_by_kind(self):
        handler = ErrorHandler()
        handler.handle_failure(self._report())
        handler.handle_failure(self._report())
        handler.handle_failure(self._report(kind=ErrorKind.TAKE_UNTIL))
        handler.handle_failure(self._report(failure_type=FailureType.INCOMPLETE))

        assert handler.get_error_statistics() == {
            "tag": 2,
            "take_until": 1,
            "incomplete": 1,
        }

    def test_statistics_are_a_copy(self):
        handler = ErrorHandler()
        handler.handle_failure(self._report())

        stats = handler.get_error_statistics()
        stats["tag"] = 100

        assert handler.get_error_statistics()["tag"] == 1

    def test_reset_statistics(self):
        handler = ErrorHandler()
        handler.handle_failure(self._report())
        handler.reset_error_statistics()
        assert handler.get_error_statistics() == {}

    def test_logs_warning_with_context(self, caplog):
        handler = ErrorHandler()
        report = self._report(line_number=7, source="headers.fasta",
                              additional_data={"batch": "nightly"})

        with caplog.at_level(logging.WARNING):
            returned = handler.handle_failure(report)

        assert returned is report
        assert len(caplog.records) == 1
        record = caplog.records[0]
        assert record.levelno == logging.WARNING
        assert "Header parse failure" in record.getMessage()
        assert record.failure_kind == "tag"
        assert record.failed_field == "database"
        assert record.line_number == 7
        assert record.source == "headers.fasta"
        assert record.batch == "nightly"


class TestGlobalErrorHandler:
    """Test global error handler management."""

    def test_get_creates_once(self):
        first = get_error_handler()
        assert get_error_handler() is first

    def test_set_error_handler(self):
        handler = ErrorHandler()
        set_error_handler(handler)
        assert get_error_handler() is handler
