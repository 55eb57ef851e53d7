"""
Error model for the UniProt header parser.

Parse failures are returned as data (``ParseFailure`` inside a ``ParseResult``)
so that one bad line never aborts a batch. Exceptions are used internally by
the sub-parsers to unwind to the assembler, and publicly only for misuse or
for an explicit ``ParseResult.unwrap()``.
"""

import logging
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar
from dataclasses import dataclass, field
from datetime import datetime


RecordT = TypeVar("RecordT")


class ErrorKind(Enum):
    """Categories of sub-parser failures."""
    TAG = "tag"
    SPACE = "space"
    REGEXP_CAPTURE = "regexp_capture"
    TAKE_WHILE_M_N = "take_while_m_n"
    TAKE_WHILE1 = "take_while1"
    TAKE_UNTIL = "take_until"
    TAKE = "take"
    EXISTENCE = "existence"

    @property
    def description(self) -> str:
        """Human-readable description of the failure category."""
        return _KIND_DESCRIPTIONS[self]


_KIND_DESCRIPTIONS = {
    ErrorKind.TAG: "Tag",
    ErrorKind.SPACE: "Whitespace",
    ErrorKind.REGEXP_CAPTURE: "RegexpCapture",
    ErrorKind.TAKE_WHILE_M_N: "TakeWhileMN",
    ErrorKind.TAKE_WHILE1: "TakeWhile1",
    ErrorKind.TAKE_UNTIL: "TakeUntil",
    ErrorKind.TAKE: "Eof",
    ErrorKind.EXISTENCE: "Protein existence code",
}


class FailureType(Enum):
    """Whether the input was wrong or simply ran out."""
    MALFORMED = "malformed"
    INCOMPLETE = "incomplete"


@dataclass(frozen=True)
class ParseFailure:
    """A classified parse failure with the unconsumed remainder."""
    failure_type: FailureType
    kind: Optional[ErrorKind] = None
    field_name: Optional[str] = None
    position: int = 0
    remaining: bytes = b""

    @property
    def is_incomplete(self) -> bool:
        return self.failure_type == FailureType.INCOMPLETE

    @property
    def message(self) -> str:
        """Render the failure the way it is reported to users."""
        if self.is_incomplete:
            return "Incomplete"
        remaining = self.remaining.decode("utf-8", errors="replace")
        kind = self.kind.description if self.kind else "Unknown"
        return f"Failed to parse `{remaining}` : {kind}"

    def __str__(self) -> str:
        return self.message


@dataclass
class ParseResult(Generic[RecordT]):
    """Outcome of parsing one header: either a record or a failure."""
    record: Optional[RecordT] = None
    failure: Optional[ParseFailure] = None
    line_number: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap(self) -> RecordT:
        """Return the record or raise ``HeaderParseError``."""
        if self.failure is not None:
            raise HeaderParseError(self.failure)
        return self.record


class HeaderParserError(Exception):
    """Base exception class for UniProt header parser errors."""

    def __init__(self, message: str, kind: Optional[ErrorKind] = None):
        super().__init__(message)
        self.message = message
        self.kind = kind


class SubParserError(HeaderParserError):
    """A sub-parser stopped at ``position``; unwinds to the record assembler."""

    failure_type = FailureType.MALFORMED

    def __init__(self, message: str, position: int, kind: ErrorKind, field_name: Optional[str] = None):
        super().__init__(message, kind)
        self.position = position
        self.field_name = field_name

    def to_failure(self, data: bytes) -> ParseFailure:
        """Convert to a ``ParseFailure`` against the buffer being parsed."""
        return ParseFailure(
            failure_type=self.failure_type,
            kind=self.kind,
            field_name=self.field_name,
            position=self.position,
            remaining=bytes(data[self.position:]),
        )


class MalformedInput(SubParserError):
    """Raised by a sub-parser when the input does not match its grammar."""

    def __init__(self, position: int, kind: ErrorKind, field_name: Optional[str] = None):
        super().__init__(f"{kind.description} at offset {position}", position, kind, field_name)


class IncompleteInput(SubParserError):
    """Raised by a sub-parser when the input ends before a field is complete."""

    failure_type = FailureType.INCOMPLETE

    def __init__(self, position: int, kind: ErrorKind, field_name: Optional[str] = None):
        super().__init__(f"Input ended at offset {position}", position, kind, field_name)


class HeaderParseError(HeaderParserError):
    """Raised by ``ParseResult.unwrap()`` for a failed parse."""

    def __init__(self, failure: ParseFailure):
        super().__init__(failure.message, failure.kind)
        self.failure = failure


class ConfigurationError(HeaderParserError):
    """Errors related to parser configuration."""


@dataclass
class FailureReport:
    """A parse failure together with where it happened in a batch."""
    failure: ParseFailure
    variant: str
    line_number: Optional[int] = None
    source: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)
    additional_data: Dict[str, Any] = field(default_factory=dict)


class ErrorHandler:
    """
    Collects and logs parse failures produced while processing many headers.

    The parser never logs failures itself; batch callers (the CLI, scripts)
    hand failures to this handler so counts per failure category are kept
    in one place.
    """

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._error_counts: Dict[str, int] = {}

    def handle_failure(self, report: FailureReport) -> FailureReport:
        """Count and log a failure report."""
        failure = report.failure
        if failure.is_incomplete:
            key = FailureType.INCOMPLETE.value
        else:
            key = failure.kind.value if failure.kind else "unknown"
        self._error_counts[key] = self._error_counts.get(key, 0) + 1

        log_data = {
            "failure_type": failure.failure_type.value,
            "failure_kind": failure.kind.value if failure.kind else None,
            "failed_field": failure.field_name,
            "position": failure.position,
            "variant": report.variant,
            "line_number": report.line_number,
            "source": report.source,
            "timestamp": report.timestamp.isoformat(),
        }
        if report.additional_data:
            log_data.update(report.additional_data)

        self.logger.warning("Header parse failure: %s", failure.message, extra=log_data)
        return report

    def get_error_statistics(self) -> Dict[str, int]:
        """Get failure counts keyed by failure kind."""
        return self._error_counts.copy()

    def reset_error_statistics(self) -> None:
        self._error_counts.clear()


# Global error handler instance
_error_handler: Optional[ErrorHandler] = None


def get_error_handler() -> ErrorHandler:
    """Get the global error handler instance."""
    global _error_handler
    if _error_handler is None:
        _error_handler = ErrorHandler()
    return _error_handler


def set_error_handler(handler: ErrorHandler) -> None:
    """Set the global error handler instance."""
    global _error_handler
    _error_handler = handler
