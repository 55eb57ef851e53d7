"""
Record assemblers for UniProtKB FASTA headers.

Canonical entries::

    >db|UniqueIdentifier|EntryName ProteinName OS=OrganismName OX=OrganismIdentifier [GN=GeneName ]PE=ProteinExistence SV=SequenceVersion

Isoforms::

    >db|UniqueIdentifier-IsoformNumber|EntryName ProteinName OS=OrganismName OX=OrganismIdentifier[ GN=GeneName]

Both assemblers run their field parsers in a fixed order and stop at the first
failure. They never raise for bad input: the outcome is a ``ParseResult``
holding either the record or a ``ParseFailure``. Anything left after the last
field is ignored.
"""

import logging
import re
from typing import Callable, Dict, Iterable, Iterator, Optional, Union

from .errors import ConfigurationError, ParseResult, SubParserError
from .models.entities import CanonicalRecord, IsoformRecord
from .parser import fields


logger = logging.getLogger(__name__)

HeaderInput = Union[bytes, bytearray, memoryview, str]

_ISOFORM_HEADER = re.compile(rb"^>[^|]*\|[^|\s]+-[0-9]+\|")


def _as_bytes(data: HeaderInput) -> bytes:
    if isinstance(data, bytes):
        return data
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    if isinstance(data, str):
        return data.encode("utf-8")
    raise TypeError(f"Header must be bytes or str, not {type(data).__name__}")


def _text(raw: Optional[bytes]) -> Optional[str]:
    """Decode a free-text field, replacing invalid UTF-8, and trim it."""
    if raw is None:
        return None
    return raw.decode("utf-8", errors="replace").strip()


def _log_trailing(data: bytes, pos: int) -> None:
    if pos < len(data):
        logger.debug("Ignoring %d trailing bytes after header", len(data) - pos)


def _parse_canonical(data: bytes) -> CanonicalRecord:
    pos, _ = fields.chevron(data, 0)
    pos, database = fields.database(data, pos)
    pos, _ = fields.pipe(data, pos)
    pos, unique_id = fields.identifier(data, pos)
    pos, _ = fields.pipe(data, pos)
    pos, entry = fields.entry_name(data, pos)
    pos, _ = fields.whitespace(data, pos)
    pos, protein = fields.protein_name(data, pos)
    pos, _ = fields.whitespace(data, pos)
    pos, organism = fields.organism_name(data, pos)
    pos, _ = fields.whitespace(data, pos)
    pos, organism_id = fields.organism_id(data, pos)
    pos, _ = fields.whitespace(data, pos)
    pos, gene = fields.optional_gene_name(data, pos)  # + optional space
    pos, evidence = fields.existence(data, pos)
    pos, _ = fields.whitespace(data, pos)
    pos, version = fields.version(data, pos)
    _log_trailing(data, pos)

    return CanonicalRecord(
        database=database,
        identifier=_text(unique_id),
        entry_name=_text(entry),
        protein_name=_text(protein),
        organism_name=_text(organism),
        organism_identifier=_text(organism_id),
        gene_name=_text(gene),
        protein_existence=evidence,
        sequence_version=_text(version),
    )


def _parse_isoform(data: bytes) -> IsoformRecord:
    pos, _ = fields.chevron(data, 0)
    pos, database = fields.database(data, pos)
    pos, _ = fields.pipe(data, pos)
    pos, (unique_id, isoform) = fields.isoform_identifier(data, pos)
    pos, _ = fields.pipe(data, pos)
    pos, entry = fields.entry_name(data, pos)
    pos, _ = fields.whitespace(data, pos)
    pos, protein = fields.protein_name(data, pos)
    pos, _ = fields.whitespace(data, pos)
    pos, organism = fields.organism_name(data, pos)
    pos, _ = fields.whitespace(data, pos)
    pos, organism_id = fields.organism_id(data, pos)

    # The header may end right after the taxonomy id when there is no gene name
    gene = None
    if pos < len(data):
        pos, _ = fields.whitespace(data, pos)
    if pos < len(data):
        pos, gene = fields.optional_gene_name(data, pos)  # + optional space
    _log_trailing(data, pos)

    return IsoformRecord(
        database=database,
        identifier=_text(unique_id),
        isoform=_text(isoform),
        entry_name=_text(entry),
        protein_name=_text(protein),
        organism_name=_text(organism),
        organism_identifier=_text(organism_id),
        gene_name=_text(gene),
    )


def parse_canonical(data: HeaderInput) -> ParseResult[CanonicalRecord]:
    """
    Parse a UniProtKB entry header.

    Args:
        data: One header line including the leading ``>``

    Returns:
        ParseResult with a ``CanonicalRecord`` or the failure that stopped parsing
    """
    data = _as_bytes(data)
    try:
        return ParseResult(record=_parse_canonical(data))
    except SubParserError as exc:
        return ParseResult(failure=exc.to_failure(data))


def parse_isoform(data: HeaderInput) -> ParseResult[IsoformRecord]:
    """
    Parse a UniProtKB isoform header.

    The header may end directly after the ``OX=`` taxonomy identifier; the
    space that would introduce a gene name is only required when more
    input follows.

    Args:
        data: One header line including the leading ``>``

    Returns:
        ParseResult with an ``IsoformRecord`` or the failure that stopped parsing
    """
    data = _as_bytes(data)
    try:
        return ParseResult(record=_parse_isoform(data))
    except SubParserError as exc:
        return ParseResult(failure=exc.to_failure(data))


def is_isoform_header(data: HeaderInput) -> bool:
    """True when the identifier field carries an ``-<number>`` isoform suffix."""
    return _ISOFORM_HEADER.match(_as_bytes(data)) is not None


def parse_header(data: HeaderInput) -> ParseResult[Union[CanonicalRecord, IsoformRecord]]:
    """Parse a header with the grammar matching its identifier shape."""
    data = _as_bytes(data)
    if is_isoform_header(data):
        return parse_isoform(data)
    return parse_canonical(data)


VARIANTS: Dict[str, Callable[[HeaderInput], ParseResult]] = {
    "auto": parse_header,
    "canonical": parse_canonical,
    "isoform": parse_isoform,
}


def get_variant_parser(variant: str) -> Callable[[HeaderInput], ParseResult]:
    """Look up the parse function for a header variant name."""
    try:
        return VARIANTS[variant]
    except KeyError:
        raise ConfigurationError(
            f"Unknown header variant '{variant}', expected one of: {', '.join(VARIANTS)}"
        ) from None


def parse_lines(
    lines: Iterable[HeaderInput],
    variant: str = "auto",
    headers_only: bool = False,
) -> Iterator[ParseResult]:
    """
    Parse many header lines, one result per header.

    Blank lines are skipped. With ``headers_only`` any line not starting with
    ``>`` (for example sequence lines of a FASTA file) is skipped too. A
    failing line produces a failed result and parsing carries on.

    Args:
        lines: Header lines, bytes or str, with or without line endings
        variant: "auto", "canonical" or "isoform"
        headers_only: Skip lines that are not FASTA headers

    Yields:
        ParseResult for each header, with ``line_number`` set (1-based)
    """
    parse = get_variant_parser(variant)
    for line_number, line in enumerate(lines, start=1):
        line = _as_bytes(line).rstrip(b"\r\n")
        if not line.strip():
            continue
        if headers_only and not line.startswith(b">"):
            continue
        result = parse(line)
        result.line_number = line_number
        yield result
