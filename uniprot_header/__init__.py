"""
UniProt Header Parser - structured records from UniProtKB FASTA headers.

This package parses the two UniProtKB header variants, canonical entries and
isoforms, into immutable records:

    >>> from uniprot_header import parse_canonical
    >>> result = parse_canonical(b">sp|P18355|YPFU_ECOLI Uncharacterized protein "
    ...                          b"in traD-traI intergenic region OS=Escherichia coli "
    ...                          b"(strain K12) OX=83333 PE=3 SV=1")
    >>> result.record.entry_name
    'YPFU_ECOLI'

A header that does not match the grammar yields a result holding a
``ParseFailure`` instead of raising.
"""

from .errors import (
    ErrorKind,
    FailureType,
    HeaderParseError,
    HeaderParserError,
    ParseFailure,
    ParseResult,
)
from .headers import (
    is_isoform_header,
    parse_canonical,
    parse_header,
    parse_isoform,
    parse_lines,
)
from .models import CanonicalRecord, Database, IsoformRecord, ProteinExistence

__version__ = "0.1.0"
__author__ = "UniProt Header Parser Team"

__all__ = [
    "parse_canonical",
    "parse_isoform",
    "parse_header",
    "parse_lines",
    "is_isoform_header",
    "CanonicalRecord",
    "IsoformRecord",
    "Database",
    "ProteinExistence",
    "ParseResult",
    "ParseFailure",
    "FailureType",
    "ErrorKind",
    "HeaderParseError",
    "HeaderParserError",
]
