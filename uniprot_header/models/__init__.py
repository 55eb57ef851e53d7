"""
Data models for parsed UniProtKB FASTA headers.

This package provides Pydantic models for the two header variants
(canonical entries and isoforms) and the enumerations they use.
"""

from .entities import (
    CanonicalRecord,
    Database,
    HeaderRecord,
    IsoformRecord,
    ProteinExistence,
)

__all__ = [
    # Enumerations
    "Database",
    "ProteinExistence",

    # Records
    "HeaderRecord",
    "CanonicalRecord",
    "IsoformRecord",
]
