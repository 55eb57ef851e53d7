"""
Grammar for UniProtKB FASTA headers: token primitives and field parsers.
"""

from . import fields, primitives
from .primitives import accession_pattern

__all__ = [
    "fields",
    "primitives",
    "accession_pattern",
]
