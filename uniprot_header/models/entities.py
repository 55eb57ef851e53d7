"""
Pydantic models for parsed UniProtKB FASTA headers.

Records are immutable: they are built once by a header assembler and
returned by value. Serialization to plain dicts or JSON is available through
``to_dict()`` / ``to_json()`` but is not needed to use the parser.
"""

import re
from enum import Enum, IntEnum
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


ENTRY_NAME_PATTERN = re.compile(r"^[A-Za-z0-9]{2,12}_[A-Za-z0-9]{2,5}$")
ORGANISM_ID_PATTERN = re.compile(r"^[0-9]{1,7}$")


class Database(str, Enum):
    """UniProtKB section a header comes from."""
    SWISS_PROT = "sp"
    TREMBL = "tr"

    @property
    def label(self) -> str:
        return "UniProtKB/Swiss-Prot" if self is Database.SWISS_PROT else "UniProtKB/TrEMBL"


class ProteinExistence(IntEnum):
    """
    Protein existence levels.

    See https://www.uniprot.org/help/protein_existence
    """
    EXPERIMENTAL_EVIDENCE_PROTEIN = 1
    EXPERIMENTAL_EVIDENCE_TRANSCRIPT = 2
    INFERRED_HOMOLOGY = 3
    PREDICTED = 4
    UNCERTAIN = 5

    @property
    def label(self) -> str:
        return _EXISTENCE_LABELS[self]


_EXISTENCE_LABELS = {
    ProteinExistence.EXPERIMENTAL_EVIDENCE_PROTEIN: "Experimental evidence at protein level",
    ProteinExistence.EXPERIMENTAL_EVIDENCE_TRANSCRIPT: "Experimental evidence at transcript level",
    ProteinExistence.INFERRED_HOMOLOGY: "Protein inferred from homology",
    ProteinExistence.PREDICTED: "Protein predicted",
    ProteinExistence.UNCERTAIN: "Protein uncertain",
}


class HeaderRecord(BaseModel):
    """Fields shared by canonical and isoform headers."""

    model_config = ConfigDict(frozen=True)

    database: Database = Field(
        ...,
        description="UniProtKB database (sp or tr)"
    )
    identifier: str = Field(
        ...,
        min_length=6,
        max_length=10,
        description="UniProt accession number"
    )
    entry_name: str = Field(
        ...,
        description="UniProt entry name, PROTEIN_SPECIES mnemonic"
    )
    protein_name: str = Field(
        ...,
        description="Recommended protein name"
    )
    organism_name: str = Field(
        ...,
        description="Scientific name of the source organism"
    )
    organism_identifier: str = Field(
        ...,
        description="NCBI taxonomic identifier"
    )
    gene_name: Optional[str] = Field(
        None,
        description="First gene name, when the header carries one"
    )

    @field_validator('entry_name')
    @classmethod
    def validate_entry_name(cls, v):
        """Validate the PROTEIN_SPECIES mnemonic shape."""
        if not ENTRY_NAME_PATTERN.match(v):
            raise ValueError("Entry name must be 2-12 alphanumerics, '_', then 2-5 alphanumerics")
        return v

    @field_validator('organism_identifier')
    @classmethod
    def validate_organism_identifier(cls, v):
        """Validate the taxonomy identifier is 1 to 7 digits."""
        if not ORGANISM_ID_PATTERN.match(v):
            raise ValueError("Organism identifier must be 1 to 7 digits")
        return v

    def to_dict(self) -> Dict[str, Any]:
        """Plain dictionary with enums rendered as their header codes."""
        return self.model_dump(mode="json")

    def to_json(self, indent: Optional[int] = None) -> str:
        return self.model_dump_json(indent=indent)


class CanonicalRecord(HeaderRecord):
    """A UniProtKB entry header."""

    protein_existence: ProteinExistence = Field(
        ...,
        description="Protein existence level (PE)"
    )
    sequence_version: str = Field(
        ...,
        description="Sequence version (SV)"
    )

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "database": "sp",
                "identifier": "P18355",
                "entry_name": "YPFU_ECOLI",
                "protein_name": "Uncharacterized protein in traD-traI intergenic region",
                "organism_name": "Escherichia coli (strain K12)",
                "organism_identifier": "83333",
                "gene_name": None,
                "protein_existence": 3,
                "sequence_version": "1"
            }
        }
    )


class IsoformRecord(HeaderRecord):
    """A UniProtKB isoform header (no PE or SV fields)."""

    isoform: str = Field(
        ...,
        min_length=1,
        description="Isoform number following the accession"
    )

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "database": "sp",
                "identifier": "Q4R572",
                "isoform": "2",
                "entry_name": "1433B_MACFA",
                "protein_name": "Isoform Short of 14-3-3 protein beta/alpha",
                "organism_name": "Macaca fascicularis",
                "organism_identifier": "9541",
                "gene_name": "YWHAB"
            }
        }
    )

    @field_validator('isoform')
    @classmethod
    def validate_isoform(cls, v):
        if not v.isdigit():
            raise ValueError("Isoform number must be digits")
        return v

    @property
    def isoform_identifier(self) -> str:
        """Accession with its isoform suffix, e.g. ``Q4R572-2``."""
        return f"{self.identifier}-{self.isoform}"
