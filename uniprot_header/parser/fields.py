"""
Field parsers for UniProt FASTA headers.

Each field parser is composed from the token primitives and tags any failure
with the name of the field being parsed, so a failed header can report which
part of the grammar it stopped in.

See https://www.uniprot.org/help/fasta-headers
"""

from functools import wraps
from typing import Optional, Tuple

from ..errors import ErrorKind, MalformedInput, SubParserError
from ..models.entities import Database, ProteinExistence
from .primitives import (
    Parser, accession, alt, digits, is_alphanumeric, is_digit, is_space, opt,
    preceded, space, tag, take, take_until, take_while, take_while1,
    take_while_m_n,
)


def field_parser(name: str):
    """Label failures raised by the wrapped parser with ``name``."""
    def decorator(parser: Parser) -> Parser:
        @wraps(parser)
        def parse(data: bytes, pos: int):
            try:
                return parser(data, pos)
            except SubParserError as exc:
                if exc.field_name is None:
                    exc.field_name = name
                raise
        return parse
    return decorator


chevron = field_parser("chevron")(tag(b">"))
pipe = field_parser("pipe")(tag(b"|"))
whitespace = field_parser("whitespace")(space)

_DATABASES = {
    b"sp": Database.SWISS_PROT,
    b"tr": Database.TREMBL,
}

_EXISTENCE_CODES = {
    b"1": ProteinExistence.EXPERIMENTAL_EVIDENCE_PROTEIN,
    b"2": ProteinExistence.EXPERIMENTAL_EVIDENCE_TRANSCRIPT,
    b"3": ProteinExistence.INFERRED_HOMOLOGY,
    b"4": ProteinExistence.PREDICTED,
    b"5": ProteinExistence.UNCERTAIN,
}

_database_tag = alt(tag(b"sp"), tag(b"tr"))
_mnemonic_protein = take_while_m_n(2, 12, is_alphanumeric)
_underscore = tag(b"_")
_mnemonic_species = take_while_m_n(2, 5, is_alphanumeric)
_isoform_number = preceded(tag(b"-"), take_while1(is_digit))
_protein_name = take_until(b" OS=")
_organism_name = preceded(tag(b"OS="), take_until(b" OX="))
# NCBI taxonomy identifier, https://www.uniprot.org/help/taxonomic_identifier
_organism_id = preceded(tag(b"OX="), digits(1, 7))


def _is_gene_byte(byte: int) -> bool:
    return is_alphanumeric(byte) or byte in b"-_."


# Anything after GN= up to PE=, or a plain symbol when the header ends
# without one. Some gene names on UniProtKB contain spaces, digits and '='.
_gene_name = preceded(
    tag(b"GN="),
    alt(take_until(b" PE="), take_while1(_is_gene_byte)),
)
_optional_gene_name = opt(_gene_name)
_optional_space = take_while(is_space)
_existence_code = preceded(tag(b"PE="), take_while_m_n(1, 1, is_digit))
_version = preceded(tag(b"SV="), take(1))


@field_parser("database")
def database(data: bytes, pos: int) -> Tuple[int, Database]:
    pos, value = _database_tag(data, pos)
    return pos, _DATABASES[value]


@field_parser("identifier")
def identifier(data: bytes, pos: int) -> Tuple[int, bytes]:
    return accession(data, pos)


@field_parser("isoform_identifier")
def isoform_identifier(data: bytes, pos: int) -> Tuple[int, Tuple[bytes, bytes]]:
    """Accession number followed by ``-`` and the isoform number."""
    pos, unique_id = accession(data, pos)
    pos, isoform = _isoform_number(data, pos)
    return pos, (unique_id, isoform)


@field_parser("entry_name")
def entry_name(data: bytes, pos: int) -> Tuple[int, bytes]:
    """
    Parse an entry name such as ``YPFU_ECOLI``.

    The protein mnemonic takes as many alphanumerics as it can (up to 12)
    before the underscore is required; there is no backtracking into it.
    See https://www.uniprot.org/help/entry_name
    """
    pos, protein = _mnemonic_protein(data, pos)
    pos, underscore = _underscore(data, pos)
    pos, species = _mnemonic_species(data, pos)
    return pos, protein + underscore + species


@field_parser("protein_name")
def protein_name(data: bytes, pos: int) -> Tuple[int, bytes]:
    return _protein_name(data, pos)


@field_parser("organism_name")
def organism_name(data: bytes, pos: int) -> Tuple[int, bytes]:
    return _organism_name(data, pos)


@field_parser("organism_id")
def organism_id(data: bytes, pos: int) -> Tuple[int, bytes]:
    return _organism_id(data, pos)


@field_parser("gene_name")
def gene_name(data: bytes, pos: int) -> Tuple[int, bytes]:
    return _gene_name(data, pos)


@field_parser("gene_name")
def optional_gene_name(data: bytes, pos: int) -> Tuple[int, Optional[bytes]]:
    """Gene name if there is one, then any trailing whitespace."""
    pos, gene = _optional_gene_name(data, pos)
    pos, _ = _optional_space(data, pos)
    return pos, gene


@field_parser("existence")
def existence(data: bytes, pos: int) -> Tuple[int, ProteinExistence]:
    """Protein existence level, ``PE=1`` to ``PE=5``."""
    code_pos = pos + len(b"PE=")
    pos, code = _existence_code(data, pos)
    try:
        return pos, _EXISTENCE_CODES[code]
    except KeyError:
        raise MalformedInput(code_pos, ErrorKind.EXISTENCE) from None


@field_parser("version")
def version(data: bytes, pos: int) -> Tuple[int, bytes]:
    return _version(data, pos)
