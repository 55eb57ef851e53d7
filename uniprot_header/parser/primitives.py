"""
Token primitives for UniProt FASTA headers.

Every parser here is a callable ``parser(data, pos) -> (new_pos, value)``
working on a ``bytes`` buffer and an offset into it. A parser that cannot
match raises ``MalformedInput``; one that runs out of input in the middle of a
fixed-size token raises ``IncompleteInput``. Both carry the offset at which
matching stopped, so the unconsumed remainder is always ``data[exc.position:]``.
"""

import re
import string
from functools import lru_cache
from typing import Any, Callable, Optional, Tuple

from ..errors import ErrorKind, IncompleteInput, MalformedInput


Parser = Callable[[bytes, int], Tuple[int, Any]]
Predicate = Callable[[int], bool]

ACCESSION_REGEX = rb"[OPQ][0-9][A-Z0-9]{3}[0-9]|[A-NR-Z][0-9]([A-Z][A-Z0-9]{2}[0-9]){1,2}"

_ALNUM = frozenset((string.ascii_letters + string.digits).encode("ascii"))
_DIGITS = frozenset(string.digits.encode("ascii"))
_SPACE = frozenset(b" \t")


def is_alphanumeric(byte: int) -> bool:
    return byte in _ALNUM


def is_digit(byte: int) -> bool:
    return byte in _DIGITS


def is_space(byte: int) -> bool:
    return byte in _SPACE


@lru_cache(maxsize=1)
def accession_pattern() -> "re.Pattern[bytes]":
    """
    Compiled UniProt accession pattern.

    Compiled on first use and shared read-only by every parse afterwards.
    See https://www.uniprot.org/help/accession_numbers
    """
    return re.compile(ACCESSION_REGEX)


def tag(literal: bytes) -> Parser:
    """Match an exact literal."""
    def parse(data: bytes, pos: int) -> Tuple[int, bytes]:
        if data.startswith(literal, pos):
            return pos + len(literal), literal
        if len(data) - pos < len(literal) and literal.startswith(data[pos:]):
            raise IncompleteInput(pos, ErrorKind.TAG)
        raise MalformedInput(pos, ErrorKind.TAG)
    return parse


def space(data: bytes, pos: int) -> Tuple[int, bytes]:
    """One or more spaces or tabs."""
    end = pos
    while end < len(data) and is_space(data[end]):
        end += 1
    if end == pos:
        if pos >= len(data):
            raise IncompleteInput(pos, ErrorKind.SPACE)
        raise MalformedInput(pos, ErrorKind.SPACE)
    return end, data[pos:end]


def accession(data: bytes, pos: int) -> Tuple[int, bytes]:
    """
    Find the leftmost accession number anywhere in the remaining input.

    The search is not anchored: anything between ``pos`` and the match is
    skipped, and the cursor moves past the end of the match.
    """
    match = accession_pattern().search(data, pos)
    if match is None:
        raise MalformedInput(pos, ErrorKind.REGEXP_CAPTURE)
    return match.end(), match.group(0)


def take_while_m_n(minimum: int, maximum: int, predicate: Predicate) -> Parser:
    """Greedy run of ``minimum`` to ``maximum`` bytes satisfying ``predicate``."""
    def parse(data: bytes, pos: int) -> Tuple[int, bytes]:
        limit = min(len(data), pos + maximum)
        end = pos
        while end < limit and predicate(data[end]):
            end += 1
        if end - pos < minimum:
            raise MalformedInput(pos, ErrorKind.TAKE_WHILE_M_N)
        return end, data[pos:end]
    return parse


def take_while(predicate: Predicate) -> Parser:
    """Zero or more bytes satisfying ``predicate``; never fails."""
    def parse(data: bytes, pos: int) -> Tuple[int, bytes]:
        end = pos
        while end < len(data) and predicate(data[end]):
            end += 1
        return end, data[pos:end]
    return parse


def take_while1(predicate: Predicate) -> Parser:
    """One or more bytes satisfying ``predicate``."""
    def parse(data: bytes, pos: int) -> Tuple[int, bytes]:
        end = pos
        while end < len(data) and predicate(data[end]):
            end += 1
        if end == pos:
            raise MalformedInput(pos, ErrorKind.TAKE_WHILE1)
        return end, data[pos:end]
    return parse


def take_until(sentinel: bytes) -> Parser:
    """Everything up to, not including, the first occurrence of ``sentinel``."""
    def parse(data: bytes, pos: int) -> Tuple[int, bytes]:
        end = data.find(sentinel, pos)
        if end < 0:
            raise MalformedInput(pos, ErrorKind.TAKE_UNTIL)
        return end, data[pos:end]
    return parse


def take(count: int) -> Parser:
    """Exactly ``count`` bytes, whatever they are."""
    def parse(data: bytes, pos: int) -> Tuple[int, bytes]:
        if len(data) - pos < count:
            raise IncompleteInput(pos, ErrorKind.TAKE)
        return pos + count, data[pos:pos + count]
    return parse


def digits(minimum: int, maximum: int) -> Parser:
    return take_while_m_n(minimum, maximum, is_digit)


def preceded(first: Parser, second: Parser) -> Parser:
    """Run ``first``, discard its value, return the value of ``second``."""
    def parse(data: bytes, pos: int) -> Tuple[int, Any]:
        pos, _ = first(data, pos)
        return second(data, pos)
    return parse


def alt(*parsers: Parser) -> Parser:
    """
    Try each parser in order and keep the first that matches.

    Only malformed failures move on to the next alternative; running out of
    input stops the search. If nothing matches, the last failure is raised.
    """
    def parse(data: bytes, pos: int) -> Tuple[int, Any]:
        error: Optional[MalformedInput] = None
        for parser in parsers:
            try:
                return parser(data, pos)
            except MalformedInput as exc:
                error = exc
        raise error
    return parse


def opt(parser: Parser) -> Parser:
    """Make ``parser`` optional: a malformed match yields ``None`` and consumes nothing."""
    def parse(data: bytes, pos: int) -> Tuple[int, Any]:
        try:
            return parser(data, pos)
        except MalformedInput:
            return pos, None
    return parse
