"""Lexical layer shared by every item parser.

From the GNU docs:

> A date is a string, possibly empty, containing many items separated by
> whitespace. The whitespace may be omitted when no ambiguity arises.
> Comments may be introduced between round parentheses, as long as included
> parentheses are properly nested.

Parsers in this package are plain functions taking a ``Stream`` and either
returning a value (with the cursor moved past what they consumed) or raising
``Backtrack``. A ``Backtrack`` is a recoverable mismatch: the caller resets
the cursor and tries something else. A ``DateParseError`` raised by a parser
is a hard failure and ends the whole parse.

Token parsers are wrapped in ``s()``, which skips whitespace and comments
first. Skipping only happens *before* a token, so a parser can still insist
that two tokens are adjacent.
"""

from __future__ import annotations

import functools
from typing import Callable, Mapping, Optional, TypeVar

from gnudate.errors import CommentTooDeepError, UnterminatedCommentError

T = TypeVar("T")

Parser = Callable[["Stream"], T]

DEFAULT_MAX_COMMENT_DEPTH = 100
DEFAULT_YEAR_PIVOT = 69

_DIGITS = frozenset("0123456789")

# Digit runs longer than this become SATURATED_INT. No date, time or offset
# accepts a value that large, so range checks and calendar arithmetic reject
# it as they would the exact number.
MAX_SIGNIFICANT_DIGITS = 18
SATURATED_INT = 10 ** MAX_SIGNIFICANT_DIGITS


class Backtrack(Exception):
    """Recoverable parse mismatch at ``position``."""

    def __init__(self, position: int) -> None:
        self.position = position
        super().__init__(position)


class Stream:
    """Cursor over an immutable input string.

    ``furthest`` is the deepest position a parser has failed at since it was
    last reset; the dispatcher reports it when no item matches.
    ``year_pivot`` decides the century of two-digit years: below it is
    20xx, from it upwards 19xx.
    """

    __slots__ = ("text", "pos", "furthest", "max_comment_depth", "year_pivot")

    def __init__(
        self,
        text: str,
        pos: int = 0,
        *,
        max_comment_depth: int = DEFAULT_MAX_COMMENT_DEPTH,
        year_pivot: int = DEFAULT_YEAR_PIVOT,
    ) -> None:
        self.text = text
        self.pos = pos
        self.furthest = pos
        self.max_comment_depth = max_comment_depth
        self.year_pivot = year_pivot

    def __repr__(self) -> str:
        return f"Stream(pos={self.pos}, rest={self.rest!r})"

    @property
    def rest(self) -> str:
        return self.text[self.pos:]

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self, count: int = 1) -> str:
        return self.text[self.pos:self.pos + count]

    def advance(self, count: int = 1) -> None:
        self.pos = min(self.pos + count, len(self.text))

    def take_while(self, predicate: Callable[[str], bool]) -> str:
        start = self.pos
        end = start
        length = len(self.text)
        while end < length and predicate(self.text[end]):
            end += 1
        self.pos = end
        return self.text[start:end]

    def backtrack(self, position: Optional[int] = None) -> Backtrack:
        """Build a ``Backtrack`` for ``position`` and remember it if deepest."""
        if position is None:
            position = self.pos
        if position > self.furthest:
            self.furthest = position
        return Backtrack(position)


# ---------------------------------------------------------------------------
# Combinators
# ---------------------------------------------------------------------------


def attempt(stream: Stream, parser: Parser[T]) -> Optional[T]:
    """Run ``parser``; on ``Backtrack`` restore the cursor and return None."""
    start = stream.pos
    try:
        return parser(stream)
    except Backtrack:
        stream.pos = start
        return None


def alt(stream: Stream, *parsers: Parser[T]) -> T:
    """Return the result of the first parser that matches."""
    start = stream.pos
    for parser in parsers:
        try:
            return parser(stream)
        except Backtrack:
            stream.pos = start
    raise stream.backtrack(start)


def s(parser: Parser[T]) -> Parser[T]:
    """Allow spaces and comments before ``parser``.

    Every token parser should be wrapped in this.
    """

    @functools.wraps(parser)
    def wrapper(stream: Stream) -> T:
        space(stream)
        return parser(stream)

    return wrapper


# ---------------------------------------------------------------------------
# Whitespace and comments
# ---------------------------------------------------------------------------


def space(stream: Stream) -> None:
    """Skip any interleaving of whitespace runs and comments."""
    while True:
        start = stream.pos
        stream.take_while(str.isspace)
        if stream.peek() == "(":
            comment(stream)
        if stream.pos == start:
            return


def comment(stream: Stream, depth: int = 1) -> None:
    """Skip one balanced comment, including any nested comments."""
    opened_at = stream.pos
    if depth > stream.max_comment_depth:
        raise CommentTooDeepError(
            f"Comment nesting exceeds {stream.max_comment_depth} levels",
            text=stream.text,
            position=opened_at,
        )
    if stream.peek() != "(":
        raise stream.backtrack()
    stream.advance()
    while True:
        char = stream.peek()
        if not char:
            raise UnterminatedCommentError(
                f"Comment opened at position {opened_at} is never closed",
                text=stream.text,
                position=opened_at,
            )
        if char == ")":
            stream.advance()
            return
        if char == "(":
            comment(stream, depth + 1)
        else:
            stream.take_while(lambda c: c not in "()")


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------


def tag(stream: Stream, literal: str, *, ignore_case: bool = False) -> str:
    """Match ``literal`` exactly at the cursor."""
    found = stream.peek(len(literal))
    matched = found.lower() == literal.lower() if ignore_case else found == literal
    if not found or not matched:
        raise stream.backtrack()
    stream.advance(len(literal))
    return found


def char_in(stream: Stream, choices: str) -> str:
    char = stream.peek()
    if not char or char not in choices:
        raise stream.backtrack()
    stream.advance()
    return char


def word(stream: Stream) -> str:
    """A maximal run of ASCII letters."""
    found = stream.take_while(lambda c: c.isascii() and c.isalpha())
    if not found:
        raise stream.backtrack()
    return found


def digits(stream: Stream) -> str:
    """A maximal run of ASCII digits."""
    found = stream.take_while(lambda c: c in _DIGITS)
    if not found:
        raise stream.backtrack()
    return found


def to_int(raw: str) -> int:
    """Convert a digit run, saturating runs too long to be a real quantity."""
    significant = raw.lstrip("0") or "0"
    if len(significant) > MAX_SIGNIFICANT_DIGITS:
        return SATURATED_INT
    return int(significant)


def unsigned_int(stream: Stream) -> int:
    return to_int(digits(stream))


def signed_int(stream: Stream) -> int:
    """A decimal integer with an optional ``+`` or ``-`` sign."""
    start = stream.pos
    sign = 1
    if stream.peek() in ("+", "-"):
        sign = -1 if stream.peek() == "-" else 1
        stream.advance()
    try:
        return sign * unsigned_int(stream)
    except Backtrack:
        raise stream.backtrack(start) from None


def keyword(stream: Stream, table: Mapping[str, T]) -> T:
    """A whole word looked up case-insensitively in ``table``."""
    start = stream.pos
    found = word(stream).lower()
    if found not in table:
        raise stream.backtrack(start)
    return table[found]


def lookup(table: Mapping[str, T]) -> Parser[T]:
    """Parser for ``keyword(stream, table)``."""

    def parser(stream: Stream) -> T:
        return keyword(stream, table)

    return parser


def end_of_word(stream: Stream) -> None:
    """Succeed only if the next character cannot continue a word."""
    char = stream.peek()
    if char and char.isascii() and char.isalnum():
        raise stream.backtrack()


__all__ = [
    "Backtrack",
    "DEFAULT_MAX_COMMENT_DEPTH",
    "DEFAULT_YEAR_PIVOT",
    "MAX_SIGNIFICANT_DIGITS",
    "Parser",
    "SATURATED_INT",
    "Stream",
    "alt",
    "attempt",
    "char_in",
    "comment",
    "digits",
    "end_of_word",
    "keyword",
    "lookup",
    "s",
    "signed_int",
    "space",
    "tag",
    "to_int",
    "unsigned_int",
    "word",
]
