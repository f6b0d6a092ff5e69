"""Ordinal words and signed integers used as offsets.

``third friday``, ``next week`` and ``-2 days`` all start with an offset.
The word table is matched case-sensitively. ``second`` is not an ordinal
here: GNU reserves it for the time unit, so ``second monday`` reads as one
second plus ``monday`` (write ``2 monday``).
"""

from __future__ import annotations

from typing import Dict

from gnudate.items.lexer import Stream, alt, signed_int, word

ORDINAL_WORDS: Dict[str, int] = {
    "last": -1,
    "this": 0,
    "next": 1,
    "first": 1,
    "third": 3,
    "fourth": 4,
    "fifth": 5,
    "sixth": 6,
    "seventh": 7,
    "eighth": 8,
    "ninth": 9,
    "tenth": 10,
    "eleventh": 11,
    "twelfth": 12,
}


def text_offset(stream: Stream) -> int:
    start = stream.pos
    found = word(stream)
    if found not in ORDINAL_WORDS:
        raise stream.backtrack(start)
    return ORDINAL_WORDS[found]


def offset(stream: Stream) -> int:
    """Resolve an ordinal word, falling back to a signed decimal integer."""
    return alt(stream, text_offset, signed_int)
