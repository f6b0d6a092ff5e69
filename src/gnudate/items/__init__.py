"""Item grammars and the item dispatcher.

From the GNU docs:

> A date is a string, possibly empty, containing many items separated by
> whitespace. The whitespace may be omitted when no ambiguity arises. The
> empty string means the beginning of today (i.e., midnight). Order of the
> items is immaterial. A date string may contain many flavors of items:
>  - calendar date items
>  - time of day items
>  - time zone items
>  - combined date and time of day items
>  - day of the week items
>  - relative items
>  - pure numbers.

Each flavor lives in its own module. Pure numbers are not supported.

The dispatcher tries the parsers in a fixed order. Several grammars share
numeric prefixes, so the order decides ambiguous input: a combined stamp
beats a bare date, and a date beats a time.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterator, Tuple

from gnudate.errors import UnrecognizedItemError
from gnudate.items import combined, date, relative, time, time_zone, weekday
from gnudate.items.lexer import (
    DEFAULT_MAX_COMMENT_DEPTH,
    DEFAULT_YEAR_PIVOT,
    Backtrack,
    Stream,
    space,
)
from gnudate.models import Item, ItemKind

logger = logging.getLogger(__name__)

ITEM_PARSERS: Tuple[Tuple[ItemKind, Callable[[Stream], Item]], ...] = (
    (ItemKind.DATE_TIME, combined.parse),
    (ItemKind.DATE, date.parse),
    (ItemKind.TIME, time.parse),
    (ItemKind.RELATIVE, relative.parse),
    (ItemKind.WEEKDAY, weekday.parse),
    (ItemKind.TIME_ZONE, time_zone.parse),
)


def parse_item(stream: Stream) -> Item:
    """Parse one item at the cursor.

    Raises:
        UnrecognizedItemError: No grammar matches; ``position`` is the
            furthest point any grammar reached.
        DateParseError: A grammar failed hard (bad comment or escape).
    """
    start = stream.pos
    stream.furthest = start
    for kind, parser in ITEM_PARSERS:
        try:
            item = parser(stream)
        except Backtrack:
            stream.pos = start
            continue
        logger.debug(f"Parsed {kind.value} item at {start}-{stream.pos}: {item}")
        return item

    space(stream)
    position = max(stream.furthest, stream.pos)
    stream.pos = start
    raise UnrecognizedItemError(
        f"Unrecognized date item at position {position}: {stream.text[position:]!r}",
        text=stream.text,
        position=position,
    )


def iter_items(
    text: str,
    *,
    max_comment_depth: int = DEFAULT_MAX_COMMENT_DEPTH,
    year_pivot: int = DEFAULT_YEAR_PIVOT,
) -> Iterator[Item]:
    """Lazily yield every item in ``text``.

    The whole string must be consumed; trailing text that is not an item
    raises instead of being ignored.
    """
    stream = Stream(text, max_comment_depth=max_comment_depth, year_pivot=year_pivot)
    while True:
        space(stream)
        if stream.at_end():
            return
        yield parse_item(stream)


__all__ = [
    "ITEM_PARSERS",
    "iter_items",
    "parse_item",
]
