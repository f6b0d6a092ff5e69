"""Parse a relative item.

The GNU docs state:

> The unit of time displacement may be selected by the string 'year' or
> 'month' for moving by whole years or months. These are fuzzy units, as
> years and months are not all of equal duration. More precise units are
> 'fortnight' which is worth 14 days, 'week' worth 7 days, 'day' worth 24
> hours, 'hour' worth 60 minutes, 'minute' or 'min' worth 60 seconds, and
> 'second' or 'sec' worth one second. An 's' suffix on these units is
> accepted and ignored.
>
> The unit of time may be preceded by a multiplier, given as an optionally
> signed number. Unsigned numbers are taken as positively signed. No number
> at all implies 1 for a multiplier. Following a relative item by the
> string 'ago' is equivalent to preceding the unit by a multiplier with
> value -1.
>
> The string 'tomorrow' is worth one day in the future (equivalent to
> 'day'), the string 'yesterday' is worth one day in the past (equivalent
> to 'day ago').
>
> The strings 'now' or 'today' are relative items corresponding to
> zero-valued time displacement.
"""

from __future__ import annotations

from typing import Dict

from gnudate.items.lexer import Stream, alt, attempt, keyword, lookup, s
from gnudate.items.offset import offset
from gnudate.models import RelativeOffset, TimeUnit

UNITS: Dict[str, TimeUnit] = {
    "year": TimeUnit.YEAR,
    "years": TimeUnit.YEAR,
    "month": TimeUnit.MONTH,
    "months": TimeUnit.MONTH,
    "fortnight": TimeUnit.FORTNIGHT,
    "fortnights": TimeUnit.FORTNIGHT,
    "week": TimeUnit.WEEK,
    "weeks": TimeUnit.WEEK,
    "day": TimeUnit.DAY,
    "days": TimeUnit.DAY,
    "hour": TimeUnit.HOUR,
    "hours": TimeUnit.HOUR,
    "minute": TimeUnit.MINUTE,
    "minutes": TimeUnit.MINUTE,
    "min": TimeUnit.MINUTE,
    "mins": TimeUnit.MINUTE,
    "second": TimeUnit.SECOND,
    "seconds": TimeUnit.SECOND,
    "sec": TimeUnit.SECOND,
    "secs": TimeUnit.SECOND,
}

DAY_WORDS: Dict[str, int] = {
    "yesterday": -1,
    "today": 0,
    "now": 0,
    "tomorrow": 1,
}

_s_unit = s(lookup(UNITS))
_s_ago = s(lookup({"ago": True}))


def _day_word(stream: Stream) -> RelativeOffset:
    return RelativeOffset(quantity=keyword(stream, DAY_WORDS), unit=TimeUnit.DAY)


def _displacement(stream: Stream) -> RelativeOffset:
    quantity = attempt(stream, offset)
    unit = _s_unit(stream)
    if quantity is None:
        quantity = 1
    if attempt(stream, _s_ago) is not None:
        quantity = -quantity
    return RelativeOffset(quantity=quantity, unit=unit)


def _relative(stream: Stream) -> RelativeOffset:
    return alt(stream, _day_word, _displacement)


parse = s(_relative)
