"""Parse a day of the week item.

The GNU docs state:

> The explicit mention of a day of the week will forward the date (only if
> necessary) to reach that day of the week in the future.
>
> Days of the week may be spelled out in full: 'Sunday', 'Monday', etc or
> they may be abbreviated to their first three letters, optionally followed
> by a period. The special abbreviations 'Tues', 'Wednes', 'Thur' and
> 'Thurs' are also allowed.
>
> A number may precede a day of the week item to move forward supplementary
> weeks. It is best used in expression like 'third monday'. In this
> context, 'last day' or 'next day' is also acceptable; they move one week
> before or after the day that day by itself would represent.
>
> A comma following a day of the week item is ignored.
"""

from __future__ import annotations

from typing import Dict

from gnudate.items.lexer import Stream, attempt, keyword, s, tag
from gnudate.items.offset import offset
from gnudate.models import WeekdayRef

WEEKDAYS: Dict[str, int] = {
    "monday": 0,
    "mon": 0,
    "tuesday": 1,
    "tue": 1,
    "tues": 1,
    "wednesday": 2,
    "wed": 2,
    "wednes": 2,
    "thursday": 3,
    "thu": 3,
    "thur": 3,
    "thurs": 3,
    "friday": 4,
    "fri": 4,
    "saturday": 5,
    "sat": 5,
    "sunday": 6,
    "sun": 6,
}


def day_name(stream: Stream) -> int:
    return keyword(stream, WEEKDAYS)


def _dot(stream: Stream) -> str:
    return tag(stream, ".")


def _comma(stream: Stream) -> str:
    return tag(stream, ",")


_s_day_name = s(day_name)
_s_comma = s(_comma)


def _weekday(stream: Stream) -> WeekdayRef:
    ordinal = attempt(stream, offset)
    weekday = _s_day_name(stream)
    attempt(stream, _dot)
    attempt(stream, _s_comma)
    return WeekdayRef(weekday=weekday, ordinal=0 if ordinal is None else ordinal)


parse = s(_weekday)
