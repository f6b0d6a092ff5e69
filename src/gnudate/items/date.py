"""Parse a calendar date item.

The GNU docs state:

> A calendar date item specifies a day of the year. It is specified
> differently, depending on whether the month is specified numerically or
> literally.

Accepted forms::

    2022-11-14      ISO 8601
    22-11-14        two-digit ISO year
    11/14/2022      US
    11/14           US, year omitted
    14 November 2022
    14 Nov 2022
    14-nov-2022
    November 14, 2022
    Nov 14 2022
    nov-14-2022
    November 14     year omitted
    14 Nov          year omitted

Only 1-31 is enforced for the day. Whether the day exists in that month is
checked when the expression is resolved, so ``Feb 30`` parses.
"""

from __future__ import annotations

from typing import Dict, Optional

from gnudate.items.lexer import (
    Stream,
    alt,
    attempt,
    digits,
    keyword,
    s,
    tag,
    to_int,
    unsigned_int,
)
from gnudate.models import CalendarDate

MONTHS: Dict[str, int] = {
    "january": 1,
    "jan": 1,
    "february": 2,
    "feb": 2,
    "march": 3,
    "mar": 3,
    "april": 4,
    "apr": 4,
    "may": 5,
    "june": 6,
    "jun": 6,
    "july": 7,
    "jul": 7,
    "august": 8,
    "aug": 8,
    "september": 9,
    "sept": 9,
    "sep": 9,
    "october": 10,
    "oct": 10,
    "november": 11,
    "nov": 11,
    "december": 12,
    "dec": 12,
}


def to_year(raw: str, pivot: int) -> int:
    """Interpret a written year; exactly two digits select a century."""
    value = to_int(raw)
    if len(raw) == 2:
        return value + (1900 if value >= pivot else 2000)
    return value


def _dot(stream: Stream) -> str:
    return tag(stream, ".")


def _dash(stream: Stream) -> str:
    return tag(stream, "-")


def _comma(stream: Stream) -> str:
    return tag(stream, ",")


def month_name(stream: Stream) -> int:
    month = keyword(stream, MONTHS)
    attempt(stream, _dot)
    return month


def _year(stream: Stream) -> int:
    return to_year(digits(stream), stream.year_pivot)


def _free_year(stream: Stream) -> int:
    """A year separated only by space; must not be the hour of a time."""
    start = stream.pos
    raw = digits(stream)
    following = stream.peek()
    if len(raw) < 2 or following == ":" or following.isalpha():
        raise stream.backtrack(start)
    return to_year(raw, stream.year_pivot)


def _dash_year(stream: Stream) -> int:
    _dash(stream)
    return _free_year(stream)


def _comma_year(stream: Stream) -> int:
    _s_comma(stream)
    return _s_year(stream)


def _slash_year(stream: Stream) -> int:
    tag(stream, "/")
    return _year(stream)


_s_comma = s(_comma)
_s_year = s(_year)
_s_free_year = s(_free_year)
_s_month_name = s(month_name)
_s_day = s(unsigned_int)


def _checked(stream: Stream, start: int, year: Optional[int], month: int, day: int) -> CalendarDate:
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        raise stream.backtrack(start)
    return CalendarDate(year=year, month=month, day=day)


def iso(stream: Stream) -> CalendarDate:
    """``year-month-day`` with no whitespace inside."""
    start = stream.pos
    year = _year(stream)
    _dash(stream)
    month = unsigned_int(stream)
    _dash(stream)
    day = unsigned_int(stream)
    return _checked(stream, start, year, month, day)


def us(stream: Stream) -> CalendarDate:
    """``month/day`` with an optional ``/year``."""
    start = stream.pos
    month = unsigned_int(stream)
    tag(stream, "/")
    day = unsigned_int(stream)
    year = attempt(stream, _slash_year)
    return _checked(stream, start, year, month, day)


def day_month(stream: Stream) -> CalendarDate:
    """``14 Nov 2022``, ``14-nov-2022`` and ``14 Nov``."""
    start = stream.pos
    day = unsigned_int(stream)
    if attempt(stream, _dash) is not None:
        month = month_name(stream)
        year = attempt(stream, _dash_year)
    else:
        month = _s_month_name(stream)
        year = attempt(stream, _s_free_year)
    return _checked(stream, start, year, month, day)


def month_day(stream: Stream) -> CalendarDate:
    """``Nov 14, 2022``, ``Nov 14 2022``, ``nov-14-2022`` and ``Nov 14``."""
    start = stream.pos
    month = month_name(stream)
    if attempt(stream, _dash) is not None:
        day = unsigned_int(stream)
        year = attempt(stream, _dash_year)
    else:
        day = _s_day(stream)
        year = attempt(stream, _comma_year)
        if year is None:
            year = attempt(stream, _s_free_year)
    return _checked(stream, start, year, month, day)


def _date(stream: Stream) -> CalendarDate:
    return alt(stream, iso, us, day_month, month_day)


parse = s(_date)
