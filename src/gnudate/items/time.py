"""Parse a time of day item.

The GNU docs say:

> A time of day item in date input strings specifies the time on a given
> day. Here are some examples, all of which represent the same time:
>
>     20:02:0
>     20:02
>     8:02pm
>     20:02-0500      # In EST (U.S. Eastern Standard Time).
>
> More generally, the time of day may be given as 'hour:minute:second',
> where hour is a number between 0 and 23, minute is a number between 0 and
> 59, and second is a number between 0 and 59 possibly followed by '.' or
> ',' and a fraction containing one or more digits. Alternatively,
> ':second' can be omitted, in which case it is taken to be zero.
>
> If the time is followed by 'am' or 'pm' (or 'a.m.' or 'p.m.'), hour is
> restricted to run from 1 to 12, and ':minute' may be omitted (taken to be
> zero).
>
> The time may alternatively be followed by a time zone correction,
> expressed as 'shhmm', where s is '+' or '-', hh is a number of zone hours
> and mm is a number of zone minutes.

A correction written directly after the time may also be ``shh``,
``shh:mm`` or ``Z``. When whitespace separates it from the time only the
unambiguous ``shhmm`` and ``shh:mm`` forms count, so ``10:30 -2 days``
still reads as a relative item.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Optional, Tuple

from gnudate.items.lexer import (
    Stream,
    alt,
    attempt,
    char_in,
    digits,
    end_of_word,
    s,
    tag,
)
from gnudate.models import TimeOfDay

_MAX_CORRECTION = timedelta(hours=24)


def meridiem(stream: Stream) -> str:
    """``am``, ``pm``, ``a.m.`` or ``p.m.``, in any case."""
    letter = char_in(stream, "aApP").lower()
    attempt(stream, _dot)
    tag(stream, "m", ignore_case=True)
    attempt(stream, _dot)
    end_of_word(stream)
    return f"{letter}m"


def _dot(stream: Stream) -> str:
    return tag(stream, ".")


_s_meridiem = s(meridiem)


def to_24_hour(hour: int, marker: Optional[str]) -> Optional[int]:
    """Convert to the 24-hour clock; None if out of range."""
    if marker is None:
        return hour if 0 <= hour <= 23 else None
    if not 1 <= hour <= 12:
        return None
    return hour % 12 + (12 if marker == "pm" else 0)


# ---------------------------------------------------------------------------
# Zone corrections
# ---------------------------------------------------------------------------


def _zulu(stream: Stream) -> timedelta:
    char_in(stream, "zZ")
    end_of_word(stream)
    return timedelta(0)


def _numeric_correction(stream: Stream, *, strict: bool) -> timedelta:
    start = stream.pos
    sign = -1 if char_in(stream, "+-") == "-" else 1
    raw = digits(stream)
    if len(raw) <= 2 and stream.peek() == ":":
        stream.advance()
        minutes_raw = digits(stream)
        if len(minutes_raw) != 2:
            raise stream.backtrack(start)
        hours, minutes = int(raw), int(minutes_raw)
    elif len(raw) == 4:
        hours, minutes = int(raw[:2]), int(raw[2:])
    elif len(raw) <= 2 and not strict:
        hours, minutes = int(raw), 0
    else:
        raise stream.backtrack(start)
    correction = timedelta(hours=hours, minutes=minutes)
    if minutes > 59 or correction >= _MAX_CORRECTION:
        raise stream.backtrack(start)
    return sign * correction


def _attached_correction(stream: Stream) -> timedelta:
    return _numeric_correction(stream, strict=False)


def _spaced_correction(stream: Stream) -> timedelta:
    return _numeric_correction(stream, strict=True)


def zone_correction(stream: Stream) -> timedelta:
    """Numeric UTC offset following a time, e.g. ``-0500`` or ``Z``."""
    return alt(stream, _zulu, _attached_correction, s(_spaced_correction))


# ---------------------------------------------------------------------------
# Times
# ---------------------------------------------------------------------------


def _fraction(stream: Stream) -> int:
    char_in(stream, ".,")
    raw = digits(stream)
    return int((raw + "000000")[:6])


def _seconds(stream: Stream) -> Tuple[int, int]:
    start = stream.pos
    tag(stream, ":")
    raw = digits(stream)
    if len(raw) > 2:
        raise stream.backtrack(start)
    microsecond = attempt(stream, _fraction)
    return int(raw), microsecond or 0


def _hour(stream: Stream) -> int:
    start = stream.pos
    raw = digits(stream)
    if len(raw) > 2:
        raise stream.backtrack(start)
    return int(raw)


def clock(stream: Stream, *, allow_meridiem: bool = True) -> TimeOfDay:
    """``hour:minute[:second[.fraction]]`` plus a meridiem or zone correction."""
    start = stream.pos
    hour = _hour(stream)
    tag(stream, ":")
    minute_raw = digits(stream)
    if len(minute_raw) != 2:
        raise stream.backtrack(start)
    second, microsecond = attempt(stream, _seconds) or (0, 0)

    marker = attempt(stream, _s_meridiem) if allow_meridiem else None
    correction = attempt(stream, zone_correction) if marker is None else None

    hour24 = to_24_hour(hour, marker)
    minute = int(minute_raw)
    if hour24 is None or minute > 59 or second > 59:
        raise stream.backtrack(start)
    return TimeOfDay(
        hour=hour24,
        minute=minute,
        second=second,
        microsecond=microsecond,
        meridiem=marker,
        utc_offset=correction,
    )


def _clock_item(stream: Stream) -> TimeOfDay:
    return clock(stream, allow_meridiem=True)


def hour_meridiem(stream: Stream) -> TimeOfDay:
    """A bare hour with a meridiem, e.g. ``8pm`` or ``11 a.m.``."""
    start = stream.pos
    hour = _hour(stream)
    marker = _s_meridiem(stream)
    hour24 = to_24_hour(hour, marker)
    if hour24 is None:
        raise stream.backtrack(start)
    return TimeOfDay(hour=hour24, meridiem=marker)


def _time(stream: Stream) -> TimeOfDay:
    return alt(stream, _clock_item, hour_meridiem)


parse = s(_time)
