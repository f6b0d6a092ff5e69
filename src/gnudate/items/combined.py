"""Parse a combined date and time of day item.

The GNU docs state:

> The ISO 8601 date and time of day extended format consists of an ISO 8601
> date, a 'T' character separator, and an ISO 8601 time of day. This format
> is also recognized if the 'T' is replaced by a space.

The space-separated variant needs no grammar of its own: it is read as a
date item followed by a time item, which resolves identically. This parser
must run before the date and time parsers, since its prefix is a valid date.
"""

from __future__ import annotations

from gnudate.items import date, time
from gnudate.items.lexer import Stream, char_in, s
from gnudate.models import CombinedDateTime


def _combined(stream: Stream) -> CombinedDateTime:
    date_value = date.iso(stream)
    char_in(stream, "Tt")
    time_value = time.clock(stream, allow_meridiem=False)
    return CombinedDateTime(date=date_value, time=time_value)


parse = s(_combined)
