"""Parse a time zone item.

The GNU docs state:

> Normally, dates are interpreted using the rules of the current time zone,
> which in turn are specified by the TZ environment variable, or by a
> system default if TZ is not set. To specify a different set of default
> time zone rules that apply just to one date, start the date with a string
> of the form 'TZ="rule"'. The two quote characters ('"') must be present
> in the date, and any quotes or backslashes within rule must be escaped by
> a backslash.

POSIX rules with custom time zones are not supported; the rule is kept
verbatim and only looked up in the IANA database at resolution time.
"""

from __future__ import annotations

from gnudate.errors import InvalidEscapeError
from gnudate.items.lexer import Stream, s, tag
from gnudate.models import TimeZoneOverride

_ESCAPES = {"\\": "\\", '"': '"'}


def _time_zone(stream: Stream) -> TimeZoneOverride:
    tag(stream, 'TZ="')
    decoded = []
    while True:
        char = stream.peek()
        if not char:
            raise stream.backtrack()
        if char == '"':
            break
        if char == "\\":
            escaped = stream.text[stream.pos + 1:stream.pos + 2]
            if escaped not in _ESCAPES:
                raise InvalidEscapeError(
                    f"Unsupported escape {char + escaped!r} in time zone string",
                    text=stream.text,
                    position=stream.pos,
                )
            decoded.append(_ESCAPES[escaped])
            stream.advance(2)
            continue
        decoded.append(char)
        stream.advance()
    if not decoded:
        raise stream.backtrack()
    stream.advance()
    return TimeZoneOverride("".join(decoded))


parse = s(_time_zone)
