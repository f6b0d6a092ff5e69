"""Data models for GNU date expression parsing.

This module defines the structures that flow through the parser:
- Item payloads, one frozen dataclass per item grammar
- PartialSpec, the accumulator folded from a sequence of items
- ResolvedInstant, the final point in time
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Union


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class ItemKind(Enum):
    """Lexical category of a parsed item."""

    DATE_TIME = "date_time"
    DATE = "date"
    TIME = "time"
    RELATIVE = "relative"
    WEEKDAY = "weekday"
    TIME_ZONE = "time_zone"


class TimeUnit(Enum):
    """Unit of a relative offset.

    Calendar units move the wall clock; clock units move elapsed time.
    """

    YEAR = "year"
    MONTH = "month"
    FORTNIGHT = "fortnight"
    WEEK = "week"
    DAY = "day"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"

    @property
    def is_calendar(self) -> bool:
        return self in _CALENDAR_UNITS


_CALENDAR_UNITS = frozenset({TimeUnit.YEAR, TimeUnit.MONTH, TimeUnit.FORTNIGHT, TimeUnit.WEEK, TimeUnit.DAY})

WEEKDAY_NAMES = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


# ---------------------------------------------------------------------------
# Item payloads
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CalendarDate:
    """A calendar date item such as ``2024-01-15`` or ``Jan 15``.

    ``year`` is None when the text gave only month and day. The day is only
    range-checked against 1-31 here; month length is a resolution concern.
    """

    kind: ClassVar[ItemKind] = ItemKind.DATE

    year: Optional[int]
    month: int
    day: int

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "year": self.year, "month": self.month, "day": self.day}


@dataclass(frozen=True)
class TimeOfDay:
    """A time of day item such as ``20:02:00.5`` or ``8pm``.

    ``hour`` is always on the 24-hour clock; ``meridiem`` keeps what was
    written. ``utc_offset`` is a numeric zone correction attached to the
    time (``20:02-0500``).
    """

    kind: ClassVar[ItemKind] = ItemKind.TIME

    hour: int
    minute: int = 0
    second: int = 0
    microsecond: int = 0
    meridiem: Optional[str] = None
    utc_offset: Optional[timedelta] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "hour": self.hour,
            "minute": self.minute,
            "second": self.second,
            "microsecond": self.microsecond,
            "meridiem": self.meridiem,
            "utc_offset": self.utc_offset.total_seconds() if self.utc_offset is not None else None,
        }


@dataclass(frozen=True)
class TimeZoneOverride:
    """A ``TZ="..."`` item; ``raw`` is the decoded, unvalidated zone name."""

    kind: ClassVar[ItemKind] = ItemKind.TIME_ZONE

    raw: str

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "raw": self.raw}


@dataclass(frozen=True)
class CombinedDateTime:
    """An ISO 8601 stamp such as ``2024-01-15T10:30:00``."""

    kind: ClassVar[ItemKind] = ItemKind.DATE_TIME

    date: CalendarDate
    time: TimeOfDay

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "date": self.date.to_dict(), "time": self.time.to_dict()}


@dataclass(frozen=True)
class WeekdayRef:
    """A day of the week item such as ``friday`` or ``third monday``.

    ``weekday`` follows ``datetime.weekday()``: 0 is Monday.
    """

    kind: ClassVar[ItemKind] = ItemKind.WEEKDAY

    weekday: int
    ordinal: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "weekday": WEEKDAY_NAMES[self.weekday],
            "ordinal": self.ordinal,
        }


@dataclass(frozen=True)
class RelativeOffset:
    """A relative item such as ``3 days ago`` or ``next month``."""

    kind: ClassVar[ItemKind] = ItemKind.RELATIVE

    quantity: int
    unit: TimeUnit

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "quantity": self.quantity, "unit": self.unit.value}


Item = Union[CombinedDateTime, CalendarDate, TimeOfDay, RelativeOffset, WeekdayRef, TimeZoneOverride]


# ---------------------------------------------------------------------------
# Reduction state and result
# ---------------------------------------------------------------------------


@dataclass
class PartialSpec:
    """Accumulator for a date expression before resolution.

    Absolute slots hold the last item of their category. Relative offsets
    are kept in input order and all of them are applied.
    """

    calendar_date: Optional[CalendarDate] = None
    time_of_day: Optional[TimeOfDay] = None
    zone_override: Optional[str] = None
    weekday_constraint: Optional[WeekdayRef] = None
    relative_offsets: List[RelativeOffset] = field(default_factory=list)
    item_count: int = 0

    @property
    def is_empty(self) -> bool:
        return self.item_count == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "calendar_date": self.calendar_date.to_dict() if self.calendar_date else None,
            "time_of_day": self.time_of_day.to_dict() if self.time_of_day else None,
            "zone_override": self.zone_override,
            "weekday_constraint": self.weekday_constraint.to_dict() if self.weekday_constraint else None,
            "relative_offsets": [offset.to_dict() for offset in self.relative_offsets],
            "item_count": self.item_count,
        }


@dataclass(frozen=True)
class ResolvedInstant:
    """The absolute point in time a date expression resolves to."""

    moment: datetime
    zone: str
    source: str = ""

    def isoformat(self) -> str:
        return self.moment.isoformat()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage."""
        return {
            "moment": self.moment.isoformat(),
            "zone": self.zone,
            "source": self.source,
        }
