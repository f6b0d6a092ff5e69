"""Parse GNU ``date --date`` expressions into resolved instants.

Usage:
    from datetime import datetime
    from zoneinfo import ZoneInfo

    from gnudate import resolve

    now = datetime(2024, 1, 31, 9, 30, tzinfo=ZoneInfo("Europe/Amsterdam"))
    resolve("1 month 1 day", now).moment   # 2024-03-01 09:30 +01:00
    resolve('TZ="Asia/Tokyo" next friday', now).moment
"""

from gnudate.calendar_engine import CalendarEngine
from gnudate.errors import (
    DateParseError,
    GnuDateError,
    ResolutionError,
)
from gnudate.models import (
    CalendarDate,
    CombinedDateTime,
    Item,
    ItemKind,
    PartialSpec,
    RelativeOffset,
    ResolvedInstant,
    TimeOfDay,
    TimeUnit,
    TimeZoneOverride,
    WeekdayRef,
)
from gnudate.reduction import ReductionEngine, apply_item, parse_items, resolve

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "resolve",
    "parse_items",
    "ReductionEngine",
    "CalendarEngine",
    "apply_item",
    # Errors
    "GnuDateError",
    "DateParseError",
    "ResolutionError",
    # Models
    "Item",
    "ItemKind",
    "CalendarDate",
    "TimeOfDay",
    "TimeZoneOverride",
    "CombinedDateTime",
    "WeekdayRef",
    "RelativeOffset",
    "TimeUnit",
    "PartialSpec",
    "ResolvedInstant",
]
