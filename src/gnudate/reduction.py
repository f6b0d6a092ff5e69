"""Fold parsed items into one resolved instant.

Resolution happens in two phases:

1. ``fold``: every item in the input is parsed and recorded in a
   ``PartialSpec``. Absolute items (date, time, zone, weekday) overwrite
   their slot, so the last one wins. Relative items accumulate in input
   order. Parse errors surface here and nothing is resolved.
2. ``resolve_spec``: the spec is applied to a reference "now" in a fixed
   order (date, time, weekday, relative offsets) regardless of the order
   the items were written in. Calendar errors surface here as
   ``ResolutionError``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone, tzinfo
from typing import List, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from gnudate.calendar_engine import CalendarEngine
from gnudate.configuration.settings import ParserSettings
from gnudate.items import iter_items
from gnudate.models import (
    CalendarDate,
    CombinedDateTime,
    Item,
    PartialSpec,
    RelativeOffset,
    ResolvedInstant,
    TimeOfDay,
    TimeZoneOverride,
    WeekdayRef,
)

logger = logging.getLogger(__name__)


class ReductionEngine:
    """Parse a date expression and resolve it against a reference time.

    Example:
        >>> engine = ReductionEngine()
        >>> engine.resolve("next friday 10am", now).moment
    """

    def __init__(
        self,
        settings: Optional[ParserSettings] = None,
        calendar: Optional[CalendarEngine] = None,
    ):
        self.settings = settings or ParserSettings()
        self.calendar = calendar or CalendarEngine()

    # ------------------------------------------------------------------
    # Phase 1: fold
    # ------------------------------------------------------------------

    def items(self, text: str) -> List[Item]:
        """Parse every item in ``text``."""
        return list(
            iter_items(
                text,
                max_comment_depth=self.settings.max_comment_depth,
                year_pivot=self.settings.two_digit_year_pivot,
            )
        )

    def fold(self, text: str) -> PartialSpec:
        """Parse ``text`` into a ``PartialSpec``.

        Raises:
            DateParseError: The text is not a valid date expression.
        """
        spec = PartialSpec()
        for item in iter_items(
            text,
            max_comment_depth=self.settings.max_comment_depth,
            year_pivot=self.settings.two_digit_year_pivot,
        ):
            apply_item(spec, item)
        logger.debug(f"Folded {spec.item_count} item(s) from {text!r}")
        return spec

    # ------------------------------------------------------------------
    # Phase 2: resolve
    # ------------------------------------------------------------------

    def resolve_spec(self, spec: PartialSpec, now: datetime, *, source: str = "") -> ResolvedInstant:
        """Apply ``spec`` to ``now``.

        A naive ``now`` is taken to be in ``settings.default_timezone``.

        Raises:
            ResolutionError: The spec names a date or offset that cannot be
                resolved.
        """
        if now.tzinfo is None:
            now = now.replace(tzinfo=self.settings.timezone)
        zone, zone_name = self._zone(spec, now)
        base = now.astimezone(zone)

        if spec.calendar_date is not None:
            calendar_date = spec.calendar_date
            year = base.year if calendar_date.year is None else calendar_date.year
            month, day = calendar_date.month, calendar_date.day
        else:
            year, month, day = base.year, base.month, base.day
        self.calendar.check_date(year, month, day)

        moment = self._apply_time(spec, base, zone, year, month, day)

        if spec.weekday_constraint is not None:
            moment = self.calendar.nearest_weekday(
                moment,
                spec.weekday_constraint.weekday,
                spec.weekday_constraint.ordinal,
            )

        for offset in spec.relative_offsets:
            moment = self.calendar.add_duration(moment, offset.quantity, offset.unit)

        logger.debug(f"Resolved {source!r} to {moment.isoformat()} in {zone_name}")
        return ResolvedInstant(moment=moment, zone=zone_name, source=source)

    def resolve(self, text: str, now: Optional[datetime] = None) -> ResolvedInstant:
        """Parse and resolve ``text``; ``now`` defaults to the current time."""
        spec = self.fold(text)
        if now is None:
            now = self.calendar.now(self.settings.timezone)
        return self.resolve_spec(spec, now, source=text)

    def _zone(self, spec: PartialSpec, now: datetime) -> Tuple[tzinfo, str]:
        if spec.zone_override is None:
            ambient = now.tzinfo
            return ambient, _zone_name(ambient, now)
        name = spec.zone_override
        try:
            return ZoneInfo(name), name
        except (ZoneInfoNotFoundError, ValueError, OSError):
            # Unknown rules read as UTC under the given name, as glibc does.
            logger.debug(f"No zone data for {name!r}; using UTC")
            return timezone(timedelta(0), name), name

    def _apply_time(
        self,
        spec: PartialSpec,
        base: datetime,
        zone: tzinfo,
        year: int,
        month: int,
        day: int,
    ) -> datetime:
        time_of_day = spec.time_of_day
        if time_of_day is not None:
            clock = (time_of_day.hour, time_of_day.minute, time_of_day.second, time_of_day.microsecond)
        elif self._defaults_to_midnight(spec):
            clock = (0, 0, 0, 0)
        else:
            clock = (base.hour, base.minute, base.second, base.microsecond)

        if time_of_day is not None and time_of_day.utc_offset is not None:
            fixed = datetime(year, month, day, *clock, tzinfo=timezone(time_of_day.utc_offset))
            return fixed.astimezone(zone)
        return self.calendar.normalize(datetime(year, month, day, *clock, tzinfo=zone))

    def _defaults_to_midnight(self, spec: PartialSpec) -> bool:
        if spec.calendar_date is not None or spec.weekday_constraint is not None:
            return True
        return spec.is_empty and self.settings.empty_input == "midnight"


def apply_item(spec: PartialSpec, item: Item) -> PartialSpec:
    """Record one item in ``spec``.

    Absolute categories keep only their last item; relative offsets are
    appended in input order.
    """
    if isinstance(item, CombinedDateTime):
        spec.calendar_date = item.date
        spec.time_of_day = item.time
    elif isinstance(item, CalendarDate):
        spec.calendar_date = item
    elif isinstance(item, TimeOfDay):
        spec.time_of_day = item
    elif isinstance(item, TimeZoneOverride):
        spec.zone_override = item.raw
    elif isinstance(item, WeekdayRef):
        spec.weekday_constraint = item
    elif isinstance(item, RelativeOffset):
        spec.relative_offsets.append(item)
    else:
        raise TypeError(f"Unknown item type: {type(item).__name__}")
    spec.item_count += 1
    return spec


def _zone_name(zone: tzinfo, moment: datetime) -> str:
    key = getattr(zone, "key", None)
    if key:
        return key
    return zone.tzname(moment) or str(zone)


def resolve(
    text: str,
    now: Optional[datetime] = None,
    *,
    settings: Optional[ParserSettings] = None,
) -> ResolvedInstant:
    """Resolve a GNU date expression.

    Args:
        text: The expression, e.g. ``"last friday 10:00"``.
        now: Reference time; the current time when omitted.
        settings: Parser settings; defaults when omitted.

    Returns:
        The resolved instant.

    Raises:
        DateParseError: ``text`` is not a valid date expression.
        ResolutionError: ``text`` parses but names no valid instant.
    """
    return ReductionEngine(settings).resolve(text, now)


def parse_items(text: str, *, settings: Optional[ParserSettings] = None) -> List[Item]:
    """Parse ``text`` into its items without resolving them."""
    return ReductionEngine(settings).items(text)
