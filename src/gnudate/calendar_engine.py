"""Calendar arithmetic used to resolve parsed date expressions.

All operations are pure functions of their arguments. Calendar units
(years, months, weeks, days) move the wall clock with ``relativedelta``, so
``Jan 31 + 1 month`` clamps to the last day of February. Clock units
(hours, minutes, seconds) move elapsed time, so ``+1 hour`` across a DST
change is still sixty minutes later.
"""

from __future__ import annotations

import calendar
import logging
from datetime import MAXYEAR, MINYEAR, datetime, timedelta, timezone, tzinfo
from typing import Optional

from dateutil.relativedelta import relativedelta

from gnudate.errors import DurationOverflowError, InvalidDateError
from gnudate.models import WEEKDAY_NAMES, TimeUnit

logger = logging.getLogger(__name__)


class CalendarEngine:
    """Stateless date arithmetic; one instance can be shared freely."""

    def days_in_month(self, year: int, month: int) -> int:
        return calendar.monthrange(year, month)[1]

    def check_date(self, year: int, month: int, day: int) -> None:
        """Raise ``InvalidDateError`` unless the date exists."""
        if not MINYEAR <= year <= MAXYEAR:
            raise InvalidDateError(
                f"Year {year} is outside {MINYEAR}-{MAXYEAR}",
                details={"year": year, "month": month, "day": day},
            )
        if not 1 <= month <= 12 or not 1 <= day <= self.days_in_month(year, month):
            raise InvalidDateError(
                f"{year:04d}-{month:02d}-{day:02d} is not a valid date",
                details={"year": year, "month": month, "day": day},
            )

    def normalize(self, moment: datetime) -> datetime:
        """Map a wall-clock time that falls in a DST gap onto a real instant."""
        if moment.tzinfo is None:
            return moment
        return moment.astimezone(timezone.utc).astimezone(moment.tzinfo)

    def add_duration(self, moment: datetime, quantity: int, unit: TimeUnit) -> datetime:
        """Move ``moment`` by ``quantity`` units.

        Raises:
            DurationOverflowError: The result is outside the supported range.
        """
        try:
            if unit.is_calendar:
                return self.normalize(moment + _calendar_delta(quantity, unit))
            if moment.tzinfo is None:
                return moment + _clock_delta(quantity, unit)
            elapsed = moment.astimezone(timezone.utc) + _clock_delta(quantity, unit)
            return elapsed.astimezone(moment.tzinfo)
        except (OverflowError, ValueError) as exc:
            raise DurationOverflowError(
                f"Adding {quantity} {unit.value}(s) to {moment.isoformat()} is out of range",
                details={"quantity": quantity, "unit": unit.value},
            ) from exc

    def nearest_weekday(self, moment: datetime, weekday: int, ordinal: int) -> datetime:
        """Move to ``weekday`` following GNU's day-of-week rule.

        Ordinal 0 keeps today if it matches, else moves forward to the next
        match. A positive ordinal counts matches forward, where the first
        match is never today. A negative ordinal counts matches backward,
        also never today.
        """
        current = moment.weekday()
        days = (weekday - current) % 7
        days += 7 * (ordinal - (1 if ordinal > 0 and current != weekday else 0))
        logger.debug(f"Moving {days} day(s) to {WEEKDAY_NAMES[weekday]} (ordinal {ordinal})")
        return self.add_duration(moment, days, TimeUnit.DAY)

    def now(self, tz: Optional[tzinfo] = None) -> datetime:
        """Current time, aware; in the local zone when ``tz`` is None."""
        if tz is None:
            return datetime.now().astimezone()
        return datetime.now(tz)


def _calendar_delta(quantity: int, unit: TimeUnit) -> relativedelta:
    if unit is TimeUnit.YEAR:
        return relativedelta(years=quantity)
    if unit is TimeUnit.MONTH:
        return relativedelta(months=quantity)
    if unit is TimeUnit.FORTNIGHT:
        return relativedelta(weeks=2 * quantity)
    if unit is TimeUnit.WEEK:
        return relativedelta(weeks=quantity)
    return relativedelta(days=quantity)


def _clock_delta(quantity: int, unit: TimeUnit) -> timedelta:
    if unit is TimeUnit.HOUR:
        return timedelta(hours=quantity)
    if unit is TimeUnit.MINUTE:
        return timedelta(minutes=quantity)
    return timedelta(seconds=quantity)
