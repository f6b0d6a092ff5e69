"""Tests for calendar arithmetic."""

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from gnudate.calendar_engine import CalendarEngine
from gnudate.errors import DurationOverflowError, InvalidDateError
from gnudate.models import TimeUnit


@pytest.fixture
def calendar():
    return CalendarEngine()


class TestCheckDate:
    """Tests for date validation."""

    @pytest.mark.parametrize("year,month,day", [(2024, 2, 29), (2023, 12, 31), (1, 1, 1), (9999, 12, 31)])
    def test_valid_dates(self, calendar, year, month, day):
        calendar.check_date(year, month, day)

    @pytest.mark.parametrize("year,month,day", [(2023, 2, 29), (2024, 4, 31), (2024, 13, 1), (0, 1, 1), (10000, 1, 1)])
    def test_invalid_dates(self, calendar, year, month, day):
        with pytest.raises(InvalidDateError):
            calendar.check_date(year, month, day)

    def test_days_in_month(self, calendar):
        assert calendar.days_in_month(2024, 2) == 29
        assert calendar.days_in_month(2100, 2) == 28


class TestAddDuration:
    """Tests for relative arithmetic."""

    def test_month_clamps(self, calendar, utc):
        moment = datetime(2023, 1, 31, tzinfo=utc)
        assert calendar.add_duration(moment, 1, TimeUnit.MONTH) == datetime(2023, 2, 28, tzinfo=utc)

    def test_year_from_leap_day(self, calendar, utc):
        moment = datetime(2024, 2, 29, tzinfo=utc)
        assert calendar.add_duration(moment, 1, TimeUnit.YEAR) == datetime(2025, 2, 28, tzinfo=utc)

    def test_negative_week(self, calendar, utc):
        moment = datetime(2024, 1, 10, tzinfo=utc)
        assert calendar.add_duration(moment, -1, TimeUnit.WEEK) == datetime(2024, 1, 3, tzinfo=utc)

    def test_seconds_on_naive_time(self, calendar):
        moment = datetime(2024, 1, 1, 23, 59, 59)
        assert calendar.add_duration(moment, 1, TimeUnit.SECOND) == datetime(2024, 1, 2)

    def test_hours_across_dst_fall_back(self, calendar):
        zone = ZoneInfo("Europe/Amsterdam")
        moment = datetime(2024, 10, 27, 1, 30, tzinfo=zone)
        later = calendar.add_duration(moment, 2, TimeUnit.HOUR)
        assert (later.hour, later.minute) == (2, 30)
        assert later.utcoffset().total_seconds() == 3600

    def test_overflow(self, calendar, utc):
        with pytest.raises(DurationOverflowError):
            calendar.add_duration(datetime(9999, 12, 31, tzinfo=utc), 1, TimeUnit.DAY)


class TestNearestWeekday:
    """Tests for the day of the week rule."""

    def test_same_day_ordinal_zero(self, calendar, now):
        assert calendar.nearest_weekday(now, 2, 0) == now

    def test_same_day_ordinal_one_is_next_week(self, calendar, now):
        assert calendar.nearest_weekday(now, 2, 1).day == 7

    def test_second_occurrence(self, calendar, now):
        assert calendar.nearest_weekday(now, 4, 2).day == 9
