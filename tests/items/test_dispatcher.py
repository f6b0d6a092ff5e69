"""Tests for the item dispatcher."""

import pytest

from gnudate.errors import (
    CommentTooDeepError,
    DateParseError,
    InvalidEscapeError,
    UnrecognizedItemError,
    UnterminatedCommentError,
)
from gnudate.items import ITEM_PARSERS, iter_items
from gnudate.models import (
    CalendarDate,
    CombinedDateTime,
    ItemKind,
    RelativeOffset,
    TimeOfDay,
    TimeUnit,
    TimeZoneOverride,
    WeekdayRef,
)


def kinds(text):
    return [item.kind for item in iter_items(text)]


# ---------------------------------------------------------------------------
# Priority
# ---------------------------------------------------------------------------


class TestDispatchPriority:
    """Tests for the order in which grammars are tried."""

    def test_parser_order(self):
        assert [kind for kind, _ in ITEM_PARSERS] == [
            ItemKind.DATE_TIME,
            ItemKind.DATE,
            ItemKind.TIME,
            ItemKind.RELATIVE,
            ItemKind.WEEKDAY,
            ItemKind.TIME_ZONE,
        ]

    def test_combined_beats_date(self):
        assert kinds("2024-01-15T10:30") == [ItemKind.DATE_TIME]

    def test_space_separated_stamp_is_date_then_time(self):
        assert kinds("2024-01-15 10:30") == [ItemKind.DATE, ItemKind.TIME]

    def test_relative_beats_weekday_for_units(self):
        assert kinds("next day") == [ItemKind.RELATIVE]

    def test_weekday_after_failed_relative(self):
        assert kinds("next friday") == [ItemKind.WEEKDAY]

    def test_number_with_unit_is_relative(self):
        assert kinds("15 days") == [ItemKind.RELATIVE]


# ---------------------------------------------------------------------------
# Whole expressions
# ---------------------------------------------------------------------------


class TestIterItems:
    """Tests for splitting a whole expression into items."""

    def test_mixed_expression(self):
        items = list(iter_items('TZ="Asia/Tokyo" next friday 10:00 +2 hours'))
        assert items == [
            TimeZoneOverride("Asia/Tokyo"),
            WeekdayRef(weekday=4, ordinal=1),
            TimeOfDay(hour=10),
            RelativeOffset(quantity=2, unit=TimeUnit.HOUR),
        ]

    def test_items_without_whitespace(self):
        items = list(iter_items("2024-01-15T10:30:00Z"))
        assert isinstance(items[0], CombinedDateTime)

    def test_comments_are_inert(self):
        plain = list(iter_items("Nov 14 2022 10:30"))
        commented = list(iter_items("(start) Nov 14 (the (nested) day) 2022 10:30 (end)"))
        assert commented == plain

    @pytest.mark.parametrize("text", ["", "   ", "(only a comment)", "\t(a) (b)\n"])
    def test_empty_expressions(self, text):
        assert list(iter_items(text)) == []

    def test_date_only(self):
        assert list(iter_items("Feb 30")) == [CalendarDate(None, 2, 30)]


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestDispatchErrors:
    """Tests for parse failures."""

    def test_unrecognized_item_position(self):
        with pytest.raises(UnrecognizedItemError) as exc:
            list(iter_items("2024-01-15 blah"))
        assert exc.value.position == 11
        assert exc.value.text == "2024-01-15 blah"

    def test_unrecognized_item_is_a_parse_error(self):
        with pytest.raises(DateParseError):
            list(iter_items("someday"))

    def test_unterminated_comment(self):
        with pytest.raises(UnterminatedCommentError) as exc:
            list(iter_items("2024-01-15 (oops"))
        assert exc.value.position == 11

    def test_comment_depth_limit(self):
        with pytest.raises(CommentTooDeepError):
            list(iter_items("((x)) today", max_comment_depth=1))

    def test_invalid_escape(self):
        with pytest.raises(InvalidEscapeError) as exc:
            list(iter_items('TZ="Bad\\x"'))
        assert exc.value.position == 7

    @pytest.mark.parametrize("text", ['TZ=""', 'TZ="Europe/Paris', "13pm", "Next friday", "10"])
    def test_rejected_expressions(self, text):
        with pytest.raises(UnrecognizedItemError):
            list(iter_items(text))

    def test_error_after_valid_items_is_raised_lazily(self):
        items = iter_items("today blah")
        assert next(items) == RelativeOffset(quantity=0, unit=TimeUnit.DAY)
        with pytest.raises(UnrecognizedItemError):
            next(items)
