"""Tests for the error hierarchy and user-facing messages."""

import pytest

from gnudate.errors import (
    CommentTooDeepError,
    DateParseError,
    GnuDateError,
    InvalidConfigError,
    InvalidDateError,
    ResolutionError,
    UnknownTimeZoneError,
    UnrecognizedItemError,
    format_error_for_cli,
    format_error_for_user,
    handle_error,
    is_recoverable,
)
from gnudate.errors.user_messages import ERROR_MESSAGES, RECOVERY_SUGGESTIONS, get_user_message


# ---------------------------------------------------------------------------
# Hierarchy
# ---------------------------------------------------------------------------


class TestErrorHierarchy:
    """Tests for error families and codes."""

    def test_parse_and_resolution_families_are_disjoint(self):
        assert issubclass(UnrecognizedItemError, DateParseError)
        assert issubclass(InvalidDateError, ResolutionError)
        assert not issubclass(InvalidDateError, DateParseError)
        assert not issubclass(UnrecognizedItemError, ResolutionError)

    def test_every_code_has_a_message_and_suggestion(self):
        for error_type in (
            GnuDateError,
            DateParseError,
            CommentTooDeepError,
            UnrecognizedItemError,
            ResolutionError,
            InvalidDateError,
            UnknownTimeZoneError,
            InvalidConfigError,
        ):
            assert error_type.code in ERROR_MESSAGES
            assert error_type.code in RECOVERY_SUGGESTIONS

    def test_default_message(self):
        assert str(InvalidDateError()) == "Invalid calendar date"

    def test_parse_error_records_position(self):
        error = UnrecognizedItemError("bad", text="today blah", position=6)
        assert error.position == 6
        assert error.details["position"] == 6
        assert error.to_dict()["position"] == 6
        assert error.to_dict()["code"] == "UNRECOGNIZED_ITEM"

    def test_recoverable(self):
        assert is_recoverable(InvalidDateError())
        assert not is_recoverable(InvalidConfigError())
        assert not is_recoverable(ValueError("plain"))


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------


class TestUserMessages:
    """Tests for message formatting."""

    def test_user_message_override(self):
        error = InvalidDateError(user_message="No such day.")
        assert error.user_message == "No such day."

    def test_unknown_error_fallback(self):
        assert get_user_message(KeyError("x")) == ERROR_MESSAGES["UNKNOWN_ERROR"]

    def test_handle_error_includes_suggestion(self):
        message = handle_error(UnknownTimeZoneError())
        assert message == format_error_for_user(UnknownTimeZoneError())
        assert "Suggestion: " in message

    def test_cli_format_points_at_position(self):
        error = UnrecognizedItemError("bad", text="today blah", position=6)
        lines = format_error_for_cli(error).splitlines()

        assert lines[0].startswith("Error [UNRECOGNIZED_ITEM]: ")
        assert lines[2] == "  today blah"
        assert lines[3] == "        ^"

    @pytest.mark.parametrize("error", [InvalidDateError(details={"year": 2023}), InvalidConfigError()])
    def test_cli_format_without_text(self, error):
        output = format_error_for_cli(error)
        assert "^" not in output
        assert f"Suggestion: {error.recovery_suggestion}" in output
