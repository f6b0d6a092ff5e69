"""Centralized error definitions for gnudate.

Two failure families are kept strictly apart:

- ``DateParseError``: the text does not match the date grammar at some
  position (unterminated comment, unknown item, bad escape in a zone string).
- ``ResolutionError``: the text was grammatical but describes an instant
  that cannot exist (``Feb 30``, an overflowing offset) or an ambient zone
  with no zone data.

Usage:
    from gnudate.errors import GnuDateError, handle_error

    try:
        instant = resolve(text, now)
    except GnuDateError as e:
        print(handle_error(e))
"""

from __future__ import annotations

from gnudate.errors.user_messages import (
    format_error_for_cli,
    format_error_for_user,
    get_recovery_suggestion,
    get_user_message,
)


# =============================================================================
# Base Error
# =============================================================================


class GnuDateError(Exception):
    """Base exception for all gnudate errors.

    Attributes:
        code: Error code for categorization
        user_message: User-friendly message (optional override)
        recoverable: Whether the caller can fix the input and retry
        details: Additional error details for debugging
    """

    code: str = "GNUDATE_ERROR"
    default_message: str = "An unexpected error occurred"
    recoverable: bool = True

    def __init__(
        self,
        message: str | None = None,
        *,
        user_message: str | None = None,
        details: dict | None = None,
    ) -> None:
        self.message = message or self.default_message
        self._user_message = user_message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def user_message(self) -> str:
        """Get user-friendly message."""
        if self._user_message:
            return self._user_message
        return get_user_message(self)

    @property
    def recovery_suggestion(self) -> str:
        """Get recovery suggestion."""
        return get_recovery_suggestion(self)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "user_message": self.user_message,
            "recoverable": self.recoverable,
            "details": self.details,
        }


# =============================================================================
# Parse Errors
# =============================================================================


class DateParseError(GnuDateError):
    """The input does not match the date grammar.

    Attributes:
        text: The full input that was being parsed
        position: Character offset of the offending input
    """

    code = "PARSE_ERROR"
    default_message = "Invalid date expression"

    def __init__(
        self,
        message: str | None = None,
        *,
        text: str = "",
        position: int = 0,
        user_message: str | None = None,
        details: dict | None = None,
    ) -> None:
        self.text = text
        self.position = position
        details = dict(details or {})
        details.setdefault("position", position)
        super().__init__(message, user_message=user_message, details=details)

    def to_dict(self) -> dict:
        payload = super().to_dict()
        payload["position"] = self.position
        return payload


class UnterminatedCommentError(DateParseError):
    """A ``(`` comment was never closed."""

    code = "UNTERMINATED_COMMENT"
    default_message = "Unterminated comment"


class CommentTooDeepError(DateParseError):
    """Comment nesting exceeded the configured limit."""

    code = "COMMENT_TOO_DEEP"
    default_message = "Comments nested too deeply"


class InvalidEscapeError(DateParseError):
    """A ``TZ="..."`` string used an escape other than ``\\\\`` or ``\\"``."""

    code = "INVALID_ESCAPE"
    default_message = "Invalid escape sequence in time zone string"


class UnrecognizedItemError(DateParseError):
    """No item grammar matches at this position."""

    code = "UNRECOGNIZED_ITEM"
    default_message = "Unrecognized date item"


# =============================================================================
# Resolution Errors
# =============================================================================


class ResolutionError(GnuDateError):
    """The expression parsed, but does not describe a valid instant."""

    code = "RESOLUTION_ERROR"
    default_message = "Date expression could not be resolved"


class InvalidDateError(ResolutionError):
    """The calendar date does not exist (e.g. February 30)."""

    code = "INVALID_DATE"
    default_message = "Invalid calendar date"


class DurationOverflowError(ResolutionError):
    """Applying a relative offset left the representable range."""

    code = "DURATION_OVERFLOW"
    default_message = "Relative offset out of range"


class UnknownTimeZoneError(ResolutionError):
    """The ambient zone given to the CLI does not name a known time zone."""

    code = "UNKNOWN_TIME_ZONE"
    default_message = "Unknown time zone"


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(GnuDateError):
    """Base error for configuration issues."""

    code = "CONFIGURATION_ERROR"
    default_message = "Configuration error"
    recoverable = False


class InvalidConfigError(ConfigurationError):
    """Configuration file is invalid."""

    code = "INVALID_CONFIG"
    default_message = "Invalid configuration"


# =============================================================================
# Error Handler
# =============================================================================


def handle_error(error: Exception) -> str:
    """Handle an error and return a user-friendly message.

    Args:
        error: The exception to handle

    Returns:
        User-friendly error message with recovery suggestion
    """
    return format_error_for_user(error)


def is_recoverable(error: Exception) -> bool:
    """Check if an error is potentially recoverable.

    Args:
        error: The exception to check

    Returns:
        True if the error is recoverable
    """
    if isinstance(error, GnuDateError):
        return error.recoverable
    return False


__all__ = [
    # Base
    "GnuDateError",
    # Parse
    "DateParseError",
    "UnterminatedCommentError",
    "CommentTooDeepError",
    "InvalidEscapeError",
    "UnrecognizedItemError",
    # Resolution
    "ResolutionError",
    "InvalidDateError",
    "DurationOverflowError",
    "UnknownTimeZoneError",
    # Configuration
    "ConfigurationError",
    "InvalidConfigError",
    # Handlers
    "handle_error",
    "is_recoverable",
    "format_error_for_cli",
    "format_error_for_user",
]
