"""User-friendly error messages for gnudate.

This module provides human-readable error messages and recovery suggestions
for all error types, so CLI users never see a bare traceback for a typo in
a date string.
"""

from __future__ import annotations

from typing import Any


# =============================================================================
# Error Message Catalog
# =============================================================================

ERROR_MESSAGES: dict[str, str] = {
    # Parse errors
    "PARSE_ERROR": "The date expression could not be parsed.",
    "UNTERMINATED_COMMENT": "A comment opened with '(' is never closed.",
    "COMMENT_TOO_DEEP": "Comments are nested too deeply.",
    "INVALID_ESCAPE": "The TZ=\"...\" string contains an unsupported escape.",
    "UNRECOGNIZED_ITEM": "Part of the date expression was not understood.",
    # Resolution errors
    "RESOLUTION_ERROR": "The date expression does not describe a valid time.",
    "INVALID_DATE": "That calendar date does not exist.",
    "DURATION_OVERFLOW": "The relative offset moves the date out of range.",
    "UNKNOWN_TIME_ZONE": "The ambient time zone is not known.",
    # Configuration errors
    "CONFIGURATION_ERROR": "There's a configuration issue.",
    "INVALID_CONFIG": "The configuration is invalid. Check settings.",
    # Generic
    "GNUDATE_ERROR": "An unexpected error occurred.",
    "UNKNOWN_ERROR": "Something went wrong.",
}


# =============================================================================
# Recovery Suggestions
# =============================================================================

RECOVERY_SUGGESTIONS: dict[str, str] = {
    # Parse errors
    "PARSE_ERROR": "Check the expression against the GNU date input formats.",
    "UNTERMINATED_COMMENT": "Balance every '(' with a matching ')'.",
    "COMMENT_TOO_DEEP": "Flatten the nested comments or raise max_comment_depth.",
    "INVALID_ESCAPE": "Only \\\\ and \\\" may be escaped inside TZ=\"...\".",
    "UNRECOGNIZED_ITEM": "Use forms like '2024-01-15', '10:30pm', 'next friday' or '3 days ago'.",
    # Resolution errors
    "RESOLUTION_ERROR": "Check that the date and offsets make sense together.",
    "INVALID_DATE": "Check the day against the length of the month.",
    "DURATION_OVERFLOW": "Use a smaller relative offset.",
    "UNKNOWN_TIME_ZONE": "Use an IANA zone name such as --tz Europe/Amsterdam.",
    # Configuration errors
    "CONFIGURATION_ERROR": "Check config: gnudate config show",
    "INVALID_CONFIG": "Reset to defaults: gnudate config init --force",
    # Generic
    "GNUDATE_ERROR": "If this persists, please report the issue.",
    "UNKNOWN_ERROR": "If this persists, please report the issue.",
}


# =============================================================================
# Helper Functions
# =============================================================================


def _error_code(error: Any) -> str:
    if hasattr(error, "code"):
        return error.code
    if isinstance(error, str):
        return error
    return type(error).__name__.upper()


def get_user_message(error: Any) -> str:
    """Get user-friendly message for an error.

    Args:
        error: The error (can be Exception or error code string)

    Returns:
        User-friendly error message
    """
    return ERROR_MESSAGES.get(_error_code(error), ERROR_MESSAGES["UNKNOWN_ERROR"])


def get_recovery_suggestion(error: Any) -> str:
    """Get recovery suggestion for an error.

    Args:
        error: The error (can be Exception or error code string)

    Returns:
        Recovery suggestion
    """
    return RECOVERY_SUGGESTIONS.get(_error_code(error), RECOVERY_SUGGESTIONS["UNKNOWN_ERROR"])


def format_error_for_user(error: Any) -> str:
    """Format a complete user-friendly error message.

    Args:
        error: The error to format

    Returns:
        Complete error message with recovery suggestion
    """
    message = get_user_message(error)
    suggestion = get_recovery_suggestion(error)

    return f"{message}\n\nSuggestion: {suggestion}"


def format_error_for_cli(error: Any) -> str:
    """Format error for CLI output.

    Parse errors point at the offending character with a caret under the
    echoed input.

    Args:
        error: The error to format

    Returns:
        CLI-formatted error message
    """
    message = get_user_message(error)
    suggestion = get_recovery_suggestion(error)
    code = getattr(error, "code", "ERROR")

    lines = [f"Error [{code}]: {message}"]

    text = getattr(error, "text", None)
    position = getattr(error, "position", None)
    if text and position is not None:
        lines.append("")
        lines.append(f"  {text}")
        lines.append("  " + " " * min(position, len(text)) + "^")

    lines.append("")
    lines.append(f"Suggestion: {suggestion}")

    details = getattr(error, "details", None)
    if details:
        lines.append("")
        lines.append("Details:")
        for key, value in details.items():
            lines.append(f"  {key}: {value}")

    return "\n".join(lines)
