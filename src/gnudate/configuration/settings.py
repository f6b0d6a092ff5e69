"""Typed settings management for gnudate.

Settings are wrapped in Pydantic models so the parser and the CLI can rely
on validated values. They are read from a JSON file, then environment
overrides are applied on top.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, ValidationError, field_validator

from gnudate.errors import InvalidConfigError
from gnudate.items.lexer import DEFAULT_MAX_COMMENT_DEPTH, DEFAULT_YEAR_PIVOT


DEFAULT_CONFIG_PATH = Path.home() / ".gnudate" / "config.json"


class ParserSettings(BaseModel):
    """Knobs for parsing and resolving date expressions."""

    default_timezone: str = Field("UTC", description="Zone for a naive 'now' and for the CLI")
    empty_input: Literal["midnight", "now"] = Field(
        "midnight", description="What an expression with no items resolves to"
    )
    max_comment_depth: int = Field(DEFAULT_MAX_COMMENT_DEPTH, ge=1, le=500)
    two_digit_year_pivot: int = Field(DEFAULT_YEAR_PIVOT, ge=0, le=100)

    @field_validator("default_timezone")
    def _validate_default_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
            raise ValueError(f"unknown time zone {value!r}") from exc
        return value

    @property
    def timezone(self) -> ZoneInfo:
        return ZoneInfo(self.default_timezone)


class OutputSettings(BaseModel):
    """How the CLI prints a resolved instant."""

    date_format: Optional[str] = Field(
        default=None, description="strftime format; ISO 8601 when unset"
    )
    json_output: bool = Field(False, description="Emit JSON instead of text")


class Settings(BaseModel):
    """Root configuration state."""

    parser: ParserSettings = Field(default_factory=ParserSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)


def load_settings(path: Path = DEFAULT_CONFIG_PATH) -> Settings:
    """Load settings from disk or raise if invalid."""

    if not path.exists():
        raise FileNotFoundError(f"Settings file not found at {path}")
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
        return Settings.model_validate(payload)
    except (json.JSONDecodeError, ValidationError) as exc:
        raise InvalidConfigError(f"Invalid configuration at {path}: {exc}", details={"path": str(path)}) from exc


def save_settings(settings: Settings, path: Path = DEFAULT_CONFIG_PATH) -> None:
    """Persist settings to disk."""

    payload = settings.model_dump(mode="json")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def resolve_settings(
    path: Path = DEFAULT_CONFIG_PATH,
    *,
    overrides: Optional[Dict[str, Any]] = None,
) -> Settings:
    """Load settings if the file exists, else defaults, then apply overrides.

    Nothing is written to disk.
    """

    settings = load_settings(path) if path.exists() else Settings()
    merged = settings.model_dump(mode="python")
    merged = _apply_overrides(merged, overrides or {})
    merged = _apply_env_overrides(merged)
    try:
        return Settings.model_validate(merged)
    except ValidationError as exc:
        raise InvalidConfigError(f"Invalid configuration overrides: {exc}") from exc


def bootstrap_settings(
    *,
    path: Path = DEFAULT_CONFIG_PATH,
    overrides: Optional[Dict[str, Any]] = None,
    force: bool = False,
) -> Settings:
    """Create the settings file (or load it) and persist explicit overrides."""

    if path.exists() and not force:
        settings = load_settings(path)
    else:
        settings = Settings()

    merged = _apply_overrides(settings.model_dump(mode="python"), overrides or {})
    try:
        resolved = Settings.model_validate(merged)
    except ValidationError as exc:
        raise InvalidConfigError(f"Invalid configuration overrides: {exc}") from exc
    save_settings(resolved, path)
    return resolved


def _apply_overrides(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = base.copy()
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _apply_overrides(merged[key], value)
        else:
            merged[key] = value
    return merged


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    parser = data.setdefault("parser", {})
    _set_env_override(parser, "default_timezone", "GNUDATE_DEFAULT_TIMEZONE")
    _set_env_override(parser, "empty_input", "GNUDATE_EMPTY_INPUT")
    _set_env_override(parser, "max_comment_depth", "GNUDATE_MAX_COMMENT_DEPTH", cast_int=True)
    _set_env_override(parser, "two_digit_year_pivot", "GNUDATE_TWO_DIGIT_YEAR_PIVOT", cast_int=True)

    output = data.setdefault("output", {})
    _set_env_override(output, "date_format", "GNUDATE_DATE_FORMAT")
    _set_env_override(output, "json_output", "GNUDATE_JSON_OUTPUT", cast_bool=True)
    return data


def _set_env_override(
    mapping: Dict[str, Any],
    key: str,
    env_name: str,
    *,
    cast_bool: bool = False,
    cast_int: bool = False,
) -> None:
    raw = os.getenv(env_name)
    if raw is None:
        return
    if cast_bool:
        mapping[key] = raw.lower() in {"1", "true", "yes"}
    elif cast_int:
        try:
            mapping[key] = int(raw)
        except ValueError as exc:
            raise InvalidConfigError(f"{env_name} must be an integer, got {raw!r}") from exc
    else:
        mapping[key] = raw
