"""Configuration loading utilities for gnudate."""

from .settings import (
    DEFAULT_CONFIG_PATH,
    OutputSettings,
    ParserSettings,
    Settings,
    bootstrap_settings,
    load_settings,
    resolve_settings,
    save_settings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "OutputSettings",
    "ParserSettings",
    "Settings",
    "bootstrap_settings",
    "load_settings",
    "resolve_settings",
    "save_settings",
]
