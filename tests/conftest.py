"""Shared fixtures for gnudate tests."""

from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from gnudate.configuration.settings import ParserSettings
from gnudate.reduction import ReductionEngine

_ENV_VARS = (
    "GNUDATE_DEFAULT_TIMEZONE",
    "GNUDATE_EMPTY_INPUT",
    "GNUDATE_MAX_COMMENT_DEPTH",
    "GNUDATE_TWO_DIGIT_YEAR_PIVOT",
    "GNUDATE_DATE_FORMAT",
    "GNUDATE_JSON_OUTPUT",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def utc():
    return ZoneInfo("UTC")


@pytest.fixture
def now(utc):
    """Wednesday 2024-01-31 09:30 UTC."""
    return datetime(2024, 1, 31, 9, 30, tzinfo=utc)


@pytest.fixture
def engine():
    return ReductionEngine(ParserSettings())
