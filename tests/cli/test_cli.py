"""Tests for the gnudate command line."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from gnudate.cli import cli

runner = CliRunner()

NOW = "2024-01-31T09:30:00+00:00"


def invoke_parse(tmp_path: Path, *args: str):
    return runner.invoke(
        cli,
        ["parse", *args, "--now", NOW, "--config-path", str(tmp_path / "config.json")],
    )


def test_parse_prints_iso_timestamp(tmp_path: Path) -> None:
    result = invoke_parse(tmp_path, "2024-01-15 10:30")

    assert result.exit_code == 0, result.output
    assert result.output.strip() == "2024-01-15T10:30:00+00:00"


def test_parse_relative_to_now(tmp_path: Path) -> None:
    result = invoke_parse(tmp_path, "next friday 10am")

    assert result.exit_code == 0, result.output
    assert result.output.strip() == "2024-02-02T10:00:00+00:00"


def test_parse_with_ambient_zone(tmp_path: Path) -> None:
    result = invoke_parse(tmp_path, "10:00", "--tz", "Asia/Tokyo")

    assert result.exit_code == 0, result.output
    assert result.output.strip() == "2024-01-31T10:00:00+09:00"


def test_parse_naive_now_uses_ambient_zone(tmp_path: Path) -> None:
    result = runner.invoke(
        cli,
        [
            "parse",
            "today",
            "--now",
            "2024-07-01T08:00:00",
            "--tz",
            "Europe/Amsterdam",
            "--config-path",
            str(tmp_path / "config.json"),
        ],
    )

    assert result.exit_code == 0, result.output
    assert result.output.strip() == "2024-07-01T08:00:00+02:00"


def test_parse_format(tmp_path: Path) -> None:
    result = invoke_parse(tmp_path, "tomorrow", "--format", "%Y-%m-%d %H:%M")

    assert result.exit_code == 0, result.output
    assert result.output.strip() == "2024-02-01 09:30"


def test_parse_json(tmp_path: Path) -> None:
    result = invoke_parse(tmp_path, 'TZ="Europe/Paris" 2024-01-15', "--json")

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["moment"] == "2024-01-15T00:00:00+01:00"
    assert payload["zone"] == "Europe/Paris"
    assert payload["source"] == 'TZ="Europe/Paris" 2024-01-15'


def test_parse_error_points_at_position(tmp_path: Path) -> None:
    result = invoke_parse(tmp_path, "today blah")

    assert result.exit_code == 1
    assert "Error [UNRECOGNIZED_ITEM]" in result.output
    assert "        ^" in result.output


def test_resolution_error(tmp_path: Path) -> None:
    result = invoke_parse(tmp_path, "Feb 30 2023")

    assert result.exit_code == 1
    assert "Error [INVALID_DATE]" in result.output


def test_invalid_now(tmp_path: Path) -> None:
    result = runner.invoke(
        cli,
        ["parse", "today", "--now", "yesterday-ish", "--config-path", str(tmp_path / "config.json")],
    )

    assert result.exit_code != 0


def test_parse_uses_configured_output(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GNUDATE_DATE_FORMAT", "%d/%m/%Y")

    result = invoke_parse(tmp_path, "2024-01-15")

    assert result.exit_code == 0, result.output
    assert result.output.strip() == "15/01/2024"


def test_items_json(tmp_path: Path) -> None:
    result = runner.invoke(
        cli,
        ["items", "last friday 3 days ago", "--json", "--config-path", str(tmp_path / "config.json")],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload == [
        {"kind": "weekday", "weekday": "friday", "ordinal": -1},
        {"kind": "relative", "quantity": -3, "unit": "day"},
    ]


def test_items_table(tmp_path: Path) -> None:
    result = runner.invoke(cli, ["items", "2024-01-15T10:30", "--config-path", str(tmp_path / "config.json")])

    assert result.exit_code == 0, result.output
    assert "date_time" in result.output


def test_config_init_and_show(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"

    result = runner.invoke(
        cli,
        ["config", "init", "--config-path", str(config_path), "--default-timezone", "Europe/Paris"],
    )
    assert result.exit_code == 0, result.output
    assert config_path.exists()

    result = runner.invoke(cli, ["config", "show", "--config-path", str(config_path)])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["parser"]["default_timezone"] == "Europe/Paris"


def test_config_set(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"

    result = runner.invoke(cli, ["config", "set", "parser.max_comment_depth", "12", "--config-path", str(config_path)])

    assert result.exit_code == 0, result.output
    data = json.loads(config_path.read_text())
    assert data["parser"]["max_comment_depth"] == 12


def test_config_set_rejects_invalid_value(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"

    result = runner.invoke(
        cli,
        ["config", "set", "parser.default_timezone", "Mars/Olympus", "--config-path", str(config_path)],
    )

    assert result.exit_code == 1
    assert "INVALID_CONFIG" in result.output
    assert not config_path.exists()


def test_parse_unknown_ambient_zone(tmp_path: Path) -> None:
    result = invoke_parse(tmp_path, "today", "--tz", "Mars/Olympus")

    assert result.exit_code == 1
    assert "Error [UNKNOWN_TIME_ZONE]" in result.output


def test_parse_unknown_override_zone(tmp_path: Path) -> None:
    result = invoke_parse(tmp_path, 'TZ="Mars/Olympus" 2024-01-15 10:00', "--json")

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["zone"] == "Mars/Olympus"
    assert payload["moment"] == "2024-01-15T10:00:00+00:00"
