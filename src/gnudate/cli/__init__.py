"""Command line entry points for gnudate."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import NoReturn, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import typer
from rich.console import Console
from rich.table import Table

from gnudate.calendar_engine import CalendarEngine
from gnudate.configuration.settings import (
    DEFAULT_CONFIG_PATH,
    Settings,
    bootstrap_settings,
    load_settings,
    resolve_settings,
)
from gnudate.errors import GnuDateError, UnknownTimeZoneError, format_error_for_cli
from gnudate.logging_config import configure_logging
from gnudate.reduction import ReductionEngine

console = Console()
cli = typer.Typer(help="Parse GNU date expressions")
config_app = typer.Typer(help="Manage gnudate configuration")
cli.add_typer(config_app, name="config")


def _fail(error: GnuDateError) -> NoReturn:
    typer.echo(format_error_for_cli(error), err=True)
    raise typer.Exit(code=1)


def _load(config_path: Path) -> Settings:
    try:
        return resolve_settings(config_path)
    except GnuDateError as exc:
        _fail(exc)


def _zone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        _fail(UnknownTimeZoneError(f"Unknown time zone {name!r}", details={"zone": name}))


def _reference_time(now: Optional[str], zone: ZoneInfo) -> datetime:
    if now is None:
        return CalendarEngine().now(zone)
    try:
        parsed = datetime.fromisoformat(now)
    except ValueError:
        raise typer.BadParameter(f"not an ISO 8601 time: {now!r}", param_hint="--now")
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=zone)
    return parsed.astimezone(zone)


@cli.command("parse")
def parse_command(
    text: str = typer.Argument(..., help="Date expression, e.g. 'next friday 10am'"),
    now: Optional[str] = typer.Option(None, "--now", help="Reference time in ISO 8601 (default: current time)"),
    tz: Optional[str] = typer.Option(None, "--tz", help="Ambient time zone (default: configured zone)"),
    date_format: Optional[str] = typer.Option(None, "--format", "-f", help="strftime format for the output"),
    json_output: bool = typer.Option(False, "--json", help="Emit JSON output"),
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log parser decisions to stderr"),
) -> None:
    """Resolve a date expression to an instant."""

    configure_logging(verbose)
    settings = _load(config_path)
    zone = _zone(tz or settings.parser.default_timezone)
    reference = _reference_time(now, zone)

    engine = ReductionEngine(settings.parser)
    try:
        result = engine.resolve(text, reference)
    except GnuDateError as exc:
        _fail(exc)

    date_format = date_format or settings.output.date_format
    if json_output or settings.output.json_output:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    elif date_format:
        typer.echo(result.moment.strftime(date_format))
    else:
        typer.echo(result.isoformat())


@cli.command("items")
def items_command(
    text: str = typer.Argument(..., help="Date expression to split into items"),
    json_output: bool = typer.Option(False, "--json", help="Emit JSON output"),
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log parser decisions to stderr"),
) -> None:
    """Show how a date expression is split into items."""

    configure_logging(verbose)
    settings = _load(config_path)
    engine = ReductionEngine(settings.parser)
    try:
        items = engine.items(text)
    except GnuDateError as exc:
        _fail(exc)

    if json_output:
        typer.echo(json.dumps([item.to_dict() for item in items], indent=2))
        return

    table = Table(title=f"Items in {text!r}")
    table.add_column("#", justify="right")
    table.add_column("Kind")
    table.add_column("Value")
    for index, item in enumerate(items, start=1):
        payload = item.to_dict()
        kind = payload.pop("kind")
        table.add_row(str(index), kind, ", ".join(f"{key}={value}" for key, value in payload.items()))
    console.print(table)


@config_app.command("init")
def init_config(
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config file"),
    default_timezone: Optional[str] = typer.Option(None, help="Override the default time zone"),
    empty_input: Optional[str] = typer.Option(None, help="'midnight' or 'now'"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file with defaults"),
) -> None:
    """Initialize the gnudate settings file."""

    overrides: dict = {}
    if default_timezone:
        overrides.setdefault("parser", {})["default_timezone"] = default_timezone
    if empty_input:
        overrides.setdefault("parser", {})["empty_input"] = empty_input

    try:
        settings = bootstrap_settings(path=config_path, overrides=overrides, force=force)
    except GnuDateError as exc:
        _fail(exc)
    typer.echo(f"Configuration initialized at {config_path}")
    typer.echo(_summarize_settings(settings))


@config_app.command("show")
def show_config(config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config")) -> None:
    """Display the effective configuration."""

    typer.echo(_summarize_settings(_load(config_path)))


@config_app.command("set")
def set_config(
    key: str = typer.Argument(..., help="Configuration key, e.g. parser.default_timezone"),
    value: str = typer.Argument(..., help="New value"),
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config"),
) -> None:
    """Update a configuration value."""

    try:
        settings = load_settings(config_path) if config_path.exists() else Settings()
        payload = settings.model_dump(mode="python")
        _assign(payload, key.split("."), value)
        bootstrap_settings(path=config_path, overrides=payload, force=True)
    except GnuDateError as exc:
        _fail(exc)
    typer.echo(f"Updated {key}")


def _summarize_settings(settings: Settings) -> str:
    data = settings.model_dump(mode="json")
    return json.dumps(data, indent=2)


def _assign(payload: dict, keys: list[str], value: str) -> None:
    current = payload
    for key in keys[:-1]:
        current = current.setdefault(key, {})
    current[keys[-1]] = value


__all__ = ["cli", "config_app"]
