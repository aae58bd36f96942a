# justlog/cli/commands/config.py
# Settings mgmt subcommands for Justlog CLI (list/get/set/reset/path) w/ JSON-backed storage

from __future__ import annotations

import json
from dataclasses import fields
from typing import Any
import typer

from ...config.settings import settings_manager, JustlogSettings
from ...core.exceptions import SettingsValidationError
from ...justlog_io.console import console
from ..app import app

# * Sub-app for config commands; registered on root app
config_app = typer.Typer(
    rich_markup_mode="rich", help="Manage Justlog settings"
)
app.add_typer(config_app, name="config")


# concise set of known keys for validation
def _known_keys() -> set[str]:
    return {f.name for f in fields(JustlogSettings)}


# coerce string value to JSON value (numbers, bools, null) or keep raw string
def _coerce_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


# * Print current settings & config path
def _print_current_settings() -> None:
    data = settings_manager.list_settings()

    console.print()
    console.print("[justlog.accent]Current Configuration[/]")
    console.print(f"[dim]Config file: {settings_manager.config_path}[/]")
    console.print()

    for key, value in data.items():
        console.print(f"  [dim]{key}:[/] {json.dumps(value)}")

    console.print()
    console.print(
        "[dim]Use [/][justlog.accent]justlog config --help[/][dim] to see available commands[/]"
    )


@config_app.callback(invoke_without_command=True)
def config_callback(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        _print_current_settings()


# * Get a specific setting value & print as JSON
@config_app.command()
def get(key: str) -> None:
    if key not in _known_keys():
        raise typer.BadParameter(f"Unknown setting: {key}")
    value = settings_manager.get(key)
    # print JSON for consistency (strings quoted)
    typer.echo(json.dumps(value))


# * Set a specific setting value; values are JSON-coerced when possible
@config_app.command(name="set")
def set_cmd(key: str, value: str) -> None:
    if key not in _known_keys():
        raise typer.BadParameter(f"Unknown setting: {key}")

    coerced = _coerce_value(value)
    try:
        settings_manager.set(key, coerced)
    except (SettingsValidationError, ValueError, TypeError) as e:
        raise typer.BadParameter(str(e))
    console.print(f"[justlog.active]Set {key}[/] = {json.dumps(coerced)}")


# * Reset all settings to defaults
@config_app.command()
def reset() -> None:
    settings_manager.reset()
    console.print("[justlog.active]Reset settings to defaults[/]")


# * Show the configuration file path
@config_app.command()
def path() -> None:
    typer.echo(str(settings_manager.config_path))


# * Explicit 'list' command to show current settings
@config_app.command(name="list")
def list_cmd() -> None:
    _print_current_settings()
