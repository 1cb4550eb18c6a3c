"""
Settings commands.

Show the effective settings (optionally with the layer each value came
from), read a single key, and change a key in the user or workspace layer.
"""

import json
from typing import Any

import typer

from gemini_cli.config import PolicyViolation, SettingScope, SettingsError
from gemini_cli.config.document import iter_leaves
from gemini_cli.constants import SENSITIVE_KEYS
from gemini_cli.logging import get_logger, sanitize_data
from gemini_cli.utils.console import (
    console,
    create_table,
    display_json,
    error,
    success,
    warning,
)
from .context import get_settings

app = typer.Typer(help="Inspect and change settings")

WRITABLE_SCOPES = (SettingScope.USER, SettingScope.WORKSPACE)


def parse_value(raw: str) -> Any:
    """Interpret a command-line value as JSON, falling back to a plain string"""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


@app.command("show")
def show(
    sources: bool = typer.Option(
        False, "--sources", help="Show the settings layer each value comes from"
    ),
):
    """Show the effective settings"""
    try:
        effective = get_settings().merged
    except SettingsError as e:
        error(str(e))
        raise typer.Exit(1)

    data = sanitize_data(effective.data, SENSITIVE_KEYS)

    if not sources:
        display_json(data, "Effective settings")
        return

    table = create_table("Effective settings", ["Key", "Value", "Source"])
    for key, value in iter_leaves(data):
        scope = effective.source_of(key)
        source = scope.label if scope is not None else "-"
        if effective.is_pinned(key):
            source += " (enforced)"
        table.add_row(key, json.dumps(value), source)
    console.print(table)


@app.command("get")
def get(key: str = typer.Argument(..., help="Dotted settings key, e.g. security.auth.selectedType")):
    """Print one effective setting"""
    try:
        effective = get_settings().merged
    except SettingsError as e:
        error(str(e))
        raise typer.Exit(1)

    if key not in effective:
        warning(f"'{key}' is not set in any settings layer")
        raise typer.Exit(1)

    value = effective.get(key)
    console.print_json(json.dumps(sanitize_data({key: value}, SENSITIVE_KEYS)[key]))


@app.command("set")
def set_value(
    key: str = typer.Argument(..., help="Dotted settings key"),
    value: str = typer.Argument(..., help="New value; parsed as JSON when possible"),
    scope: str = typer.Option(
        "user", "--scope", help="Settings layer to write: user or workspace"
    ),
):
    """Change a setting in the user or workspace settings file"""
    logger = get_logger("gemini_cli.commands.config")

    try:
        target = SettingScope.from_label(scope)
    except ValueError as e:
        error(str(e))
        raise typer.Exit(1)

    if target not in WRITABLE_SCOPES:
        error(f"Only {' and '.join(s.label for s in WRITABLE_SCOPES)} settings can be changed")
        raise typer.Exit(1)

    try:
        settings = get_settings()
        settings.set_value(target, key, parse_value(value))
        path = settings.save(target)
    except PolicyViolation as e:
        logger.warning(f"Rejected change to enforced setting {key}")
        error(str(e))
        raise typer.Exit(1)
    except (SettingsError, ValueError, OSError) as e:
        logger.error(f"Failed to update {key}: {e}")
        error(f"Failed to update '{key}': {e}")
        raise typer.Exit(1)

    logger.info(f"Set {key} in {target.label} settings")
    success(f"Set '{key}' in {target.label} settings ({path})")
