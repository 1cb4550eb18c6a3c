"""
Authentication commands.

``status`` reports which auth type a session would use and whether its
credentials are present; ``validate`` is the gate scripts call before
starting a session and exits non-zero when requirements are not met.
"""

from typing import Optional

import typer

from gemini_cli.auth import (
    AuthType,
    check_enforced,
    resolve_base_url,
    resolve_default,
    resolve_non_interactive,
    validate,
)
from gemini_cli.auth.resolver import enforced_auth_type
from gemini_cli.config import SettingsError
from gemini_cli.constants import SELECTED_AUTH_TYPE_KEY, USE_EXTERNAL_AUTH_KEY
from gemini_cli.logging import get_logger
from gemini_cli.utils.console import (
    console,
    create_table,
    display_messages,
    error,
    success,
)
from .context import get_settings

app = typer.Typer(help="Inspect and validate authentication")


@app.command("status")
def status():
    """Show the resolved auth type and whether its credentials are present"""
    try:
        settings = get_settings()
        effective = settings.merged
        auth_type = resolve_default(effective, settings.env)
        enforced = enforced_auth_type(effective)
    except SettingsError as e:
        error(str(e))
        raise typer.Exit(1)

    outcome = validate(
        auth_type, settings.env, use_external=bool(effective.get(USE_EXTERNAL_AUTH_KEY))
    )
    source = effective.source_of(SELECTED_AUTH_TYPE_KEY)

    table = create_table("Authentication", ["Property", "Value"])
    table.add_row("Auth type", f"{auth_type.value} ({auth_type.description})")
    table.add_row("Selected in", source.label if source is not None else "environment / default")
    table.add_row("Enforced", enforced.value if enforced is not None else "no")
    table.add_row("Base URL", resolve_base_url(settings.env) or "default")
    table.add_row("Credentials", "present" if outcome.valid else "missing")
    console.print(table)

    if not outcome.valid:
        display_messages(outcome.messages, f"Missing credentials for {auth_type.value}")


@app.command("validate")
def validate_command(
    auth_type: Optional[str] = typer.Option(
        None,
        "--auth-type",
        help=f"Auth type to check: {', '.join(AuthType.values())}",
        case_sensitive=False,
    ),
    non_interactive: bool = typer.Option(
        False,
        "--non-interactive",
        help="Resolve the auth type as a scripted run would (no login fallback)",
    ),
):
    """Exit non-zero unless the auth type's credential requirements are met"""
    logger = get_logger("gemini_cli.commands.auth")

    try:
        settings = get_settings()
        effective = settings.merged
        if auth_type:
            requested = AuthType.parse(auth_type.lower())
            if requested is None:
                error(f"Invalid --auth-type '{auth_type}'. Use one of: {', '.join(AuthType.values())}")
                raise typer.Exit(1)
            check_enforced(effective, requested)
        elif non_interactive:
            requested = resolve_non_interactive(effective, settings.env)
        else:
            requested = resolve_default(effective, settings.env)
    except SettingsError as e:
        logger.warning(f"Auth resolution failed: {e}")
        error(str(e))
        raise typer.Exit(1)

    outcome = validate(
        requested, settings.env, use_external=bool(effective.get(USE_EXTERNAL_AUTH_KEY))
    )
    if not outcome.valid:
        display_messages(outcome.messages, f"Missing credentials for {requested.value}")
        raise typer.Exit(1)

    success(f"Credentials for '{requested.value}' are configured")
