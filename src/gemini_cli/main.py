import typer
from gemini_cli.commands import auth, config
from gemini_cli.commands.context import get_settings
from gemini_cli.config import SettingsError
from gemini_cli.logging import setup_logging, get_logger, log_application_event
from gemini_cli.utils.console import error

app = typer.Typer(
    help="[bold blue]Gemini CLI[/bold blue] - settings and authentication",
    rich_markup_mode="rich",
)

# Add command groups
app.add_typer(config.app, name="config")
app.add_typer(auth.app, name="auth")


@app.callback(invoke_without_command=True)
def callback(ctx: typer.Context):
    """
    [bold blue]Gemini CLI[/bold blue] - settings and authentication

    Inspect the layered settings and check the configured auth type.
    """
    if not ctx.invoked_subcommand:
        print("Welcome to the Gemini CLI! To proceed type gemini --help")
        return

    # Env files are applied here, before any command reads the environment
    try:
        get_settings()
    except SettingsError as e:
        log_application_event("Settings could not be loaded", level="error", details={"error": str(e)})
        error(str(e))
        raise typer.Exit(1)


def main():
    setup_logging()
    logger = get_logger("gemini_cli.main")
    logger.info("Gemini CLI started")

    try:
        app()
    except Exception as e:
        logger.error(f"Unhandled exception in main: {str(e)}")
        raise
    finally:
        logger.info("Gemini CLI finished")


if __name__ == "__main__":
    main()
