import json
from typing import Any, Iterable, List

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

console = Console()


def success(message: str):
    """Display success message"""
    console.print(f"✔ {message}", style="bold green")


def error(message: str):
    """Display error message"""
    console.print(f"✖ {message}", style="bold red")


def warning(message: str):
    """Display warning message"""
    console.print(f"⚠  {message}", style="bold yellow")


def info(message: str):
    """Display info message"""
    console.print(f"{message}", style="cyan")


def create_table(title: str, columns: List[str]) -> Table:
    """Create a rich table"""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    for column in columns:
        table.add_column(column)
    return table


def display_json(data: Any, title: str, style: str = "blue"):
    """Display a settings value as highlighted JSON in a panel"""
    text = json.dumps(data, indent=2, sort_keys=True)
    console.print(Panel(Syntax(text, "json", word_wrap=True), title=title, border_style=style))


def display_messages(messages: Iterable[str], title: str, style: str = "red"):
    """Display remediation messages, one per line, in a panel"""
    console.print(Panel("\n".join(messages), title=title, border_style=style))
