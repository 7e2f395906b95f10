"""Consolidated display utilities for CLI commands."""
from typing import Any, Dict, List

from rich.console import Console
from rich.table import Table

console = Console()
err_console = Console(stderr=True)


def success(message: str) -> None:
    """Print success message."""
    console.print(f"[green]✓ {message}[/green]")


def warning(message: str) -> None:
    """Print warning message."""
    console.print(f"[yellow]⚠️  {message}[/yellow]")


def error(message: str) -> None:
    """Print error message."""
    console.print(f"[red]❌ {message}[/red]")


def info(message: str) -> None:
    """Print info message."""
    console.print(message)


def section(title: str) -> None:
    """Print section header."""
    console.print(f"\n[bold]{title}[/bold]")


def info_dict(data: Dict[str, Any], indent: str = "  ") -> None:
    """Print a dictionary as indented key-value pairs."""
    for key, value in data.items():
        console.print(f"{indent}{key}: {value}")


def table(title: str, columns: List[str], rows: List[List[Any]]) -> None:
    """Print rows as a table, or a dim note when there are none."""
    if not rows:
        console.print(f"[dim]No {title.lower()} found[/dim]")
        return
    t = Table(title=title)
    for column in columns:
        t.add_column(column)
    for row in rows:
        t.add_row(*(str(value) if value is not None else "" for value in row))
    console.print(t)
