"""Shared utilities for CLI commands."""

import logging
from dataclasses import dataclass
from pathlib import Path

import typer
from rich.logging import RichHandler

from ..core.context import RegistryContext
from ..errors import WorkbindError
from .display import err_console, error, info


@dataclass
class GlobalOptions:
    """Options given before the sub-command, stored on the Typer context."""
    home: Path | None = None
    context: str | None = None
    debug: bool = False


def setup_logging(debug: bool = False) -> None:
    """Route library logging through rich on stderr.

    Args:
        debug: Log at DEBUG level instead of INFO
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=debug, markup=False)],
        force=True,
    )


def get_registry_context(ctx: typer.Context) -> RegistryContext:
    """Build the registry context for a command or exit with a message.

    Args:
        ctx: Typer context carrying GlobalOptions

    Returns:
        RegistryContext for the selected home and context

    Raises:
        typer.Exit: If the configuration cannot be loaded
    """
    options = ctx.find_object(GlobalOptions) or GlobalOptions()
    try:
        return RegistryContext.load(home=options.home, context=options.context)
    except WorkbindError as e:
        fail(e)


def fail(e: Exception, hint: str | None = None) -> None:
    """Report an error and exit with status 1.

    Raises:
        typer.Exit: Always
    """
    error(str(e))
    if hint:
        info(hint)
    raise typer.Exit(1)


def parse_options(values: list[str] | None) -> dict[str, str]:
    """Parse repeated ``KEY=VALUE`` options into a dictionary.

    Raises:
        typer.BadParameter: If a value has no ``=``
    """
    options = {}
    for value in values or []:
        key, sep, val = value.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected KEY=VALUE, got '{value}'", param_hint="--option")
        options[key.strip()] = val
    return options
