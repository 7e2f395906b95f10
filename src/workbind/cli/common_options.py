"""Common Typer options shared across CLI commands.

This module provides reusable option definitions to ensure consistency
and reduce duplication across CLI modules.
"""

import typer

from ..core.paths import HOME_ENV_VAR

CONTEXT_ENV_VAR = "WORKBIND_CONTEXT"


def home_option() -> typer.Option:
    """Create the global home directory option."""
    return typer.Option(
        None,
        "--home",
        envvar=HOME_ENV_VAR,
        help="workbind home directory (default: ~/.workbind)",
        file_okay=False,
        dir_okay=True,
    )


def context_option(help_text: str = "Context to operate in (default: from config)") -> typer.Option:
    """Create the global context option.

    Args:
        help_text: Custom help text

    Returns:
        Configured Typer Option
    """
    return typer.Option(None, "--context", "-c", envvar=CONTEXT_ENV_VAR, help=help_text)


def debug_option() -> typer.Option:
    """Create the global debug logging option."""
    return typer.Option(False, "--debug", help="Print debug logs")


def ignore_not_found_option() -> typer.Option:
    """Create the standard ignore-not-found flag."""
    return typer.Option(
        False, "--ignore-not-found", help="Treat a missing target as success"
    )


def force_option(help_text: str = "Skip safety checks") -> typer.Option:
    """Create the standard force flag."""
    return typer.Option(False, "--force", "-f", help=help_text)


def provider_option(help_text: str = "Provider name (default: context default)") -> typer.Option:
    """Create the standard provider option."""
    return typer.Option(None, "--provider", "-p", help=help_text)


__all__ = [
    "CONTEXT_ENV_VAR",
    "context_option",
    "debug_option",
    "force_option",
    "home_option",
    "ignore_not_found_option",
    "provider_option",
]
