"""workbind CLI entry point."""

from pathlib import Path
from typing import Optional

import typer

from ..errors import WorkbindError
from . import config as config_cli
from . import provider, workspace
from .common_options import context_option, debug_option, home_option
from .display import error, info, warning
from .utils import GlobalOptions, setup_logging

# Create main CLI app
app = typer.Typer(
    name="wbind",
    help="Manage workspaces and the providers they are bound to",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.add_typer(provider.app, name="provider", help="Manage providers")
app.add_typer(workspace.app, name="workspace", help="Manage workspaces")
app.add_typer(config_cli.app, name="config", help="⚙️ Configure workbind settings")


@app.callback()
def global_options(
    ctx: typer.Context,
    home: Optional[Path] = home_option(),
    context: Optional[str] = context_option(),
    debug: bool = debug_option(),
):
    """Global options shared by every command."""
    setup_logging(debug)
    ctx.obj = GlobalOptions(home=home, context=context, debug=debug)


@app.command()
def version():
    """Show workbind version."""
    from .. import __version__
    info(f"workbind version: {__version__}")


def main():
    """Main CLI entry point."""
    try:
        app()
    except KeyboardInterrupt:
        warning("\nInterrupted by user")
        raise SystemExit(1)
    except WorkbindError as e:
        error(f"Error: {e}")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
