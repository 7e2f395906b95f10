"""Configuration management CLI commands."""

import typer
from rich.syntax import Syntax

from ..core.naming import validate_context_name
from ..errors import WorkbindError
from .display import console, info_dict, section, success
from .utils import fail, get_registry_context

app = typer.Typer(help="Manage workbind configuration", no_args_is_help=True)


@app.command()
def show(ctx: typer.Context):
    """Display current configuration."""
    registry = get_registry_context(ctx)

    section(f"Configuration from {registry.config_path}")
    info_dict({"Home": registry.home, "Active context": registry.name})

    yaml_content = registry.config.to_yaml_string()
    console.print(Syntax(yaml_content, "yaml", theme="monokai", line_numbers=False))


@app.command(name="use-context")
def use_context(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Context to make the default"),
):
    """Set the default context."""
    registry = get_registry_context(ctx)
    try:
        validate_context_name(name)
        registry.config.default_context = name
        registry.config.ensure_context(name)
        registry.save_config()
    except WorkbindError as e:
        fail(e)
    success(f"Default context is now '{name}'")
