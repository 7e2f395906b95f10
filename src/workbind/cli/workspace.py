"""Workspace management CLI commands."""

from typing import Optional

import typer

from ..core.naming import to_workspace_id
from ..errors import WorkbindError
from ..services import create_workspace, rebind_workspace
from .common_options import provider_option
from .display import info, success, table
from .utils import fail, get_registry_context

app = typer.Typer(help="Manage workspaces", no_args_is_help=True)


@app.command()
def add(
    ctx: typer.Context,
    source: str = typer.Argument(..., help="Workspace source (local path, git URL or image)"),
    provider: Optional[str] = provider_option(),
    workspace_id: Optional[str] = typer.Option(
        None, "--id", help="Workspace ID (default: derived from the source)"
    ),
):
    """Register a workspace bound to a provider."""
    registry = get_registry_context(ctx)
    try:
        record = create_workspace(registry, source, provider, workspace_id)
    except WorkbindError as e:
        fail(e)
    success(f"Added workspace '{record.id}' bound to provider '{record.provider_name}'")


@app.command(name="list")
def list_workspaces(ctx: typer.Context):
    """List workspaces in the current context."""
    registry = get_registry_context(ctx)
    try:
        workspaces = registry.workspaces.list_workspaces()
    except WorkbindError as e:
        fail(e)

    table(
        "Workspaces",
        ["ID", "Provider", "Source"],
        [[w.id, w.provider_name, w.source] for w in workspaces],
    )


@app.command()
def rebind(
    ctx: typer.Context,
    workspace_name: str = typer.Argument(..., help="Workspace name or source path"),
    provider_name: str = typer.Argument(..., help="Provider to bind the workspace to"),
):
    """Rebind a workspace to a different provider.

    The provider must already exist in the current context.
    """
    registry = get_registry_context(ctx)
    workspace_id = to_workspace_id(workspace_name)

    try:
        result = rebind_workspace(registry, workspace_id, provider_name)
    except WorkbindError as e:
        fail(e)

    if result.changed:
        success(
            f"Workspace '{workspace_id}' rebound from provider "
            f"'{result.previous_provider}' to '{result.provider}'"
        )
    else:
        info(f"Workspace '{workspace_id}' is already bound to provider '{provider_name}'")


@app.command()
def delete(
    ctx: typer.Context,
    workspace_name: str = typer.Argument(..., help="Workspace name or source path"),
):
    """Remove a workspace record (the environment itself is left untouched)."""
    registry = get_registry_context(ctx)
    workspace_id = to_workspace_id(workspace_name)
    try:
        registry.workspaces.delete(workspace_id)
    except WorkbindError as e:
        fail(e)
    success(f"Deleted workspace '{workspace_id}'")
