"""Provider management CLI commands."""

from typing import List, Optional

import typer

from ..errors import ProviderInUseError, RenameFailedError, StaleProviderError, WorkbindError
from ..services import delete_provider, rename_provider, use_provider
from ..state.models import ProviderRecord
from .common_options import force_option, ignore_not_found_option
from .display import info, info_dict, section, success, table
from .utils import fail, get_registry_context, parse_options

app = typer.Typer(help="Manage providers", no_args_is_help=True)


@app.command()
def add(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Provider name"),
    option: Optional[List[str]] = typer.Option(
        None, "--option", "-o", help="Provider option as KEY=VALUE (repeatable)"
    ),
    description: Optional[str] = typer.Option(None, "--description", help="Provider description"),
    use: bool = typer.Option(False, "--use", help="Make this the default provider"),
):
    """Add a provider to the current context.

    Examples:
        wbind provider add docker -o DOCKER_HOST=unix:///var/run/docker.sock
        wbind provider add k8s --use
    """
    registry = get_registry_context(ctx)
    record = ProviderRecord(name=name, description=description, options=parse_options(option))

    try:
        registry.providers.add(record)
        if use or registry.default_provider is None:
            use_provider(registry, name)
    except WorkbindError as e:
        fail(e)

    success(f"Added provider '{name}' to context '{registry.name}'")
    if registry.default_provider == name:
        info(f"  '{name}' is the default provider")


@app.command(name="list")
def list_providers(ctx: typer.Context):
    """List providers in the current context."""
    registry = get_registry_context(ctx)
    try:
        providers = registry.providers.list_providers()
    except WorkbindError as e:
        fail(e)

    default = registry.default_provider
    table(
        "Providers",
        ["Name", "Default", "Description"],
        [[p.name, "*" if p.name == default else "", p.description] for p in providers],
    )


@app.command()
def use(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Provider to make the default"),
):
    """Set the default provider of the current context."""
    registry = get_registry_context(ctx)
    try:
        use_provider(registry, name)
    except WorkbindError as e:
        fail(e)
    success(f"Default provider is now '{name}'")


@app.command()
def delete(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Provider to delete"),
    ignore_not_found: bool = ignore_not_found_option(),
    force: bool = force_option("Delete even if workspaces still use the provider"),
):
    """Delete a provider.

    Refuses to delete a provider that workspaces are bound to unless
    --force is given.
    """
    registry = get_registry_context(ctx)
    try:
        deleted = delete_provider(registry, name, ignore_not_found=ignore_not_found, force=force)
    except ProviderInUseError as e:
        fail(e, hint="Rebind the workspaces with 'wbind workspace rebind' or pass --force")
    except WorkbindError as e:
        fail(e)

    if deleted:
        success(f"Deleted provider '{name}'")
    else:
        info(f"Provider '{name}' not found, nothing to delete")


@app.command()
def rename(
    ctx: typer.Context,
    old_name: str = typer.Argument(..., help="Current provider name"),
    new_name: str = typer.Argument(..., help="New provider name"),
):
    """Rename a provider.

    Clones the provider under the new name, rebinds every workspace bound
    to it, updates the default provider and removes the old provider. If
    any workspace cannot be rebound the changes are rolled back.

    Example:
        wbind provider rename my-provider my-new-provider
    """
    registry = get_registry_context(ctx)
    try:
        result = rename_provider(registry, old_name, new_name)
    except StaleProviderError as e:
        fail(e, hint=f"Remove it with 'wbind provider delete {old_name} --force'")
    except RenameFailedError as e:
        section("Rename rolled back")
        if e.result is not None:
            info_dict({
                "Rolled back": ", ".join(e.result.rolled_back) or "-",
                "Not restored": ", ".join(f.workspace_id for f in e.rollback_failures) or "-",
            })
        fail(e)
    except WorkbindError as e:
        fail(e)

    success(f"Renamed provider '{old_name}' to '{new_name}'")
    if result.rebound:
        info_dict({"Rebound workspaces": ", ".join(result.rebound)})
    if result.default_updated:
        info(f"  Default provider is now '{new_name}'")
