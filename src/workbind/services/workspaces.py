"""Workspace registration."""

import logging
import uuid

from ..core.context import RegistryContext
from ..core.naming import to_workspace_id
from ..errors import RegistryError, TargetProviderNotFoundError
from ..state.models import ProviderBinding, WorkspaceRecord, now_iso

logger = logging.getLogger(__name__)


def create_workspace(
    ctx: RegistryContext,
    source: str,
    provider_name: str | None = None,
    workspace_id: str | None = None,
) -> WorkspaceRecord:
    """Register a workspace record bound to an existing provider.

    No provisioning happens here; the record only describes the workspace.

    Args:
        ctx: Registry context
        source: Source the workspace is built from (path, git URL, image)
        provider_name: Provider to bind to (defaults to the context default)
        workspace_id: Explicit ID (defaults to one derived from ``source``)

    Raises:
        RegistryError: If no provider is given and no default is set, the ID
            is empty or already taken
        TargetProviderNotFoundError: If the provider does not exist
    """
    provider_name = provider_name or ctx.default_provider
    if not provider_name:
        raise RegistryError(
            f"no provider given and context '{ctx.name}' has no default provider"
        )
    if not ctx.providers.exists(provider_name):
        raise TargetProviderNotFoundError(provider_name, ctx.name)

    workspace_id = to_workspace_id(workspace_id or source)
    if not workspace_id:
        raise RegistryError(f"cannot derive a workspace id from '{source}'")
    if ctx.workspaces.exists(workspace_id):
        raise RegistryError(f"workspace '{workspace_id}' already exists in context '{ctx.name}'")

    record = WorkspaceRecord(
        id=workspace_id,
        uid=uuid.uuid4().hex[:12],
        context=ctx.name,
        source=source,
        provider=ProviderBinding(name=provider_name),
        created_at=now_iso(),
    )
    ctx.workspaces.save(record)
    logger.info(f"Created workspace {workspace_id} bound to provider {provider_name}")
    return record
