"""Rebind a single workspace to another provider."""

import logging
from dataclasses import dataclass

from ..core.context import RegistryContext
from ..errors import TargetProviderNotFoundError

logger = logging.getLogger(__name__)


@dataclass
class RebindResult:
    """Outcome of a successful rebind."""
    workspace_id: str
    previous_provider: str
    provider: str

    @property
    def changed(self) -> bool:
        return self.previous_provider != self.provider


def rebind_workspace(ctx: RegistryContext, workspace_id: str, provider_name: str) -> RebindResult:
    """Point one workspace at a different, existing provider.

    Only the targeted workspace record is written. The provider registry is
    consulted for existence alone.

    Args:
        ctx: Registry context
        workspace_id: ID of the workspace to rebind
        provider_name: Name of the provider to bind to

    Returns:
        RebindResult with the previous and new provider names

    Raises:
        TargetProviderNotFoundError: If ``provider_name`` does not exist
        LoadError: If the workspace is missing or unreadable
        SaveError: If the updated record cannot be written
    """
    if not ctx.providers.exists(provider_name):
        raise TargetProviderNotFoundError(provider_name, ctx.name)

    workspace = ctx.workspaces.load(workspace_id)
    previous = workspace.provider_name
    logger.info(
        f"Rebinding workspace {workspace_id} from provider {previous} to {provider_name}"
    )

    ctx.workspaces.save(workspace.with_provider(provider_name))

    logger.info(f"Workspace {workspace_id} rebound to provider {provider_name}")
    return RebindResult(workspace_id=workspace_id, previous_provider=previous, provider=provider_name)
