"""Provider lifecycle operations that span registries and configuration."""

import logging

from ..core.context import RegistryContext
from ..errors import ProviderInUseError, ProviderNotFoundError

logger = logging.getLogger(__name__)


def delete_provider(
    ctx: RegistryContext,
    name: str,
    *,
    ignore_not_found: bool = False,
    force: bool = False,
) -> bool:
    """Delete a provider, keeping workspaces and the default pointer consistent.

    Args:
        ctx: Registry context
        name: Provider to delete
        ignore_not_found: Succeed quietly if the provider does not exist
        force: Delete even if workspaces are still bound to the provider

    Returns:
        True if a provider was deleted

    Raises:
        ProviderInUseError: If workspaces still use the provider and not ``force``
        ProviderNotFoundError: If missing and not ``ignore_not_found``
    """
    if not ctx.providers.exists(name):
        if ignore_not_found:
            return False
        raise ProviderNotFoundError(name, ctx.name)

    users = [w.id for w in ctx.workspaces.bound_to(name)]
    if users and not force:
        raise ProviderInUseError(name, users)
    if users:
        logger.warning(f"Deleting provider {name} still used by: {', '.join(users)}")

    deleted = ctx.providers.delete(name)

    if ctx.default_provider == name:
        ctx.set_default_provider(None)
        ctx.save_config()
        logger.info(f"Cleared default provider of context {ctx.name}")
    return deleted


def use_provider(ctx: RegistryContext, name: str) -> None:
    """Make an existing provider the context's default.

    Raises:
        ProviderNotFoundError: If the provider does not exist
    """
    ctx.providers.get(name)
    ctx.set_default_provider(name)
    ctx.save_config()
    logger.info(f"Default provider of context {ctx.name} set to {name}")
