"""Operations that orchestrate the registries."""

from .providers import delete_provider, use_provider
from .rebind import RebindResult, rebind_workspace
from .rename import ProviderRenameSaga, RenameResult, rename_provider
from .workspaces import create_workspace

__all__ = [
    "ProviderRenameSaga",
    "RebindResult",
    "RenameResult",
    "create_workspace",
    "delete_provider",
    "rebind_workspace",
    "rename_provider",
    "use_provider",
]
