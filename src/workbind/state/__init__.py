"""Workspace and provider registries."""

from .models import ProviderBinding, ProviderRecord, WorkspaceRecord
from .providers import ProviderRegistry
from .workspaces import WorkspaceRegistry

__all__ = [
    "ProviderBinding",
    "ProviderRecord",
    "ProviderRegistry",
    "WorkspaceRecord",
    "WorkspaceRegistry",
]
