"""Explicit registry context passed to every operation.

Nothing in workbind reads a process-wide "current config"; commands build a
:class:`RegistryContext` once and hand it to the services.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from ..state.providers import ProviderRegistry
from ..state.workspaces import WorkspaceRegistry
from . import paths
from .naming import validate_context_name
from .config import GlobalConfig

logger = logging.getLogger(__name__)


@dataclass
class RegistryContext:
    """Everything an operation needs to act on one context."""

    home: Path
    name: str
    config: GlobalConfig
    workspaces: WorkspaceRegistry | None = None
    providers: ProviderRegistry | None = None

    def __post_init__(self):
        validate_context_name(self.name)
        if self.workspaces is None:
            self.workspaces = WorkspaceRegistry(self.home, self.name)
        if self.providers is None:
            self.providers = ProviderRegistry(self.home, self.name)

    @classmethod
    def load(cls, home: Path | None = None, context: str | None = None) -> "RegistryContext":
        """Build a context from the configuration stored under ``home``.

        Args:
            home: Home directory (defaults to $WORKBIND_HOME or ~/.workbind)
            context: Context name (defaults to the config's default context)

        Raises:
            InvalidContextNameError: If the resolved context name is not valid
        """
        home = paths.get_home(home)
        config = GlobalConfig.for_home(home)
        name = context or config.default_context
        logger.debug(f"Using context {name} under {home}")
        return cls(home=home, name=name, config=config)

    @property
    def config_path(self) -> Path:
        return paths.config_file(self.home)

    @property
    def default_provider(self) -> str | None:
        return self.config.default_provider(self.name)

    def set_default_provider(self, provider: str | None) -> None:
        self.config.set_default_provider(provider, self.name)

    def save_config(self) -> None:
        """Persist the global configuration."""
        self.config.save(self.config_path)
