"""Global workbind configuration.

The configuration lives in ``<home>/config.yaml`` and holds the default
context plus per-context settings, most importantly which provider is the
default one. It is loaded once per invocation and saved only when changed.
"""

from pathlib import Path

from pydantic import BaseModel, Field

from ..components.config_base import ConfigModel
from ..errors import ConfigError
from . import paths

DEFAULT_CONTEXT = "default"


class ContextSettings(BaseModel):
    """Settings scoped to a single context."""

    default_provider: str | None = None
    """Provider used when a workspace is created without an explicit one."""

    options: dict[str, str] = Field(default_factory=dict)
    """Free-form context options."""


class GlobalConfig(ConfigModel):
    """Process-wide configuration, passed explicitly to every operation."""

    default_context: str = DEFAULT_CONTEXT
    """Context used when none is given on the command line."""

    contexts: dict[str, ContextSettings] = Field(
        default_factory=lambda: {DEFAULT_CONTEXT: ContextSettings()}
    )

    @classmethod
    def load(cls, path: Path) -> "GlobalConfig":
        """Load configuration from file.

        Raises:
            ConfigError: If the file does not exist or is invalid
        """
        if not path.exists():
            raise ConfigError(f"Configuration not found at {path}")
        return cls.from_yaml(path)

    @classmethod
    def load_or_create(cls, path: Path) -> "GlobalConfig":
        """Load configuration from file or start from defaults.

        Nothing is written until :meth:`save` is called.
        """
        return cls.load_or_default(path)

    @classmethod
    def for_home(cls, home: Path) -> "GlobalConfig":
        """Load (or default) the configuration stored under a home directory."""
        return cls.load_or_create(paths.config_file(home))

    def save(self, path: Path) -> None:
        """Save configuration, creating parent directories as needed.

        Raises:
            ConfigError: If the file cannot be written
        """
        try:
            self.to_yaml(path)
        except OSError as e:
            raise ConfigError(f"Error writing configuration file {path}: {e}") from e

    def context(self, name: str | None = None) -> ContextSettings:
        """Settings for a context, without adding it to the configuration.

        Args:
            name: Context name (defaults to ``default_context``)
        """
        name = name or self.default_context
        return self.contexts.get(name, ContextSettings())

    def ensure_context(self, name: str | None = None) -> ContextSettings:
        """Settings for a context, added to the configuration if missing."""
        name = name or self.default_context
        return self.contexts.setdefault(name, ContextSettings())

    def default_provider(self, context: str | None = None) -> str | None:
        """Default provider name of a context, if any."""
        return self.context(context).default_provider

    def set_default_provider(self, provider: str | None, context: str | None = None) -> None:
        """Point a context's default provider at another name."""
        self.ensure_context(context).default_provider = provider
