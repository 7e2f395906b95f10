"""Centralized path management for workbind.

This module defines all paths used by workbind to ensure consistency
across all components. All path definitions should come from here.

Layout under the home directory::

    config.yaml
    contexts/<context>/providers/<name>/provider.yaml
    contexts/<context>/workspaces/<id>/workspace.json
"""

import os
from pathlib import Path

# Environment variable overriding the home directory
HOME_ENV_VAR = "WORKBIND_HOME"

# Default base directory
DEFAULT_HOME = Path.home() / ".workbind"

CONFIG_FILENAME = "config.yaml"
PROVIDER_FILENAME = "provider.yaml"
WORKSPACE_FILENAME = "workspace.json"


def get_home(home: Path | None = None) -> Path:
    """Resolve the workbind home directory.

    Args:
        home: Explicit override (takes precedence over the environment)

    Returns:
        Home directory path, from the argument, $WORKBIND_HOME or ~/.workbind
    """
    if home is not None:
        return Path(home)
    env_home = os.environ.get(HOME_ENV_VAR)
    if env_home:
        return Path(env_home)
    return DEFAULT_HOME


def config_file(home: Path) -> Path:
    """Path to the global configuration file."""
    return home / CONFIG_FILENAME


def context_dir(home: Path, context: str) -> Path:
    """Directory holding all records of one context."""
    return home / "contexts" / context


def providers_dir(home: Path, context: str) -> Path:
    """Directory holding one sub-directory per provider."""
    return context_dir(home, context) / "providers"


def workspaces_dir(home: Path, context: str) -> Path:
    """Directory holding one sub-directory per workspace."""
    return context_dir(home, context) / "workspaces"
