"""Naming rules for providers, contexts and workspaces.

Provider and context names double as directory names, so they are restricted to a
small, path-safe alphabet. Workspace IDs are derived from whatever the user
typed (a name or a path to a source directory).
"""

import re

from ..errors import InvalidContextNameError, InvalidProviderNameError

PROVIDER_NAME_PATTERN = re.compile(r"^[a-z0-9\-]+$")
PROVIDER_NAME_MAX_LENGTH = 32

CONTEXT_NAME_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_\-]*$")
CONTEXT_NAME_MAX_LENGTH = 64

WORKSPACE_ID_MAX_LENGTH = 48

_NON_WORD = re.compile(r"[^\w\-]")
_NON_ID = re.compile(r"[^0-9a-z\-]+")


def validate_provider_name(name: str) -> None:
    """Validate a provider name.

    Args:
        name: Proposed provider name

    Raises:
        InvalidProviderNameError: If the name is empty, too long or contains
            characters other than lower case letters, digits and dashes
    """
    if not name:
        raise InvalidProviderNameError("provider name cannot be empty")
    if len(name) > PROVIDER_NAME_MAX_LENGTH:
        raise InvalidProviderNameError(
            f"provider name '{name}' is longer than {PROVIDER_NAME_MAX_LENGTH} characters"
        )
    if not PROVIDER_NAME_PATTERN.match(name):
        raise InvalidProviderNameError(
            f"provider name '{name}' can only include lower case letters, numbers or dashes"
        )


def is_valid_provider_name(name: str) -> bool:
    """Check a provider name without raising."""
    try:
        validate_provider_name(name)
    except InvalidProviderNameError:
        return False
    return True


def is_path_safe_name(name: str) -> bool:
    """Check that a name stays a single component when joined to a directory."""
    if not name or name in (".", ".."):
        return False
    return "/" not in name and "\\" not in name


def validate_context_name(name: str) -> None:
    """Validate a context name.

    Context names select a directory under ``<home>/contexts``.

    Raises:
        InvalidContextNameError: If the name is empty, too long or not made of
            lower case letters, digits, dashes and underscores
    """
    if not name:
        raise InvalidContextNameError("context name cannot be empty")
    if len(name) > CONTEXT_NAME_MAX_LENGTH:
        raise InvalidContextNameError(
            f"context name '{name}' is longer than {CONTEXT_NAME_MAX_LENGTH} characters"
        )
    if not CONTEXT_NAME_PATTERN.match(name):
        raise InvalidContextNameError(
            f"context name '{name}' can only include lower case letters, numbers, "
            "dashes or underscores"
        )


def to_workspace_id(name: str) -> str:
    """Convert a workspace name or source path to a workspace ID.

    Only the last path component is used. The result is lower case, with
    every run of characters outside ``[0-9a-z-]`` collapsed to a dash,
    trimmed of leading/trailing dashes and capped at 48 characters.

    Examples:
        >>> to_workspace_id("/home/alice/My Project")
        'my-project'
        >>> to_workspace_id("api_server")
        'api-server'
    """
    value = name.replace("\\", "/").lower().rstrip("/")
    value = value.split("/")[-1]
    value = _NON_WORD.sub("-", value)
    value = _NON_ID.sub("-", value)
    value = value.strip("-")
    if len(value) > WORKSPACE_ID_MAX_LENGTH:
        value = value[:WORKSPACE_ID_MAX_LENGTH].rstrip("-")
    return value
