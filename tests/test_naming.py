"""Tests for naming rules."""

import pytest

from workbind.core.naming import (
    is_path_safe_name,
    is_valid_provider_name,
    to_workspace_id,
    validate_context_name,
    validate_provider_name,
)
from workbind.errors import InvalidContextNameError, InvalidProviderNameError


@pytest.mark.parametrize("name", ["docker", "k8s-prod", "a", "x" * 32])
def test_valid_provider_names(name):
    validate_provider_name(name)
    assert is_valid_provider_name(name)


@pytest.mark.parametrize("name", ["", "Docker", "invalid/name", "with space", "under_score", "x" * 33])
def test_invalid_provider_names(name):
    with pytest.raises(InvalidProviderNameError):
        validate_provider_name(name)
    assert not is_valid_provider_name(name)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("my-project", "my-project"),
        ("/home/alice/My Project", "my-project"),
        ("/home/alice/project/", "project"),
        ("C:\\code\\Api_Server", "api-server"),
        ("github.com/org/repo", "repo"),
        ("--weird--", "weird"),
        ("a" * 60, "a" * 48),
    ],
)
def test_to_workspace_id(value, expected):
    assert to_workspace_id(value) == expected


@pytest.mark.parametrize("name", ["default", "team_a", "prod-eu", "0"])
def test_valid_context_names(name):
    validate_context_name(name)


@pytest.mark.parametrize("name", ["", "..", "../../x", "a/b", "Team", "-leading", "x" * 65])
def test_invalid_context_names(name):
    with pytest.raises(InvalidContextNameError):
        validate_context_name(name)


@pytest.mark.parametrize("name,expected", [
    ("docker", True),
    ("my.provider", True),
    ("", False),
    (".", False),
    ("..", False),
    ("../workspaces", False),
    ("a\\b", False),
])
def test_is_path_safe_name(name, expected):
    assert is_path_safe_name(name) is expected
