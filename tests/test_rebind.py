"""Tests for rebinding a single workspace."""

import pytest

from conftest import FlakyWorkspaceRegistry, bindings, make_context
from workbind.errors import (
    LoadError,
    SaveError,
    TargetProviderNotFoundError,
    WorkspaceNotFoundError,
)
from workbind.services.rebind import rebind_workspace
from workbind.state.workspaces import WorkspaceRegistry


def test_rebind_workspace(scenario):
    result = rebind_workspace(scenario, "w1", "b")

    assert result.workspace_id == "w1"
    assert result.previous_provider == "a"
    assert result.provider == "b"
    assert result.changed
    assert bindings(scenario) == {"w1": "b", "w2": "a", "w3": "b"}


def test_rebind_only_touches_target(home, scenario):
    """Only the targeted record is read or written."""
    workspaces = FlakyWorkspaceRegistry(home, "default")
    ctx = make_context(home, workspaces=workspaces)

    rebind_workspace(ctx, "w2", "b")

    assert workspaces.loaded == ["w2"]
    assert workspaces.saved == ["w2"]
    assert bindings(ctx) == {"w1": "a", "w2": "b", "w3": "b"}


def test_rebind_to_same_provider(scenario):
    result = rebind_workspace(scenario, "w3", "b")
    assert not result.changed


def test_rebind_missing_workspace(scenario):
    with pytest.raises(WorkspaceNotFoundError) as exc_info:
        rebind_workspace(scenario, "nope", "b")

    assert isinstance(exc_info.value, LoadError)
    assert exc_info.value.workspace_id == "nope"


def test_rebind_unknown_provider(home, scenario):
    """A dangling target is refused before the workspace is loaded."""
    workspaces = FlakyWorkspaceRegistry(home, "default")
    ctx = make_context(home, workspaces=workspaces)

    with pytest.raises(TargetProviderNotFoundError, match="provider 'ghost' not found"):
        rebind_workspace(ctx, "w1", "ghost")

    assert workspaces.loaded == []
    assert bindings(ctx)["w1"] == "a"


def test_rebind_save_failure(home, scenario):
    ctx = make_context(home, workspaces=FlakyWorkspaceRegistry(home, "default", fail_saves={"w1": None}))

    with pytest.raises(SaveError):
        rebind_workspace(ctx, "w1", "b")

    assert bindings(ctx)["w1"] == "a"


def test_rebind_unreadable_workspace(scenario):
    path = WorkspaceRegistry(scenario.home, scenario.name).base_dir / "w1" / "workspace.json"
    path.write_text("[]")

    with pytest.raises(LoadError):
        rebind_workspace(scenario, "w1", "b")
