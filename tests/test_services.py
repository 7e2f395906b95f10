"""Tests for provider lifecycle and workspace registration services."""

import pytest

from conftest import bindings, provider_names, saved_default, seed
from workbind.errors import (
    ProviderInUseError,
    ProviderNotFoundError,
    RegistryError,
    TargetProviderNotFoundError,
)
from workbind.services import create_workspace, delete_provider, use_provider


class TestDeleteProvider:

    def test_refuses_when_in_use(self, scenario):
        with pytest.raises(ProviderInUseError) as exc_info:
            delete_provider(scenario, "a")

        assert exc_info.value.workspace_ids == ["w1", "w2"]
        assert provider_names(scenario) == {"a", "b"}

    def test_force_delete_clears_default(self, scenario):
        assert delete_provider(scenario, "a", force=True)

        assert provider_names(scenario) == {"b"}
        assert scenario.default_provider is None
        assert saved_default(scenario) is None
        # Workspaces are not rebound by a delete
        assert bindings(scenario)["w1"] == "a"

    def test_delete_unused(self, ctx):
        seed(ctx, providers=("spare",))

        assert delete_provider(ctx, "spare")
        assert provider_names(ctx) == set()

    def test_missing(self, scenario):
        with pytest.raises(ProviderNotFoundError):
            delete_provider(scenario, "missing")

    @pytest.mark.parametrize("name", ["..", "../workspaces", "../../default"])
    def test_names_outside_providers_dir(self, scenario, name):
        with pytest.raises(ProviderNotFoundError):
            delete_provider(scenario, name, force=True)
        assert delete_provider(scenario, name, ignore_not_found=True, force=True) is False

        assert bindings(scenario) == {"w1": "a", "w2": "a", "w3": "b"}
        assert provider_names(scenario) == {"a", "b"}
        assert delete_provider(scenario, "missing", ignore_not_found=True) is False


class TestUseProvider:

    def test_use_provider(self, scenario):
        use_provider(scenario, "b")
        assert saved_default(scenario) == "b"

    def test_use_missing_provider(self, scenario):
        with pytest.raises(ProviderNotFoundError):
            use_provider(scenario, "missing")
        assert saved_default(scenario) == "a"


class TestCreateWorkspace:

    def test_uses_default_provider(self, scenario):
        record = create_workspace(scenario, "/home/alice/New Project")

        assert record.id == "new-project"
        assert record.provider_name == "a"
        assert bindings(scenario)["new-project"] == "a"

    def test_explicit_provider_and_id(self, scenario):
        record = create_workspace(scenario, "git@example.com:org/x.git", "b", workspace_id="X")
        assert record.id == "x"
        assert record.provider_name == "b"

    def test_unknown_provider(self, scenario):
        with pytest.raises(TargetProviderNotFoundError):
            create_workspace(scenario, "/src/web", "ghost")

    def test_no_default_provider(self, ctx):
        with pytest.raises(RegistryError, match="no default provider"):
            create_workspace(ctx, "/src/web")

    def test_duplicate_id(self, scenario):
        with pytest.raises(RegistryError, match="already exists"):
            create_workspace(scenario, "/elsewhere/w1")
