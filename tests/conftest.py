"""Test configuration and shared fixtures for workbind tests."""

import pytest

from workbind.core.config import GlobalConfig
from workbind.core.context import RegistryContext
from workbind.errors import SaveError
from workbind.state.models import ProviderBinding, ProviderRecord, WorkspaceRecord
from workbind.state.providers import ProviderRegistry
from workbind.state.workspaces import WorkspaceRegistry


class FlakyWorkspaceRegistry(WorkspaceRegistry):
    """Workspace registry that fails selected saves.

    ``fail_saves`` maps a workspace id to the 1-based save attempts that
    should fail (``None`` means every attempt).
    """

    def __init__(self, home, context, fail_saves=None, fail_loads=()):
        super().__init__(home, context)
        self.fail_saves = fail_saves or {}
        self.fail_loads = set(fail_loads)
        self.save_attempts: dict[str, int] = {}
        self.saved: list[str] = []
        self.loaded: list[str] = []

    def load(self, workspace_id):
        self.loaded.append(workspace_id)
        return super().load(workspace_id)

    def save(self, record):
        attempt = self.save_attempts.get(record.id, 0) + 1
        self.save_attempts[record.id] = attempt
        if record.id in self.fail_saves:
            attempts = self.fail_saves[record.id]
            if attempts is None or attempt in attempts:
                raise SaveError(f"saving workspace {record.id}: disk full")
        super().save(record)
        self.saved.append(record.id)


class FlakyProviderRegistry(ProviderRegistry):
    """Provider registry whose deletes can be made to fail by name."""

    def __init__(self, home, context, fail_deletes=()):
        super().__init__(home, context)
        self.fail_deletes = set(fail_deletes)

    def delete(self, name, ignore_not_found=False):
        if name in self.fail_deletes:
            raise SaveError(f"deleting provider '{name}': permission denied")
        return super().delete(name, ignore_not_found=ignore_not_found)


@pytest.fixture
def home(tmp_path, monkeypatch):
    """Isolated workbind home directory."""
    home = tmp_path / "workbind-home"
    monkeypatch.setenv("WORKBIND_HOME", str(home))
    monkeypatch.delenv("WORKBIND_CONTEXT", raising=False)
    return home


def make_context(home, context="default", workspaces=None, providers=None, config=None):
    """Build a RegistryContext, optionally with custom registries."""
    return RegistryContext(
        home=home,
        name=context,
        config=config or GlobalConfig.for_home(home),
        workspaces=workspaces,
        providers=providers,
    )


def seed(ctx, providers=("a", "b"), workspaces=None, default_provider=None):
    """Create providers and workspaces in a context.

    Args:
        providers: Provider names to add
        workspaces: Mapping of workspace id -> provider name
        default_provider: Default provider to set and persist
    """
    plain = ProviderRegistry(ctx.home, ctx.name)
    for name in providers:
        plain.add(ProviderRecord(name=name, options={"DRIVER": f"{name}-driver"}))
        (plain.base_dir / name / "binaries").mkdir()
        (plain.base_dir / name / "binaries" / "driver").write_text(f"#!{name}\n")

    store = WorkspaceRegistry(ctx.home, ctx.name)
    for workspace_id, provider_name in (workspaces or {}).items():
        store.save(WorkspaceRecord(
            id=workspace_id,
            context=ctx.name,
            source=f"/src/{workspace_id}",
            provider=ProviderBinding(name=provider_name, options={"KEEP": "me"}),
        ))

    if default_provider is not None:
        ctx.set_default_provider(default_provider)
        ctx.save_config()
    return ctx


def bindings(ctx):
    """Current workspace id -> provider name mapping, read from disk."""
    store = WorkspaceRegistry(ctx.home, ctx.name)
    return {w.id: w.provider_name for w in store.list_workspaces()}


def provider_names(ctx):
    """Provider names currently on disk."""
    return {p.name for p in ProviderRegistry(ctx.home, ctx.name).list_providers()}


def saved_default(ctx):
    """Default provider as persisted in config.yaml."""
    return GlobalConfig.for_home(ctx.home).default_provider(ctx.name)


@pytest.fixture
def ctx(home):
    """Registry context over an empty home."""
    return make_context(home)


@pytest.fixture
def scenario(home):
    """Providers {a, b}; workspaces {w1->a, w2->a, w3->b}; default provider a."""
    return seed(
        make_context(home),
        workspaces={"w1": "a", "w2": "a", "w3": "b"},
        default_provider="a",
    )
