"""Record models for workspaces and providers."""

from dataclasses import asdict, dataclass, field, fields
from datetime import UTC, datetime
from typing import Any

from pydantic import Field

from ..components.config_base import ConfigModel


def now_iso() -> str:
    """Get current UTC time as ISO 8601 string."""
    return datetime.now(UTC).isoformat()


@dataclass
class ProviderBinding:
    """A workspace's reference (by name) to the provider that realizes it."""
    name: str
    options: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "options": dict(self.options)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProviderBinding":
        return cls(name=data.get("name", ""), options=dict(data.get("options") or {}))


@dataclass
class WorkspaceRecord:
    """Persisted descriptor of a development environment.

    ``id`` is unique within a context and never changes once the record is
    created. The only field the binding operations rewrite is
    ``provider.name``.
    """
    id: str
    context: str
    provider: ProviderBinding
    uid: str = ""
    source: str = ""
    created_at: str | None = None
    last_used: str | None = None

    @property
    def provider_name(self) -> str:
        return self.provider.name

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON storage."""
        d = asdict(self)
        d["provider"] = self.provider.to_dict()
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WorkspaceRecord":
        """Create from dictionary, ignoring unknown fields.

        A legacy flat ``provider`` string is accepted as the binding name.
        """
        provider = data.get("provider") or {}
        if isinstance(provider, str):
            provider = {"name": provider}

        valid_fields = {f.name for f in fields(cls)}
        clean_data = {
            k: v for k, v in data.items()
            if k in valid_fields and k != "provider"
        }
        return cls(provider=ProviderBinding.from_dict(provider), **clean_data)

    def with_provider(self, provider_name: str) -> "WorkspaceRecord":
        """Copy of this record bound to another provider."""
        data = self.to_dict()
        data["provider"]["name"] = provider_name
        return self.from_dict(data)


class ProviderRecord(ConfigModel):
    """Named backend configuration that can realize workspaces.

    Everything except ``name`` is an opaque payload for the driver and is
    copied verbatim when the provider is cloned.
    """

    name: str
    description: str | None = None
    version: str | None = None
    source: dict[str, Any] = Field(default_factory=dict)
    options: dict[str, Any] = Field(default_factory=dict)
    created_at: str | None = None
