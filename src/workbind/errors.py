"""Error types for workbind."""


class WorkbindError(Exception):
    """Base exception for workbind errors."""
    pass


class ConfigError(WorkbindError):
    """Configuration error."""
    pass


class InvalidContextNameError(ConfigError, ValueError):
    """Raised when a context name fails validation."""
    pass


# Registry errors


class RegistryError(WorkbindError):
    """Workspace or provider registry error."""
    pass


class LoadError(RegistryError):
    """A record could not be loaded."""
    pass


class WorkspaceNotFoundError(LoadError, LookupError):
    """Raised when a workspace record does not exist."""

    def __init__(self, workspace_id: str, context: str):
        self.workspace_id = workspace_id
        self.context = context
        super().__init__(f"workspace '{workspace_id}' not found in context '{context}'")


class SaveError(RegistryError):
    """A record could not be persisted."""
    pass


class ProviderNotFoundError(RegistryError, LookupError):
    """Raised when a provider record does not exist."""

    def __init__(self, name: str, context: str):
        self.name = name
        self.context = context
        super().__init__(f"provider '{name}' not found in context '{context}'")


class TargetProviderNotFoundError(ProviderNotFoundError):
    """Raised when a rebind targets a provider that does not exist."""
    pass


class ProviderExistsError(RegistryError, ValueError):
    """Raised when a provider with the given name already exists."""

    def __init__(self, name: str, context: str):
        self.name = name
        self.context = context
        super().__init__(f"provider '{name}' already exists in context '{context}'")


class InvalidProviderNameError(RegistryError, ValueError):
    """Raised when a provider name fails validation."""
    pass


class ProviderInUseError(RegistryError):
    """Raised when deleting a provider that workspaces are still bound to."""

    def __init__(self, name: str, workspace_ids: list[str]):
        self.name = name
        self.workspace_ids = workspace_ids
        super().__init__(
            f"cannot delete provider '{name}', it is still used by "
            f"workspace(s): {', '.join(workspace_ids)}"
        )


# Rename saga errors


class RenameError(WorkbindError):
    """Base class for provider rename failures.

    ``result`` is set to the saga's RenameResult when the error is raised
    by the orchestrator.
    """

    result = None


class DiscoveryError(RenameError):
    """Listing workspaces failed before anything was mutated."""
    pass


class CloneError(RenameError):
    """Cloning the provider under its new name failed."""
    pass


class SourceProviderNotFoundError(CloneError, LookupError):
    """The provider being renamed does not exist."""
    pass


class RebindError(RenameError):
    """A single workspace could not be repointed to the new provider."""

    def __init__(self, workspace_id: str, cause: Exception):
        self.workspace_id = workspace_id
        self.cause = cause
        super().__init__(f"failed to rebind workspace {workspace_id}: {cause}")


class DefaultUpdateError(RenameError):
    """The default-provider pointer could not be saved."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"failed to update default provider: {cause}")


class RollbackError(RenameError):
    """A workspace could not be restored to the old provider."""

    def __init__(self, workspace_id: str, cause: Exception):
        self.workspace_id = workspace_id
        self.cause = cause
        super().__init__(f"failed to roll back workspace {workspace_id}: {cause}")


class CleanupError(RenameError):
    """A provider left behind by the rename could not be removed."""

    def __init__(self, provider_name: str, cause: Exception):
        self.provider_name = provider_name
        self.cause = cause
        super().__init__(f"failed to delete provider '{provider_name}': {cause}")


class StaleProviderError(CleanupError):
    """The rename completed but the old provider is still on disk."""

    def __init__(self, provider_name: str, cause: Exception):
        super().__init__(provider_name, cause)
        self.args = (
            f"rename succeeded but stale old provider '{provider_name}' "
            f"could not be removed: {cause}",
        )


class RenameFailedError(RenameError):
    """Aggregated failure of a rename that was rolled back."""

    def __init__(
        self,
        failures: list[RenameError],
        rollback_failures: list[RollbackError] | None = None,
        cleanup_error: CleanupError | None = None,
        result=None,
    ):
        self.failures = failures
        self.rollback_failures = rollback_failures or []
        self.cleanup_error = cleanup_error
        self.result = result
        super().__init__(self._format())

    @property
    def primary_message(self) -> str:
        """Message describing the rebind/update failures alone."""
        if len(self.failures) == 1:
            return str(self.failures[0])
        joined = "; ".join(str(f) for f in self.failures)
        return f"failed to rebind {len(self.failures)} workspace(s): {joined}"

    def _format(self) -> str:
        message = self.primary_message
        if self.cleanup_error is not None:
            message = (
                "failed to rebind workspaces and failed to clean up cloned provider "
                f"'{self.cleanup_error.provider_name}': {self.cleanup_error.cause}; "
                f"original error: {message}"
            )
        if self.rollback_failures:
            ids = ", ".join(f.workspace_id for f in self.rollback_failures)
            message += f" (rollback incomplete for: {ids})"
        return message
