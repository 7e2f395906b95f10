"""Provider rename saga.

Renaming a provider is a multi-step operation: clone the provider under the
new name, repoint every workspace bound to the old name, repoint the
context's default provider, then delete the old provider. If any repoint
fails, the completed steps are compensated: rebound workspaces are restored
to the old name and the clone is deleted.

Each step is a handler for one :class:`RenameStage`; a handler does its
work, records outcomes on the :class:`RenameResult` and returns the next
stage. Transitions are checked against ``rename_state.TRANSITIONS``.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from ..core.context import RegistryContext
from ..errors import (
    CleanupError,
    CloneError,
    DefaultUpdateError,
    DiscoveryError,
    ProviderNotFoundError,
    RebindError,
    RenameError,
    RenameFailedError,
    RollbackError,
    SourceProviderNotFoundError,
    StaleProviderError,
    WorkbindError,
)
from ..state.models import WorkspaceRecord
from .rename_state import (
    InvalidTransitionError,
    RenameStage,
    is_terminal,
    validate_transition,
)

logger = logging.getLogger(__name__)

# Failures a registry primitive may surface; anything else propagates.
RECOVERABLE_ERRORS = (WorkbindError, OSError)


@dataclass
class RenameResult:
    """Outcome of a rename, filled in as the saga progresses."""
    old_name: str
    new_name: str
    stage: RenameStage = RenameStage.DISCOVERING
    affected: list[str] = field(default_factory=list)
    rebound: list[str] = field(default_factory=list)
    rolled_back: list[str] = field(default_factory=list)
    failures: list[RenameError] = field(default_factory=list)
    rollback_failures: list[RollbackError] = field(default_factory=list)
    cleanup_error: CleanupError | None = None
    default_updated: bool = False
    succeeded: bool = False


class ProviderRenameSaga:
    """Renames a provider and repoints its workspaces, or rolls back.

    Usage:
        saga = ProviderRenameSaga(ctx, "old", "new")
        result = saga.run()

    ``step()`` runs a single stage, which lets callers (and tests) inspect
    the saga between transitions.
    """

    def __init__(self, ctx: RegistryContext, old_name: str, new_name: str):
        self.ctx = ctx
        self.old_name = old_name
        self.new_name = new_name
        self.result = RenameResult(old_name=old_name, new_name=new_name)
        self.error: RenameError | None = None
        self._affected: list[WorkspaceRecord] = []
        self._handlers: dict[RenameStage, Callable[[], RenameStage]] = {
            RenameStage.DISCOVERING: self.discover,
            RenameStage.CLONING: self.clone,
            RenameStage.REBINDING: self.rebind_workspaces,
            RenameStage.UPDATING_DEFAULT: self.update_default,
            RenameStage.COMMITTING: self.commit,
            RenameStage.ROLLING_BACK: self.roll_back,
        }

    @property
    def stage(self) -> RenameStage:
        return self.result.stage

    def run(self) -> RenameResult:
        """Drive the saga to completion.

        Returns:
            The final RenameResult on success

        Raises:
            DiscoveryError: Listing workspaces failed, nothing was changed
            CloneError: Cloning failed, nothing was changed
            RenameFailedError: A repoint failed and the rename was rolled back
            StaleProviderError: The rename completed but the old provider remains
        """
        while not is_terminal(self.stage):
            self.step()

        if self.error is not None:
            self.error.result = self.result
            raise self.error
        return self.result

    def step(self) -> RenameStage:
        """Run the handler of the current stage and advance to the next one."""
        handler = self._handlers[self.stage]
        next_stage = handler()
        self._advance(next_stage)
        return next_stage

    def _advance(self, to_stage: RenameStage) -> None:
        if not validate_transition(self.stage, to_stage):
            raise InvalidTransitionError(self.stage, to_stage)
        logger.debug(f"Rename {self.old_name} -> {self.new_name}: {self.stage.value} -> {to_stage.value}")
        self.result.stage = to_stage

    def _fail(self, error: RenameError, cause: BaseException | None = None) -> RenameStage:
        error.__cause__ = cause
        self.error = error
        return RenameStage.DONE

    # Stage handlers

    def discover(self) -> RenameStage:
        """List workspaces bound to the old provider. Pure read."""
        try:
            self._affected = self.ctx.workspaces.bound_to(self.old_name)
        except RECOVERABLE_ERRORS as e:
            return self._fail(DiscoveryError(f"listing workspaces: {e}"), e)

        self.result.affected = [w.id for w in self._affected]
        if self._affected:
            logger.info(
                f"Found {len(self._affected)} workspace(s) that will be rebound from "
                f"provider '{self.old_name}' to '{self.new_name}'"
            )
            for workspace_id in self.result.affected:
                logger.info(f"- Workspace: {workspace_id}")
        else:
            logger.info("No workspaces found that are bound to this provider")
        return RenameStage.CLONING

    def clone(self) -> RenameStage:
        """Create the new provider as a copy of the old one."""
        try:
            self.ctx.providers.clone(self.old_name, self.new_name)
        except ProviderNotFoundError as e:
            return self._fail(SourceProviderNotFoundError(f"failed to clone provider: {e}"), e)
        except RECOVERABLE_ERRORS as e:
            return self._fail(CloneError(f"failed to clone provider: {e}"), e)

        logger.info(f"Provider successfully cloned from '{self.old_name}' to '{self.new_name}'")
        return RenameStage.REBINDING

    def rebind_workspaces(self) -> RenameStage:
        """Repoint every affected workspace; one failure does not stop the rest."""
        for workspace in self._affected:
            logger.info(f"Rebinding workspace {workspace.id} to provider {self.new_name}")
            try:
                self.ctx.workspaces.save(workspace.with_provider(self.new_name))
            except RECOVERABLE_ERRORS as e:
                logger.error(f"Failed to rebind workspace {workspace.id}: {e}")
                self.result.failures.append(RebindError(workspace.id, e))
            else:
                self.result.rebound.append(workspace.id)

        if self.result.failures:
            return RenameStage.ROLLING_BACK
        return RenameStage.UPDATING_DEFAULT

    def update_default(self) -> RenameStage:
        """Repoint the context's default provider if it named the old provider."""
        if self.ctx.default_provider != self.old_name:
            return RenameStage.COMMITTING

        self.ctx.set_default_provider(self.new_name)
        try:
            self.ctx.save_config()
        except RECOVERABLE_ERRORS as e:
            self.ctx.set_default_provider(self.old_name)
            logger.error(f"Failed to update default provider to '{self.new_name}': {e}")
            self.result.failures.append(DefaultUpdateError(e))
            return RenameStage.ROLLING_BACK

        self.result.default_updated = True
        logger.info(f"Updated default provider from '{self.old_name}' to '{self.new_name}'")
        return RenameStage.COMMITTING

    def commit(self) -> RenameStage:
        """Delete the old provider. The rename is complete either way."""
        self.result.succeeded = True
        try:
            self.ctx.providers.delete(self.old_name, ignore_not_found=True)
        except RECOVERABLE_ERRORS as e:
            logger.error(f"Failed to delete old provider {self.old_name}: {e}")
            return self._fail(StaleProviderError(self.old_name, e), e)

        logger.info(f"Old provider {self.old_name} deleted successfully")
        return RenameStage.DONE

    def roll_back(self) -> RenameStage:
        """Restore rebound workspaces to the old provider and delete the clone."""
        logger.info("Rebinding or default provider update failed, rolling back changes...")

        for workspace_id in self.result.rebound:
            try:
                workspace = self.ctx.workspaces.load(workspace_id)
                logger.info(f"Rolling back workspace {workspace_id} to original provider {self.old_name}")
                self.ctx.workspaces.save(workspace.with_provider(self.old_name))
            except RECOVERABLE_ERRORS as e:
                logger.error(f"Failed to roll back workspace {workspace_id}: {e}")
                self.result.rollback_failures.append(RollbackError(workspace_id, e))
            else:
                self.result.rolled_back.append(workspace_id)

        try:
            self.ctx.providers.delete(self.new_name, ignore_not_found=True)
        except RECOVERABLE_ERRORS as e:
            logger.error(f"Failed to delete cloned provider {self.new_name} during cleanup: {e}")
            self.result.cleanup_error = CleanupError(self.new_name, e)
        else:
            logger.info(f"Cloned provider {self.new_name} deleted successfully")

        error = RenameFailedError(
            self.result.failures,
            rollback_failures=self.result.rollback_failures,
            cleanup_error=self.result.cleanup_error,
        )
        return self._fail(error, self.result.failures[0])


def rename_provider(ctx: RegistryContext, old_name: str, new_name: str) -> RenameResult:
    """Rename a provider and rebind every workspace that uses it.

    See :class:`ProviderRenameSaga` for the steps and failure handling.
    """
    logger.info("Renaming provider using clone and rebinding workspaces")
    result = ProviderRenameSaga(ctx, old_name, new_name).run()
    logger.info(
        f"Successfully renamed provider '{old_name}' to '{new_name}' "
        "and rebound all associated workspaces"
    )
    return result
