"""Provider rename stages with state machine validation.

Defines the stages of the rename saga and the legal transitions between
them. The orchestrator in :mod:`workbind.services.rename` moves through
these stages one handler at a time and never skips the table.
"""

from enum import Enum


class RenameStage(str, Enum):
    """Rename saga stages.

    String enum so stages can be logged and reported directly.
    """

    DISCOVERING = "discovering"  # Listing workspaces bound to the old name
    CLONING = "cloning"  # Copying the provider under the new name
    REBINDING = "rebinding"  # Repointing affected workspaces
    UPDATING_DEFAULT = "updating_default"  # Repointing the default provider
    COMMITTING = "committing"  # Deleting the old provider
    ROLLING_BACK = "rolling_back"  # Restoring workspaces, deleting the clone

    # Terminal stage (no transitions out)
    DONE = "done"


# Legal stage transitions
TRANSITIONS: dict[RenameStage, set[RenameStage]] = {
    # DONE on discovery/clone failure: nothing has been mutated yet
    RenameStage.DISCOVERING: {RenameStage.CLONING, RenameStage.DONE},
    RenameStage.CLONING: {RenameStage.REBINDING, RenameStage.DONE},
    RenameStage.REBINDING: {RenameStage.UPDATING_DEFAULT, RenameStage.ROLLING_BACK},
    RenameStage.UPDATING_DEFAULT: {RenameStage.COMMITTING, RenameStage.ROLLING_BACK},
    RenameStage.COMMITTING: {RenameStage.DONE},
    RenameStage.ROLLING_BACK: {RenameStage.DONE},
    RenameStage.DONE: set(),
}


def is_terminal(stage: RenameStage) -> bool:
    """Check if a stage is terminal (no transitions out)."""
    return not TRANSITIONS.get(stage)


def validate_transition(from_stage: RenameStage, to_stage: RenameStage) -> bool:
    """Validate a stage transition is legal.

    Args:
        from_stage: Current stage
        to_stage: Desired next stage

    Returns:
        True if transition is valid, False otherwise
    """
    return to_stage in TRANSITIONS.get(from_stage, set())


class InvalidTransitionError(Exception):
    """Raised when the saga attempts an illegal stage transition."""

    def __init__(self, from_stage: RenameStage, to_stage: RenameStage):
        self.from_stage = from_stage
        self.to_stage = to_stage
        super().__init__(
            f"invalid rename transition: {from_stage.value} -> {to_stage.value}"
        )
