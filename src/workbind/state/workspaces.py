"""File-backed workspace registry.

Each workspace is stored as JSON in
``<home>/contexts/<context>/workspaces/<id>/workspace.json``. Every save is a
single atomic file replacement, so a record is never observed half-written.
"""

import json
import logging
import shutil
from pathlib import Path

from ..core import paths
from ..core.naming import is_path_safe_name
from ..errors import LoadError, SaveError, WorkspaceNotFoundError
from ..utils.storage import atomic_write, safe_read
from .models import WorkspaceRecord, now_iso

logger = logging.getLogger(__name__)


class WorkspaceRegistry:
    """Lists, loads and persists workspace records of one context."""

    def __init__(self, home: Path, context: str):
        """Initialize registry.

        Args:
            home: workbind home directory
            context: Context whose workspaces this registry manages
        """
        self.home = Path(home)
        self.context = context
        self.base_dir = paths.workspaces_dir(self.home, context)

    def _record_path(self, workspace_id: str) -> Path:
        if not is_path_safe_name(workspace_id):
            raise LoadError(f"invalid workspace id: {workspace_id!r}")
        return self.base_dir / workspace_id / paths.WORKSPACE_FILENAME

    def list_workspaces(self) -> list[WorkspaceRecord]:
        """List all workspaces in the context, ordered by id.

        Raises:
            LoadError: If the directory or any record cannot be read
        """
        if not self.base_dir.exists():
            return []

        try:
            entries = sorted(p for p in self.base_dir.iterdir() if p.is_dir())
        except OSError as e:
            raise LoadError(f"listing workspaces in {self.base_dir}: {e}") from e

        records = []
        for entry in entries:
            if not (entry / paths.WORKSPACE_FILENAME).exists():
                logger.debug(f"Skipping {entry}: no {paths.WORKSPACE_FILENAME}")
                continue
            records.append(self.load(entry.name))
        return records

    def load(self, workspace_id: str) -> WorkspaceRecord:
        """Load a workspace record by id.

        Raises:
            WorkspaceNotFoundError: If no such workspace exists
            LoadError: If the record is unreadable or malformed
        """
        path = self._record_path(workspace_id)
        try:
            raw = safe_read(path)
        except OSError as e:
            raise LoadError(f"reading workspace {workspace_id}: {e}") from e
        if raw is None:
            raise WorkspaceNotFoundError(workspace_id, self.context)

        try:
            data = json.loads(raw)
            return WorkspaceRecord.from_dict(data)
        except (json.JSONDecodeError, TypeError, AttributeError) as e:
            raise LoadError(f"parsing workspace {workspace_id}: {e}") from e

    def save(self, record: WorkspaceRecord) -> None:
        """Persist a workspace record, replacing any previous version.

        Raises:
            SaveError: If the record cannot be written
        """
        path = self._record_path(record.id)
        if not record.created_at:
            record.created_at = now_iso()
        record.context = self.context

        content = json.dumps(record.to_dict(), indent=2, sort_keys=True).encode()
        try:
            atomic_write(path, content)
        except OSError as e:
            raise SaveError(f"saving workspace {record.id}: {e}") from e
        logger.debug(f"Saved workspace {record.id} (provider {record.provider_name})")

    def exists(self, workspace_id: str) -> bool:
        """Check if a workspace exists."""
        return self._record_path(workspace_id).exists()

    def delete(self, workspace_id: str) -> None:
        """Remove a workspace record.

        Raises:
            WorkspaceNotFoundError: If no such workspace exists
        """
        record_dir = self._record_path(workspace_id).parent
        if not record_dir.exists():
            raise WorkspaceNotFoundError(workspace_id, self.context)
        shutil.rmtree(record_dir)
        logger.debug(f"Deleted workspace {workspace_id}")

    def bound_to(self, provider_name: str) -> list[WorkspaceRecord]:
        """Workspaces whose binding names the given provider, in list order."""
        return [w for w in self.list_workspaces() if w.provider_name == provider_name]
