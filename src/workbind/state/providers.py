"""File-backed provider registry.

Each provider owns a directory ``<home>/contexts/<context>/providers/<name>/``
holding ``provider.yaml`` plus whatever files the provider driver keeps next
to it. Cloning copies the whole directory and rewrites only the name.
"""

import logging
import shutil
from pathlib import Path

from ..core import paths
from ..core.naming import is_path_safe_name, validate_provider_name
from ..errors import (
    ConfigError,
    LoadError,
    ProviderExistsError,
    ProviderNotFoundError,
    SaveError,
)
from .models import ProviderRecord, now_iso

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Creates, clones, renames and deletes provider records of one context.

    Name validity and uniqueness are enforced here, so callers can rely on
    ``clone`` and ``add`` rejecting bad or duplicate names before anything
    is written.
    """

    def __init__(self, home: Path, context: str):
        """Initialize registry.

        Args:
            home: workbind home directory
            context: Context whose providers this registry manages
        """
        self.home = Path(home)
        self.context = context
        self.base_dir = paths.providers_dir(self.home, context)

    def _provider_dir(self, name: str) -> Path:
        return self.base_dir / name

    def _record_path(self, name: str) -> Path:
        return self._provider_dir(name) / paths.PROVIDER_FILENAME

    def exists(self, name: str) -> bool:
        """Check if a provider exists."""
        if not is_path_safe_name(name):
            return False
        return self._record_path(name).exists()

    def get(self, name: str) -> ProviderRecord:
        """Load a provider record.

        Raises:
            ProviderNotFoundError: If the provider does not exist
            LoadError: If the record is malformed
        """
        if not self.exists(name):
            raise ProviderNotFoundError(name, self.context)
        try:
            return ProviderRecord.from_yaml(self._record_path(name))
        except ConfigError as e:
            raise LoadError(f"loading provider '{name}': {e}") from e

    def list_providers(self) -> list[ProviderRecord]:
        """List all providers, ordered by name."""
        if not self.base_dir.exists():
            return []
        return [
            self.get(entry.name)
            for entry in sorted(self.base_dir.iterdir())
            if (entry / paths.PROVIDER_FILENAME).exists()
        ]

    def add(self, record: ProviderRecord) -> ProviderRecord:
        """Create a new provider record.

        Raises:
            InvalidProviderNameError: If the name is not valid
            ProviderExistsError: If a provider with that name exists
            SaveError: If the record cannot be written
        """
        validate_provider_name(record.name)
        if self.exists(record.name):
            raise ProviderExistsError(record.name, self.context)
        if not record.created_at:
            record.created_at = now_iso()
        self._write(record)
        logger.info(f"Added provider {record.name} in context {self.context}")
        return record

    def save(self, record: ProviderRecord) -> None:
        """Overwrite an existing provider record.

        Raises:
            ProviderNotFoundError: If the provider does not exist
            SaveError: If the record cannot be written
        """
        if not self.exists(record.name):
            raise ProviderNotFoundError(record.name, self.context)
        self._write(record)

    def clone(self, source_name: str, new_name: str) -> ProviderRecord:
        """Create ``new_name`` as a verbatim copy of ``source_name``.

        The new name is validated and checked for collisions before the
        source is looked up, so nothing is written on failure.

        Raises:
            InvalidProviderNameError: If ``new_name`` is not valid
            ProviderExistsError: If ``new_name`` already exists
            ProviderNotFoundError: If ``source_name`` does not exist
            SaveError: If copying fails
        """
        validate_provider_name(new_name)
        if self.exists(new_name):
            raise ProviderExistsError(new_name, self.context)
        source = self.get(source_name)

        target_dir = self._provider_dir(new_name)
        try:
            shutil.copytree(self._provider_dir(source_name), target_dir)
        except OSError as e:
            shutil.rmtree(target_dir, ignore_errors=True)
            raise SaveError(f"copying provider '{source_name}' to '{new_name}': {e}") from e

        clone = source.model_copy(update={"name": new_name, "created_at": now_iso()}, deep=True)
        try:
            self._write(clone)
        except SaveError:
            shutil.rmtree(target_dir, ignore_errors=True)
            raise
        logger.info(f"Cloned provider {source_name} to {new_name}")
        return clone

    def rename(self, old_name: str, new_name: str) -> ProviderRecord:
        """Rename a provider in place.

        Workspaces bound to ``old_name`` are not touched; use the rename
        saga in :mod:`workbind.services.rename` to keep them consistent.

        Raises:
            InvalidProviderNameError: If ``new_name`` is not valid
            ProviderExistsError: If ``new_name`` already exists
            ProviderNotFoundError: If ``old_name`` does not exist
        """
        validate_provider_name(new_name)
        if self.exists(new_name):
            raise ProviderExistsError(new_name, self.context)
        record = self.get(old_name)

        try:
            self._provider_dir(old_name).rename(self._provider_dir(new_name))
        except OSError as e:
            raise SaveError(f"renaming provider '{old_name}' to '{new_name}': {e}") from e

        record.name = new_name
        self._write(record)
        logger.info(f"Renamed provider {old_name} to {new_name}")
        return record

    def delete(self, name: str, ignore_not_found: bool = False) -> bool:
        """Delete a provider and everything in its directory.

        Args:
            name: Provider name
            ignore_not_found: Return False instead of raising when missing

        Returns:
            True if the provider was removed

        Raises:
            ProviderNotFoundError: If missing and ``ignore_not_found`` is False
            SaveError: If the directory cannot be removed
        """
        # Unsafe names resolve outside base_dir and are never removed
        provider_dir = self._provider_dir(name) if is_path_safe_name(name) else None
        if provider_dir is None or not provider_dir.exists():
            if ignore_not_found:
                return False
            raise ProviderNotFoundError(name, self.context)

        try:
            shutil.rmtree(provider_dir)
        except OSError as e:
            raise SaveError(f"deleting provider '{name}': {e}") from e
        logger.info(f"Deleted provider {name} from context {self.context}")
        return True

    def _write(self, record: ProviderRecord) -> None:
        try:
            record.to_yaml(self._record_path(record.name))
        except OSError as e:
            raise SaveError(f"saving provider '{record.name}': {e}") from e
