"""Atomic file replacement for registry records."""

import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def atomic_write(path: str | Path, content: bytes | str) -> None:
    """Replace ``path`` with ``content`` in a single rename.

    The data goes to a hidden temp file next to the target first, so a
    crash leaves either the old record or the new one on disk.

    Raises:
        OSError: If the directory, temp file or rename fails
    """
    path = Path(path)
    if isinstance(content, str):
        content = content.encode()
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as tmp:
            tmp.write(content)
            tmp.flush()
            os.fsync(tmp.fileno())
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    logger.debug(f"Wrote {len(content)} bytes to {path}")


def safe_read(path: str | Path) -> bytes | None:
    """Record bytes, or None when the file does not exist."""
    try:
        return Path(path).read_bytes()
    except FileNotFoundError:
        return None
