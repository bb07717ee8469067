"""
Module: store.file_locking

Purpose:
    Cross-platform file locking for the roadmap data file and the
    settings file. Uses portalocker for Mac, Windows, and Linux
    compatibility.

    Locks are taken on a sidecar ``<name>.lock`` file so the data file
    itself can be replaced atomically while the lock is held.

Key Functions:
    - locked_path: Context manager holding a lock for a path
    - locked_read_text: Read a file under a shared lock
    - locked_write_text: Atomic write under an exclusive lock

Dependencies:
    - portalocker: Cross-platform file locking

Used By:
    - store.repository: JsonFileRepository
    - settings.store: SettingsStore
"""

from __future__ import annotations

import logging
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

import portalocker

logger = logging.getLogger(__name__)


def lock_path_for(path: Path) -> Path:
    """Sidecar lock file for ``path``."""
    return path.with_name(path.name + ".lock")


@contextmanager
def locked_path(
    path: Path,
    lock_type: int = portalocker.LOCK_EX,
) -> Generator[None, None, None]:
    """
    Context manager holding a lock associated with ``path``.

    Args:
        path: Data file to protect
        lock_type: LOCK_EX for exclusive, LOCK_SH for shared

    Example:
        >>> with locked_path(data_path):
        ...     data_path.write_text("...")
    """
    lock_file = lock_path_for(path)
    lock_file.parent.mkdir(parents=True, exist_ok=True)

    with open(lock_file, "a", encoding="utf-8") as f:
        portalocker.lock(f, lock_type)
        try:
            yield
        finally:
            portalocker.unlock(f)


def locked_read_text(path: Path) -> Optional[str]:
    """
    Read a text file under a shared lock.

    Returns:
        File contents, or None if the file does not exist
    """
    with locked_path(path, portalocker.LOCK_SH):
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")


def locked_write_text(path: Path, text: str) -> None:
    """
    Replace a text file atomically under an exclusive lock.

    The content goes to a temporary file in the same directory which is
    then renamed over ``path``.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    with locked_path(path, portalocker.LOCK_EX):
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            suffix=path.suffix or ".tmp",
            dir=path.parent,
            delete=False,
        ) as f:
            f.write(text)
            temp_path = Path(f.name)

        temp_path.replace(path)

    logger.debug(f"Wrote {path.name}")


def locked_delete(path: Path) -> bool:
    """
    Delete a file under an exclusive lock.

    Returns:
        True if a file was removed
    """
    with locked_path(path, portalocker.LOCK_EX):
        if path.exists():
            path.unlink()
            return True
    return False
