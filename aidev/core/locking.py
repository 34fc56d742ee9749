"""
Concurrent access control for project bootstrapping.

Two shells entering the same project for the first time would otherwise
race on scaffold creation and the ``.gitignore`` append. The project lock
serializes them with a cross-process file lock kept outside the project
directory.

Usage:
    from aidev.core.locking import LockManager

    lock_manager = LockManager()
    with lock_manager.project_lock(Path.cwd(), timeout=10):
        # Safely create scaffold files
        pass
"""

import hashlib
import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from filelock import FileLock, Timeout as LockTimeout

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "AIDEV_HOME"


def get_aidev_home() -> Path:
    """
    Get the aidev home directory used for lock files.

    Honors ``$AIDEV_HOME`` and falls back to ``~/.aidev``.

    Returns:
        Path to aidev home directory
    """
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".aidev"


class LockManager:
    """
    Manages locks for aidev resources.

    Uses file-based locking with the `filelock` library for cross-platform
    compatibility and automatic cleanup on process death.

    Attributes:
        lock_dir: Directory where lock files are stored
    """

    def __init__(self, lock_dir: Optional[Path] = None):
        """
        Initialize lock manager.

        Args:
            lock_dir: Directory for lock files (default: aidev home/lock/)
        """
        if lock_dir is None:
            lock_dir = get_aidev_home() / "lock"

        self.lock_dir = Path(lock_dir)
        self.lock_dir.mkdir(parents=True, exist_ok=True)

    def project_lock_path(self, project_path: Path) -> Path:
        """Lock file used for ``project_path``."""
        digest = hashlib.sha256(str(Path(project_path).resolve()).encode("utf-8"))
        return self.lock_dir / f"project-{digest.hexdigest()[:16]}.lock"

    @contextmanager
    def project_lock(self, project_path: Path, timeout: float = 10):
        """
        Acquire lock for project scaffolding.

        Args:
            project_path: Project root directory
            timeout: Maximum wait time in seconds (default: 10)

        Yields:
            None

        Raises:
            LockTimeout: If lock can't be acquired within timeout
        """
        lock_path = self.project_lock_path(project_path)
        lock = FileLock(lock_path, timeout=timeout)

        try:
            with lock:
                logger.debug(f"Acquired project lock: {lock_path}")
                yield
                logger.debug(f"Released project lock: {lock_path}")
        except LockTimeout as e:
            logger.error(
                f"Could not acquire project lock after {timeout}s. "
                "Another aidev session may be bootstrapping this project."
            )
            raise LockTimeout(
                f"Could not acquire project lock after {timeout}s."
            ) from e


__all__ = [
    "LockManager",
    "LockTimeout",
    "get_aidev_home",
]
