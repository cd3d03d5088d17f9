"""
Concurrent access control for govm.

Shim-triggered invocations may run in many processes at once. Reads never
lock: marker and shim writes are atomic replacements. The one operation
that must be serialized is installing the same version from two processes,
which is what this module provides.

Usage:
    from govm.core.locking import LockManager

    lock_manager = LockManager(paths.lock_dir)
    with lock_manager.version_lock("1.22.0"):
        # Only one process installs 1.22.0 at a time
        pass
"""

import logging
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock, Timeout as LockTimeout

logger = logging.getLogger(__name__)


class LockManager:
    """
    Manages cross-process locks for govm resources.

    Uses file-based locking with the `filelock` library for cross-platform
    compatibility and automatic release on process death.

    Attributes:
        lock_dir: Directory where lock files are stored
    """

    def __init__(self, lock_dir: Path):
        self.lock_dir = Path(lock_dir)
        self.lock_dir.mkdir(parents=True, exist_ok=True)

    def _lock_path(self, version: str) -> Path:
        safe_id = version.replace("/", "-").replace("\\", "-").replace(":", "-")
        return self.lock_dir / f"version-{safe_id}.lock"

    @contextmanager
    def version_lock(self, version: str, timeout: int = 600):
        """
        Acquire lock for installing a specific version.

        Args:
            version: Canonical version identifier (e.g., '1.22.0')
            timeout: Maximum wait time in seconds (default: 600 for long downloads)

        Yields:
            None

        Raises:
            LockTimeout: If lock can't be acquired within timeout

        Example:
            >>> with lock_manager.version_lock('1.22.0'):
            ...     installer.fetch_and_place(archive, destination)
        """
        lock_path = self._lock_path(version)
        lock = FileLock(lock_path, timeout=timeout)

        try:
            with lock:
                logger.debug(f"Acquired version lock: {lock_path}")
                yield
                logger.debug(f"Released version lock: {lock_path}")
        except LockTimeout as e:
            logger.error(
                f"Could not acquire install lock for Go {version} after {timeout}s. "
                "Another govm process may be installing this version."
            )
            raise LockTimeout(lock_path) from e


__all__ = [
    "LockManager",
    "LockTimeout",
]
