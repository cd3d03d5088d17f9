"""
Unit tests for the locking module.

Tests cover:
- Lock acquisition and release
- Timeout behavior
- Per-version lock files
"""

import pytest
from filelock import FileLock, Timeout as LockTimeout

from govm.core.locking import LockManager


class TestLockManager:
    """Tests for LockManager class."""

    def test_creates_lock_dir(self, tmp_path):
        """Test the lock directory is created."""
        lock_dir = tmp_path / "lock"
        manager = LockManager(lock_dir)

        assert manager.lock_dir == lock_dir
        assert lock_dir.is_dir()

    def test_version_lock_acquire_and_release(self, tmp_path):
        """Test the lock can be taken again after release."""
        manager = LockManager(tmp_path)

        with manager.version_lock("1.22.0", timeout=5):
            assert (tmp_path / "version-1.22.0.lock").exists()

        with manager.version_lock("1.22.0", timeout=5):
            pass

    def test_different_versions_do_not_block(self, tmp_path):
        """Test locks for different versions are independent."""
        manager = LockManager(tmp_path)

        with manager.version_lock("1.22.0", timeout=1):
            with manager.version_lock("1.21.5", timeout=1):
                pass

    def test_timeout(self, tmp_path):
        """Test a held lock times out for another holder."""
        manager = LockManager(tmp_path)
        other = FileLock(tmp_path / "version-1.22.0.lock")
        other.acquire()
        try:
            with pytest.raises(LockTimeout):
                with manager.version_lock("1.22.0", timeout=0.1):
                    pass
        finally:
            other.release()

    def test_exception_releases_lock(self, tmp_path):
        """Test the lock is released when the body raises."""
        manager = LockManager(tmp_path)

        with pytest.raises(RuntimeError):
            with manager.version_lock("1.22.0", timeout=5):
                raise RuntimeError("install failed")

        with manager.version_lock("1.22.0", timeout=0.1):
            pass

    def test_unsafe_characters_in_name(self, tmp_path):
        """Test separators in the identifier don't escape the lock dir."""
        manager = LockManager(tmp_path)
        with manager.version_lock("../1.22.0", timeout=1):
            pass
        assert list(tmp_path.glob("version-*.lock"))
