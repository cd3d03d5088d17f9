"""
Cross-platform file system utilities for govm.

This module provides the file operations every other component builds on:
- Atomic whole-file writes (marker files, shims)
- Safe directory removal scoped to the manager root
- Archive extraction (tar.gz, zip) with traversal checks
- Execute-bit handling for generated scripts
- Staging directories that are always cleaned up

All operations handle platform differences transparently.
"""

import os
import shutil
import stat
import sys
import tarfile
import tempfile
import zipfile
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Optional, Union

from govm.core.exceptions import GovmIOError, InstallerError

# Platform detection
IS_WINDOWS = os.name == "nt"


# ============================================================================
# Error Handling
# ============================================================================


class ArchiveExtractionError(InstallerError):
    """Failed to extract an archive."""

    pass


class UnsupportedArchiveFormat(ArchiveExtractionError):
    """Archive format is not supported."""

    pass


class InsecureArchiveError(ArchiveExtractionError):
    """Archive contains insecure paths (directory traversal attempt)."""

    pass


# ============================================================================
# Path Utilities
# ============================================================================


def is_relative_to(path: Path, parent: Path) -> bool:
    """
    Check if path is relative to (under) parent directory.

    Args:
        path: Path to check
        parent: Parent directory

    Returns:
        True if path is under parent directory
    """
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False


# ============================================================================
# Safe File Operations
# ============================================================================


def atomic_write(
    file_path: Union[str, Path], content: Union[str, bytes], encoding: str = "utf-8"
) -> None:
    """
    Write file atomically using temp file + rename.

    The file is never observable in a partially-written state. If the write
    fails, the original file (if any) remains unchanged.

    Args:
        file_path: Path to write to
        content: Content to write (string or bytes)
        encoding: Text encoding (used only for string content)

    Raises:
        GovmIOError: If the file cannot be written

    Example:
        >>> atomic_write(Path.home() / ".govm" / "version", "1.22.0\\n")
    """
    file_path = Path(file_path)

    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)

        # Temp file in same directory keeps the rename on one filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
        )
    except OSError as e:
        raise GovmIOError(file_path, f"Failed to write file ({e})") from e

    temp_path = Path(temp_path_str)

    try:
        if isinstance(content, str):
            with open(temp_fd, "w", encoding=encoding, newline="") as f:
                f.write(content)
        else:
            with open(temp_fd, "wb") as f:
                f.write(content)

        # mkstemp creates 0600 files; keep the mode a plain write would give
        if not IS_WINDOWS:
            try:
                mode = stat.S_IMODE(file_path.stat().st_mode)
            except FileNotFoundError:
                mode = 0o644
            os.chmod(temp_path, mode)

        temp_path.replace(file_path)

    except OSError as e:
        try:
            temp_path.unlink(missing_ok=True)
        except OSError:
            pass
        raise GovmIOError(file_path, f"Failed to write file ({e})") from e


def remove_file(file_path: Union[str, Path]) -> bool:
    """
    Remove a file if it exists.

    Returns:
        True if a file was removed, False if it was already absent

    Raises:
        GovmIOError: If the file exists but cannot be removed
    """
    file_path = Path(file_path)
    try:
        file_path.unlink()
        return True
    except FileNotFoundError:
        return False
    except OSError as e:
        raise GovmIOError(file_path, f"Failed to remove file ({e})") from e


def safe_rmtree(
    path: Union[str, Path], require_prefix: Optional[Union[str, Path]] = None
) -> None:
    """
    Safely remove a directory tree with safeguards.

    Removing a path that does not exist is a no-op.

    Args:
        path: Directory to remove
        require_prefix: If specified, path must be under this directory

    Raises:
        ValueError: If path is not under require_prefix
        GovmIOError: If deletion fails

    Example:
        >>> safe_rmtree('~/.govm/versions/1.21.0', require_prefix='~/.govm/versions')
        >>> safe_rmtree('/usr/bin', require_prefix='/home')  # ValueError
    """
    path = Path(path).resolve()

    if require_prefix is not None:
        require_prefix = Path(require_prefix).resolve()
        if path == require_prefix or not is_relative_to(path, require_prefix):
            raise ValueError(
                f"Refusing to delete '{path}': not under required prefix '{require_prefix}'"
            )

    if not path.exists():
        return

    if not path.is_dir():
        raise GovmIOError(path, "Path is not a directory")

    def handle_remove_readonly(func, failed_path, _exc):
        """Error handler for read-only files (Windows, Go module cache)."""
        os.chmod(failed_path, stat.S_IWRITE | stat.S_IREAD | stat.S_IEXEC)
        func(failed_path)

    try:
        if sys.version_info >= (3, 12):
            shutil.rmtree(path, onexc=handle_remove_readonly)
        else:
            shutil.rmtree(path, onerror=handle_remove_readonly)
    except OSError as e:
        raise GovmIOError(path, f"Failed to remove directory ({e})") from e


def make_executable(path: Union[str, Path]) -> None:
    """
    Make a file readable and executable by everyone (mode | 0o555).

    Scripts need the read bit as well as the execute bit to run. On Windows
    this is a no-op.

    Raises:
        GovmIOError: If permissions cannot be changed
    """
    if IS_WINDOWS:
        return

    path = Path(path)
    try:
        mode = path.stat().st_mode
        path.chmod(mode | 0o555)
    except OSError as e:
        raise GovmIOError(path, f"Failed to make file executable ({e})") from e


# ============================================================================
# Archive Extraction
# ============================================================================


def _validate_archive_path(path: str, destination: Path) -> None:
    """
    Validate that an archive member path is safe to extract.

    Prevents directory traversal attacks (e.g., paths containing '../').

    Raises:
        InsecureArchiveError: If path attempts directory traversal
    """
    member_path = (destination / path).resolve()

    if not is_relative_to(member_path, destination.resolve()):
        raise InsecureArchiveError(
            f"Archive member '{path}' attempts directory traversal. "
            "This is a security risk and extraction has been blocked."
        )


def extract_archive(
    archive_path: Union[str, Path],
    destination: Union[str, Path],
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> None:
    """
    Extract an archive to a destination directory.

    Go releases ship as .tar.gz on Unix and .zip on Windows; both are
    supported. All member paths are validated before anything is written.

    Args:
        archive_path: Path to the archive file
        destination: Directory to extract to
        progress_callback: Optional callback(current, total) for progress

    Raises:
        UnsupportedArchiveFormat: If archive format is not recognized
        ArchiveExtractionError: If extraction fails
        InsecureArchiveError: If archive contains malicious paths
    """
    archive_path = Path(archive_path)
    destination = Path(destination)

    if not archive_path.exists():
        raise ArchiveExtractionError(f"Archive not found: {archive_path}")

    destination.mkdir(parents=True, exist_ok=True)

    archive_name = archive_path.name.lower()

    try:
        if archive_name.endswith(".zip"):
            _extract_zip(archive_path, destination, progress_callback)
        elif archive_name.endswith((".tar.gz", ".tgz")):
            _extract_tar(archive_path, destination, progress_callback)
        else:
            raise UnsupportedArchiveFormat(
                f"Unsupported archive format: {archive_path.name}. "
                "Supported: .tar.gz, .zip"
            )
    except ArchiveExtractionError:
        raise
    except (OSError, tarfile.TarError, zipfile.BadZipFile) as e:
        raise ArchiveExtractionError(f"Failed to extract {archive_path}: {e}") from e


def _extract_zip(
    archive_path: Path,
    destination: Path,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> None:
    """Extract a ZIP archive."""
    with zipfile.ZipFile(archive_path, "r") as zf:
        members = zf.namelist()
        total = len(members)

        for member in members:
            _validate_archive_path(member, destination)

        for i, member in enumerate(members):
            zf.extract(member, destination)
            if progress_callback:
                progress_callback(i + 1, total)


def _extract_tar(
    archive_path: Path,
    destination: Path,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> None:
    """Extract a gzip-compressed tar archive."""
    with tarfile.open(archive_path, "r:gz") as tar:
        members = tar.getmembers()
        total = len(members)

        for member in members:
            _validate_archive_path(member.name, destination)

        # The data filter (3.12+) also rejects absolute links and devices
        if sys.version_info >= (3, 12):
            tar.extractall(destination, filter="data")
        else:
            tar.extractall(destination)

        if progress_callback:
            progress_callback(total, total)


# ============================================================================
# Staging Directory Management
# ============================================================================


@contextmanager
def staging_directory(parent: Union[str, Path], prefix: str = "govm-"):
    """
    Context manager for a private staging directory with guaranteed cleanup.

    The directory is created under ``parent`` so that anything built inside
    it can be moved into place with an atomic rename on the same filesystem.

    Args:
        parent: Directory that will contain the staging directory
        prefix: Prefix for the staging directory name

    Yields:
        Path to the staging directory

    Example:
        >>> with staging_directory(root / "tmp") as stage:
        ...     extract_archive(archive, stage)
        ...     (stage / "go").rename(root / "versions" / "1.22.0")
    """
    parent = Path(parent)
    parent.mkdir(parents=True, exist_ok=True)
    stage = Path(tempfile.mkdtemp(prefix=prefix, dir=parent))

    try:
        yield stage
    finally:
        if stage.exists():
            safe_rmtree(stage)


__all__ = [
    "IS_WINDOWS",
    "ArchiveExtractionError",
    "UnsupportedArchiveFormat",
    "InsecureArchiveError",
    "is_relative_to",
    "atomic_write",
    "remove_file",
    "safe_rmtree",
    "make_executable",
    "extract_archive",
    "staging_directory",
]
