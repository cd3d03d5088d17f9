"""
Installed version registry.

The set of installed versions is the listing of ``<root>/versions``; there
is no index file that could drift from what is on disk. A version counts as
installed exactly when its directory exists, which relies on installers
publishing directories atomically (see ``govm.toolchain.installer``).
"""

import logging
from pathlib import Path
from typing import List

from govm.core.exceptions import GovmIOError
from govm.core.filesystem import IS_WINDOWS, safe_rmtree
from govm.versions.normalize import canonical, is_safe_name
from govm.versions.ordering import sort_descending

logger = logging.getLogger(__name__)


class InstallationRegistry:
    """
    Filesystem-backed view of installed Go versions.

    Every query re-reads the directory, so concurrent installs and removals
    by other processes are observed immediately.

    Example:
        >>> registry = InstallationRegistry(paths.versions_dir)
        >>> registry.list_installed()
        ['1.22.0', '1.21.5']
        >>> registry.is_installed('go1.22.0')
        True
    """

    def __init__(self, versions_dir: Path):
        self.versions_dir = Path(versions_dir)

    def list_installed(self) -> List[str]:
        """
        List installed versions, most recent first.

        Files, hidden entries and names that are not canonical versions are
        skipped rather than failing the whole listing.

        Raises:
            GovmIOError: If the versions directory exists but can't be listed
        """
        if not self.versions_dir.is_dir():
            return []

        versions = []
        try:
            for entry in self.versions_dir.iterdir():
                name = entry.name
                if name.startswith(".") or not is_safe_name(name):
                    logger.debug(f"Skipping non-version entry: {entry}")
                    continue
                if not entry.is_dir():
                    continue
                versions.append(name)
        except OSError as e:
            raise GovmIOError(
                self.versions_dir, f"Failed to list installed versions ({e})"
            ) from e

        return sort_descending(versions)

    def install_dir(self, version: str) -> Path:
        """Get the install directory of a version (whether or not it exists)."""
        return self.versions_dir / canonical(version)

    def is_installed(self, version: str) -> bool:
        """
        Check whether a version is installed.

        Agrees with ``list_installed``: names that are not a single canonical
        directory entry (".." or "1.22.0/bin") are never installed.
        """
        version = canonical(version)
        if not is_safe_name(version):
            return False
        return self.install_dir(version).is_dir()

    def binary_path(self, version: str, binary: str) -> Path:
        """Get the path of a toolchain binary inside an install directory."""
        name = f"{binary}.exe" if IS_WINDOWS else binary
        return self.install_dir(version) / "bin" / name

    def remove(self, version: str) -> None:
        """
        Remove an install directory.

        Removing a version that is not installed is a no-op.

        Raises:
            GovmIOError: If the directory cannot be removed
        """
        version = canonical(version)
        if not is_safe_name(version):
            return

        install_dir = self.install_dir(version)
        if not install_dir.exists():
            logger.debug(f"Go {version} not installed, nothing to remove")
            return

        safe_rmtree(install_dir, require_prefix=self.versions_dir)
        logger.debug(f"Removed {install_dir}")


__all__ = [
    "InstallationRegistry",
]
