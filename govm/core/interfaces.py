"""
Core interfaces for govm.

The lifecycle operations depend only on these abstractions. Network and
archive handling live behind ``Installer`` so the resolution and shim logic
can be exercised without any I/O beyond the local filesystem.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from govm.toolchain.catalog import CatalogEntry, CatalogFile


class Installer(ABC):
    """
    Abstract interface for components that fetch and unpack Go releases.

    Implementations must populate ``destination`` completely or not at all:
    the installed set is derived from the directory listing, so a partially
    written install directory would be reported as installed.
    """

    @abstractmethod
    def list_catalog(self) -> Sequence["CatalogEntry"]:
        """
        Fetch the release catalog.

        Returns:
            Catalog entries, newest first as published

        Raises:
            CatalogError: If the catalog cannot be fetched or parsed
        """
        pass

    @abstractmethod
    def fetch_and_place(self, archive: "CatalogFile", destination: Path) -> None:
        """
        Download an archive and publish its Go tree at ``destination``.

        Args:
            archive: Catalog file descriptor for the current platform
            destination: Install directory; must not exist beforehand

        Raises:
            InstallerError: If any step fails; ``destination`` is then absent
        """
        pass


__all__ = [
    "Installer",
]
