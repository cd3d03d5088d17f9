"""Fake installer fixtures for testing.

``FakeInstaller`` implements the ``Installer`` interface without any
network access: its catalog is a list of ``CatalogEntry`` objects and
``fetch_and_place`` creates a minimal Go tree.
"""

import os
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

import pytest

from govm.core.interfaces import Installer
from govm.core.platform import PlatformInfo
from govm.toolchain.catalog import CatalogEntry, CatalogFile

TEST_PLATFORM = PlatformInfo(os="linux", arch="amd64")


def make_catalog_entry(
    version: str,
    stable: bool = True,
    platforms: Iterable[PlatformInfo] = (TEST_PLATFORM,),
) -> CatalogEntry:
    """Build a catalog entry with one archive per platform and a source file."""
    files = [
        CatalogFile(
            filename=f"{version}.src.tar.gz",
            os="",
            arch="",
            sha256="",
            size=0,
            kind="source",
        )
    ]
    for platform_info in platforms:
        extension = "zip" if platform_info.os == "windows" else "tar.gz"
        files.append(
            CatalogFile(
                filename=f"{version}.{platform_info.os}-{platform_info.arch}.{extension}",
                os=platform_info.os,
                arch=platform_info.arch,
                sha256="0" * 64,
                size=1024,
                kind="archive",
            )
        )
    return CatalogEntry(version=version, stable=stable, files=files)


class FakeInstaller(Installer):
    """
    In-memory installer.

    Attributes:
        entries: Catalog returned by ``list_catalog``
        placed: Archives passed to ``fetch_and_place``, in order
        error: Exception raised by ``fetch_and_place`` instead of installing
    """

    def __init__(
        self,
        entries: Optional[List[CatalogEntry]] = None,
        binaries: Sequence[str] = ("go", "gofmt"),
    ):
        self.entries = entries if entries is not None else []
        self.binaries = binaries
        self.placed: List[CatalogFile] = []
        self.catalog_requests = 0
        self.error: Optional[Exception] = None

    def list_catalog(self) -> List[CatalogEntry]:
        self.catalog_requests += 1
        return list(self.entries)

    def fetch_and_place(self, archive: CatalogFile, destination: Path) -> None:
        if self.error is not None:
            raise self.error

        self.placed.append(archive)
        bin_dir = Path(destination) / "bin"
        bin_dir.mkdir(parents=True)
        for binary in self.binaries:
            name = f"{binary}.exe" if os.name == "nt" else binary
            (bin_dir / name).write_text("#!/bin/sh\n")
            (bin_dir / name).chmod(0o755)


@pytest.fixture
def fake_installer() -> FakeInstaller:
    """
    Create a fake installer with a small catalog.

    The catalog lists 1.23rc1 (unstable), 1.22.0, 1.21.5 and 1.20.0, in the
    newest-first order go.dev publishes.
    """
    return FakeInstaller(
        [
            make_catalog_entry("go1.23rc1", stable=False),
            make_catalog_entry("go1.22.0"),
            make_catalog_entry("go1.21.5"),
            make_catalog_entry("go1.20.0"),
        ]
    )
