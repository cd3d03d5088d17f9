"""
Go release catalog model.

The catalog is the JSON document published at
``https://go.dev/dl/?mode=json&include=all``: a list of releases, each with
the files built for every platform. This module parses it into dataclasses
and answers the two lookups install needs.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

from govm.core.exceptions import (
    CatalogEntryMissingError,
    CatalogError,
    NoPlatformBinaryError,
)
from govm.core.platform import PlatformInfo
from govm.versions.normalize import canonical

logger = logging.getLogger(__name__)

ARCHIVE_KIND = "archive"


@dataclass(frozen=True)
class CatalogFile:
    """A downloadable file of one release."""

    filename: str
    os: str
    arch: str
    sha256: str
    size: int
    kind: str

    def matches(self, platform_info: PlatformInfo) -> bool:
        """Check whether this is the install archive for a platform."""
        return (
            self.kind == ARCHIVE_KIND
            and self.os == platform_info.os
            and self.arch == platform_info.arch
        )


@dataclass(frozen=True)
class CatalogEntry:
    """One Go release as published in the catalog."""

    version: str
    """Display form, e.g. 'go1.22.0'"""

    stable: bool

    files: List[CatalogFile] = field(default_factory=list)

    @property
    def canonical_version(self) -> str:
        return canonical(self.version)

    def archive_for(self, platform_info: PlatformInfo) -> Optional[CatalogFile]:
        """Return the install archive for a platform, if one was published."""
        for catalog_file in self.files:
            if catalog_file.matches(platform_info):
                return catalog_file
        return None


def parse_catalog(data: Any) -> List[CatalogEntry]:
    """
    Parse the decoded catalog JSON.

    Args:
        data: Decoded JSON (a list of release objects)

    Returns:
        Catalog entries in published order

    Raises:
        CatalogError: If the document does not have the expected shape
    """
    if not isinstance(data, list):
        raise CatalogError("Release catalog must be a JSON list")

    entries = []
    for item in data:
        try:
            files = [
                CatalogFile(
                    filename=str(f["filename"]),
                    os=str(f.get("os", "")),
                    arch=str(f.get("arch", "")),
                    sha256=str(f.get("sha256", "")),
                    size=int(f.get("size", 0)),
                    kind=str(f.get("kind", "")),
                )
                for f in item.get("files", [])
            ]
            entries.append(
                CatalogEntry(
                    version=str(item["version"]),
                    stable=bool(item.get("stable", False)),
                    files=files,
                )
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise CatalogError(f"Malformed release catalog entry: {e}") from e

    logger.debug(f"Parsed release catalog with {len(entries)} entries")
    return entries


def find_entry(entries: Iterable[CatalogEntry], version: str) -> CatalogEntry:
    """
    Find the catalog entry for a canonical version.

    Raises:
        CatalogEntryMissingError: If no entry canonicalizes to ``version``
    """
    for entry in entries:
        if entry.canonical_version == version:
            return entry
    raise CatalogEntryMissingError(version)


def find_archive(entry: CatalogEntry, platform_info: PlatformInfo) -> CatalogFile:
    """
    Find the install archive of a release for a platform.

    Raises:
        NoPlatformBinaryError: If the release has no archive for the platform
    """
    archive = entry.archive_for(platform_info)
    if archive is None:
        raise NoPlatformBinaryError(
            entry.canonical_version, platform_info.os, platform_info.arch
        )
    return archive


__all__ = [
    "ARCHIVE_KIND",
    "CatalogFile",
    "CatalogEntry",
    "parse_catalog",
    "find_entry",
    "find_archive",
]
