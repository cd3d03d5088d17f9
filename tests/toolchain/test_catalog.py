"""
Unit tests for govm.toolchain.catalog module.
"""

import pytest

from govm.core.exceptions import (
    CatalogEntryMissingError,
    CatalogError,
    NoPlatformBinaryError,
)
from govm.core.platform import PlatformInfo
from govm.toolchain.catalog import find_archive, find_entry, parse_catalog

CATALOG_JSON = [
    {
        "version": "go1.22.0",
        "stable": True,
        "files": [
            {
                "filename": "go1.22.0.src.tar.gz",
                "os": "",
                "arch": "",
                "version": "go1.22.0",
                "sha256": "4d196c3d41a0d6c1dfc64d04e3cc1f608b0c436bd87b7060ce3e23234e1f4d5c",
                "size": 27562476,
                "kind": "source",
            },
            {
                "filename": "go1.22.0.linux-amd64.tar.gz",
                "os": "linux",
                "arch": "amd64",
                "version": "go1.22.0",
                "sha256": "f6c8a87aa03b92c4b0bf3d558e28ea03006eb29db78917daec5cfb6ec1046265",
                "size": 68988925,
                "kind": "archive",
            },
            {
                "filename": "go1.22.0.windows-amd64.msi",
                "os": "windows",
                "arch": "amd64",
                "version": "go1.22.0",
                "sha256": "eb3bd4b4e2a4d4b8a8d1fd4e3e1f4a8c0c0a3d1e7e4b0c2b0a9e9f1b2c3d4e5f",
                "size": 61911040,
                "kind": "installer",
            },
            {
                "filename": "go1.22.0.windows-amd64.zip",
                "os": "windows",
                "arch": "amd64",
                "version": "go1.22.0",
                "sha256": "78b3158fe3aa358e0b6c9f26ecd338f9a11441e88bc434ae2e9f0ca2b0cc4dd3",
                "size": 75966223,
                "kind": "archive",
            },
        ],
    },
    {"version": "go1.23rc1", "stable": False, "files": []},
]

LINUX_AMD64 = PlatformInfo("linux", "amd64")
WINDOWS_AMD64 = PlatformInfo("windows", "amd64")


class TestParseCatalog:
    """Tests for parse_catalog()."""

    def test_parses_entries_in_order(self):
        """Test entries keep the published order."""
        entries = parse_catalog(CATALOG_JSON)

        assert [e.version for e in entries] == ["go1.22.0", "go1.23rc1"]
        assert entries[0].stable is True
        assert entries[1].stable is False
        assert entries[0].canonical_version == "1.22.0"
        assert len(entries[0].files) == 4

    def test_file_fields(self):
        """Test file descriptors carry platform, checksum and kind."""
        archive = parse_catalog(CATALOG_JSON)[0].files[1]

        assert archive.filename == "go1.22.0.linux-amd64.tar.gz"
        assert archive.os == "linux"
        assert archive.arch == "amd64"
        assert archive.size == 68988925
        assert archive.kind == "archive"

    def test_not_a_list(self):
        """Test a non-list document is rejected."""
        with pytest.raises(CatalogError):
            parse_catalog({"version": "go1.22.0"})

    def test_malformed_entry(self):
        """Test entries without a version are rejected."""
        with pytest.raises(CatalogError):
            parse_catalog([{"stable": True, "files": []}])


class TestFindEntry:
    """Tests for find_entry()."""

    def test_matches_canonical_version(self):
        """Test lookups compare canonical forms."""
        entry = find_entry(parse_catalog(CATALOG_JSON), "1.22.0")
        assert entry.version == "go1.22.0"

    def test_missing_version(self):
        """Test an unknown version raises CatalogEntryMissingError with a hint."""
        with pytest.raises(CatalogEntryMissingError) as exc_info:
            find_entry(parse_catalog(CATALOG_JSON), "1.99.0")

        assert "1.99.0" in str(exc_info.value)
        assert "list-remote" in exc_info.value.hint


class TestFindArchive:
    """Tests for find_archive()."""

    def test_picks_archive_kind(self):
        """Test the archive is chosen over installers and sources."""
        entry = parse_catalog(CATALOG_JSON)[0]

        assert find_archive(entry, LINUX_AMD64).filename == (
            "go1.22.0.linux-amd64.tar.gz"
        )
        assert find_archive(entry, WINDOWS_AMD64).filename == (
            "go1.22.0.windows-amd64.zip"
        )

    def test_no_archive_for_platform(self):
        """Test a missing platform raises NoPlatformBinaryError."""
        entry = parse_catalog(CATALOG_JSON)[0]

        with pytest.raises(NoPlatformBinaryError) as exc_info:
            find_archive(entry, PlatformInfo("darwin", "arm64"))

        assert exc_info.value.os_name == "darwin"
        assert exc_info.value.arch == "arm64"
