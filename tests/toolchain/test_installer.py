"""
Unit tests for govm.toolchain.installer module.

HTTP is mocked with ``responses``; archives are real tar.gz files built in
the test's temporary directory.
"""

import hashlib
import tarfile
from pathlib import Path

import pytest
import responses

from govm.core.config import DownloadConfig, GovmConfig
from govm.core.download import USER_AGENT, ChecksumError, DownloadError
from govm.core.exceptions import CatalogError, InstallerError
from govm.toolchain.catalog import CatalogFile
from govm.toolchain.installer import GoInstaller

BASE_URL = "https://releases.example.test/dl/"
CATALOG_URL = BASE_URL + "catalog.json"
FILENAME = "go1.22.0.linux-amd64.tar.gz"


def build_release_archive(path: Path, top: str = "go") -> str:
    """Write a minimal Go release tarball and return its SHA-256."""
    source = path.parent / "release-src"
    (source / top / "bin").mkdir(parents=True)
    (source / top / "bin" / "go").write_text("#!/bin/sh\necho go1.22.0\n")
    (source / top / "VERSION").write_text("go1.22.0\n")

    with tarfile.open(path, "w:gz") as tar:
        tar.add(source / top, arcname=top)

    return hashlib.sha256(path.read_bytes()).hexdigest()


def archive_file(sha256: str) -> CatalogFile:
    return CatalogFile(
        filename=FILENAME,
        os="linux",
        arch="amd64",
        sha256=sha256,
        size=0,
        kind="archive",
    )


@pytest.fixture
def installer(govm_paths) -> GoInstaller:
    config = GovmConfig(
        catalog_url=CATALOG_URL,
        download_base=BASE_URL,
        download=DownloadConfig(timeout=5, max_retries=1),
    )
    return GoInstaller(config, staging_root=govm_paths.tmp_dir)


@pytest.fixture
def release_archive(tmp_path):
    path = tmp_path / "build" / FILENAME
    path.parent.mkdir()
    sha256 = build_release_archive(path)
    return path, sha256


class TestListCatalog:
    """Tests for GoInstaller.list_catalog()."""

    @responses.activate
    def test_fetches_and_parses(self, installer):
        """Test the catalog is fetched with the govm User-Agent."""
        responses.add(
            responses.GET,
            CATALOG_URL,
            json=[{"version": "go1.22.0", "stable": True, "files": []}],
        )

        entries = installer.list_catalog()

        assert [e.canonical_version for e in entries] == ["1.22.0"]
        assert responses.calls[0].request.headers["User-Agent"] == USER_AGENT

    @responses.activate
    def test_http_error(self, installer):
        """Test an HTTP error becomes a CatalogError."""
        responses.add(responses.GET, CATALOG_URL, status=503)

        with pytest.raises(CatalogError):
            installer.list_catalog()

    @responses.activate
    def test_invalid_document(self, installer):
        """Test a document of the wrong shape becomes a CatalogError."""
        responses.add(responses.GET, CATALOG_URL, json={"releases": []})

        with pytest.raises(CatalogError):
            installer.list_catalog()


class TestFetchAndPlace:
    """Tests for GoInstaller.fetch_and_place()."""

    def test_archive_url(self, installer):
        """Test archive URLs join the download base and file name."""
        assert installer.archive_url(archive_file("")) == BASE_URL + FILENAME

    @responses.activate
    def test_installs_go_tree(self, installer, release_archive, govm_paths):
        """Test the go/ tree is published at the destination."""
        path, sha256 = release_archive
        responses.add(responses.GET, BASE_URL + FILENAME, body=path.read_bytes())
        destination = govm_paths.versions_dir / "1.22.0"

        installer.fetch_and_place(archive_file(sha256), destination)

        assert (destination / "bin" / "go").is_file()
        assert (destination / "VERSION").read_text() == "go1.22.0\n"
        assert list(govm_paths.tmp_dir.iterdir()) == []

    @responses.activate
    def test_checksum_mismatch_leaves_nothing(
        self, installer, release_archive, govm_paths
    ):
        """Test a bad checksum aborts before anything is published."""
        path, _ = release_archive
        responses.add(responses.GET, BASE_URL + FILENAME, body=path.read_bytes())
        destination = govm_paths.versions_dir / "1.22.0"

        with pytest.raises(ChecksumError):
            installer.fetch_and_place(archive_file("0" * 64), destination)

        assert not destination.exists()
        assert list(govm_paths.tmp_dir.iterdir()) == []

    @responses.activate
    def test_download_failure_leaves_nothing(self, installer, govm_paths):
        """Test an HTTP failure raises DownloadError and publishes nothing."""
        responses.add(responses.GET, BASE_URL + FILENAME, status=404)
        destination = govm_paths.versions_dir / "1.22.0"

        with pytest.raises(DownloadError):
            installer.fetch_and_place(archive_file(""), destination)

        assert not destination.exists()
        assert list(govm_paths.tmp_dir.iterdir()) == []

    @responses.activate
    def test_unexpected_layout(self, installer, tmp_path, govm_paths):
        """Test an archive without a Go tree is rejected."""
        source = tmp_path / "docs"
        source.mkdir()
        (source / "README").write_text("not a Go release\n")
        path = tmp_path / FILENAME
        with tarfile.open(path, "w:gz") as tar:
            tar.add(source, arcname="docs")
        sha256 = hashlib.sha256(path.read_bytes()).hexdigest()
        responses.add(responses.GET, BASE_URL + FILENAME, body=path.read_bytes())
        destination = govm_paths.versions_dir / "1.22.0"

        with pytest.raises(InstallerError, match="Unexpected archive layout"):
            installer.fetch_and_place(archive_file(sha256), destination)

        assert not destination.exists()

    @responses.activate
    def test_existing_destination(self, installer, govm_paths):
        """Test an existing install directory is never overwritten."""
        destination = govm_paths.versions_dir / "1.22.0"
        destination.mkdir()

        with pytest.raises(InstallerError, match="already exists"):
            installer.fetch_and_place(archive_file(""), destination)

        assert len(responses.calls) == 0
