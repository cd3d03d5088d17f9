"""
Go release installer.

Fetches the release catalog from go.dev and installs a release archive into
its version directory. Installs are staged: the archive is downloaded and
unpacked inside a private directory under ``<root>/tmp`` and the finished
``go/`` tree is renamed into ``<root>/versions/<version>`` as the very last
step. A crash or Ctrl-C at any earlier point leaves nothing under
``versions/``, so the installed set never contains a partial install.
"""

import logging
import os
import time
from pathlib import Path
from typing import Callable, List, Optional

import requests
from requests.exceptions import RequestException

from govm.core.config import GovmConfig
from govm.core.download import USER_AGENT, DownloadProgress, download_file
from govm.core.exceptions import CatalogError, GovmIOError, InstallerError
from govm.core.filesystem import extract_archive, staging_directory
from govm.core.interfaces import Installer
from govm.toolchain.catalog import CatalogEntry, CatalogFile, parse_catalog

logger = logging.getLogger(__name__)


class GoInstaller(Installer):
    """
    Installs official Go releases from go.dev.

    Example:
        >>> installer = GoInstaller(GovmConfig(), staging_root=paths.tmp_dir)
        >>> entries = installer.list_catalog()
        >>> installer.fetch_and_place(archive, paths.versions_dir / "1.22.0")
    """

    def __init__(
        self,
        config: GovmConfig,
        staging_root: Path,
        progress_callback: Optional[Callable[[DownloadProgress], None]] = None,
        session: Optional[requests.Session] = None,
    ):
        self.config = config
        self.staging_root = Path(staging_root)
        self.progress_callback = progress_callback
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = USER_AGENT

    def list_catalog(self) -> List[CatalogEntry]:
        """
        Fetch the release catalog.

        Raises:
            CatalogError: If the catalog cannot be fetched or parsed
        """
        url = self.config.catalog_url
        logger.debug(f"Fetching release catalog from {url}")

        try:
            response = self.session.get(url, timeout=self.config.download.timeout)
            response.raise_for_status()
            data = response.json()
        except RequestException as e:
            raise CatalogError(f"Failed to fetch Go release catalog: {e}") from e
        except ValueError as e:
            raise CatalogError(f"Go release catalog is not valid JSON: {e}") from e

        return parse_catalog(data)

    def archive_url(self, archive: CatalogFile) -> str:
        return self.config.download_base.rstrip("/") + "/" + archive.filename

    def fetch_and_place(self, archive: CatalogFile, destination: Path) -> None:
        """
        Download, verify and unpack a release, then publish it atomically.

        Args:
            archive: Catalog file for the current platform
            destination: Install directory; must not exist

        Raises:
            InstallerError: If any step fails; ``destination`` is left absent
        """
        destination = Path(destination)
        if destination.exists():
            raise InstallerError(f"Install directory already exists: {destination}")

        url = self.archive_url(archive)

        with staging_directory(self.staging_root, prefix="install-") as stage:
            archive_path = stage / archive.filename
            extract_dir = stage / "extract"

            logger.info(f"Downloading {archive.filename}...")
            started = time.time()
            download_file(
                url,
                archive_path,
                expected_sha256=archive.sha256 or None,
                progress_callback=self.progress_callback,
                timeout=self.config.download.timeout,
                max_retries=self.config.download.max_retries,
                session=self.session,
            )
            logger.debug(f"Download finished in {time.time() - started:.2f}s")

            logger.info("Extracting archive...")
            extract_archive(archive_path, extract_dir)
            go_root = self._find_go_root(extract_dir)

            self._publish(go_root, destination)

    def _find_go_root(self, extract_dir: Path) -> Path:
        """
        Locate the Go tree inside an unpacked release.

        Official archives contain a single top-level ``go/`` directory.
        """
        go_root = extract_dir / "go"
        if go_root.is_dir():
            return go_root

        entries = [p for p in extract_dir.iterdir() if p.is_dir()]
        if len(entries) == 1 and (entries[0] / "bin").is_dir():
            return entries[0]

        raise InstallerError(
            f"Unexpected archive layout: no 'go' directory in {extract_dir}"
        )

    def _publish(self, go_root: Path, destination: Path) -> None:
        """Rename the finished tree into place (same filesystem, atomic)."""
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            os.rename(go_root, destination)
        except OSError as e:
            raise GovmIOError(destination, f"Failed to publish install ({e})") from e
        logger.debug(f"Published {destination}")


__all__ = [
    "GoInstaller",
]
