"""
Directory structure management for govm.

This module resolves the manager root and creates its directory layout.
Every other component receives paths from here instead of computing them.

Directory Structure:
    Manager root ($GOVM_ROOT, default ~/.govm or %USERPROFILE%\\.govm):
        - versions/    : One fully extracted Go distribution per version
        - shims/       : Redirect scripts (must come first on PATH)
        - tmp/         : Private staging directories for installs
        - lock/        : Cross-process lock files
        - version      : Global default version marker
        - config.yaml  : Optional configuration
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from govm.core.exceptions import GovmError, GovmIOError

logger = logging.getLogger(__name__)

ROOT_ENV_VAR = "GOVM_ROOT"
VERSION_ENV_VAR = "GOVM_VERSION"
PIN_FILENAME = ".go-version"


class DirectoryError(GovmError):
    """Raised when the manager root cannot be determined."""

    pass


@dataclass(frozen=True)
class GovmPaths:
    """
    Well-known locations under the manager root.

    Attributes:
        root: Manager root directory
    """

    root: Path

    @property
    def versions_dir(self) -> Path:
        return self.root / "versions"

    @property
    def shims_dir(self) -> Path:
        return self.root / "shims"

    @property
    def tmp_dir(self) -> Path:
        return self.root / "tmp"

    @property
    def lock_dir(self) -> Path:
        return self.root / "lock"

    @property
    def global_version_file(self) -> Path:
        return self.root / "version"

    @property
    def config_file(self) -> Path:
        return self.root / "config.yaml"


def get_govm_root(environ: Optional[Mapping[str, str]] = None) -> Path:
    """
    Get the manager root directory path.

    Args:
        environ: Environment mapping (default: os.environ)

    Returns:
        Path: ``$GOVM_ROOT`` if set, otherwise the platform default.
            - Windows: %USERPROFILE%\\.govm
            - Linux/macOS: ~/.govm

    Raises:
        DirectoryError: If no home directory can be determined
    """
    if environ is None:
        environ = os.environ

    override = environ.get(ROOT_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser()

    if os.name == "nt":
        user_profile = environ.get("USERPROFILE")
        if not user_profile:
            raise DirectoryError(
                "USERPROFILE environment variable is not set. "
                "Cannot determine govm root directory."
            )
        return Path(user_profile) / ".govm"

    return Path.home() / ".govm"


def ensure_structure(paths: GovmPaths) -> GovmPaths:
    """
    Create the manager directory structure if it doesn't exist.

    Creating the layout is idempotent. Marker files are not created here:
    an absent global marker means "no global default".

    Args:
        paths: Layout to create

    Returns:
        The same paths, for chaining

    Raises:
        GovmIOError: If a directory cannot be created
    """
    for directory in (
        paths.root,
        paths.versions_dir,
        paths.shims_dir,
        paths.tmp_dir,
        paths.lock_dir,
    ):
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise GovmIOError(directory, f"Failed to create directory ({e})") from e

    logger.debug(f"Ensured govm directory structure at {paths.root}")
    return paths


__all__ = [
    "ROOT_ENV_VAR",
    "VERSION_ENV_VAR",
    "PIN_FILENAME",
    "DirectoryError",
    "GovmPaths",
    "get_govm_root",
    "ensure_structure",
]
