"""
Centralized exception hierarchy for govm.

This module defines all custom exceptions used across the codebase so that
the CLI can report every expected failure in one consistent way.
"""

from pathlib import Path
from typing import Optional, Union


# ============================================================================
# Base Exceptions
# ============================================================================


class GovmError(Exception):
    """Base exception for all govm errors."""

    hint: Optional[str] = None


# ============================================================================
# Version Exceptions
# ============================================================================


class InvalidVersionError(GovmError):
    """Version string is empty or not usable as a directory name."""

    def __init__(self, version: str):
        self.version = version
        super().__init__(f"Invalid Go version: {version!r}")


class NotInstalledError(GovmError):
    """Raised when a version has no install directory."""

    def __init__(self, version: str, reason: str = ""):
        self.version = version
        self.hint = f"Run 'govm install {version}' first."
        super().__init__(f"Go {version} is not installed{reason}")


class VersionNotInstalledError(NotInstalledError):
    """Raised when the configured version is not installed."""

    def __init__(self, version: str):
        super().__init__(version, " (required by current configuration)")
        self.hint = f"Run 'govm install {version}'."


class NoVersionConfiguredError(GovmError):
    """Raised when resolution finds no version at all."""

    hint = (
        "Run 'govm global <version>' or create a .go-version file "
        "with 'govm local <version>'."
    )

    def __init__(self):
        super().__init__("No Go version configured")


class BinaryNotFoundError(GovmError):
    """Raised when an installed version lacks the requested binary."""

    def __init__(self, binary: str, version: str):
        self.binary = binary
        self.version = version
        super().__init__(f"Command '{binary}' not found in Go {version}")


# ============================================================================
# Filesystem Exceptions
# ============================================================================


class GovmIOError(GovmError):
    """Filesystem operation failed unexpectedly."""

    def __init__(self, path: Union[str, Path], message: str):
        self.path = Path(path)
        super().__init__(f"{message}: {self.path}")


# ============================================================================
# Installer Exceptions
# ============================================================================


class InstallerError(GovmError):
    """Base exception for installer failures."""

    pass


class CatalogError(InstallerError):
    """Raised when the release catalog cannot be fetched or parsed."""

    pass


class CatalogEntryMissingError(InstallerError):
    """Raised when the catalog has no entry for the requested version."""

    def __init__(self, version: str):
        self.version = version
        self.hint = "Run 'govm list-remote --all' to see available versions."
        super().__init__(f"Version {version} not found")


class NoPlatformBinaryError(InstallerError):
    """Raised when a catalog entry has no archive for this platform."""

    def __init__(self, version: str, os_name: str, arch: str):
        self.version = version
        self.os_name = os_name
        self.arch = arch
        super().__init__(f"No binary available for {os_name} {arch} (Go {version})")


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigError(GovmError):
    """Configuration parsing or validation error."""

    pass
