"""
Core functionality for govm.

This package contains the foundational modules that other components depend on.
``govm.core.download`` is not re-exported here so that importing the core
never loads the HTTP stack.
"""

from .directory import (
    ROOT_ENV_VAR,
    VERSION_ENV_VAR,
    PIN_FILENAME,
    DirectoryError,
    GovmPaths,
    get_govm_root,
    ensure_structure,
)

from .locking import (
    LockManager,
    LockTimeout,
)

from .platform import (
    PlatformInfo,
    detect_platform,
)

from .config import (
    GovmConfig,
    DownloadConfig,
    load_config,
)

from .interfaces import Installer

from .exceptions import (
    GovmError,
    InvalidVersionError,
    NotInstalledError,
    VersionNotInstalledError,
    NoVersionConfiguredError,
    BinaryNotFoundError,
    GovmIOError,
    InstallerError,
    CatalogError,
    CatalogEntryMissingError,
    NoPlatformBinaryError,
    ConfigError,
)

__all__ = [
    # Directory
    "ROOT_ENV_VAR",
    "VERSION_ENV_VAR",
    "PIN_FILENAME",
    "DirectoryError",
    "GovmPaths",
    "get_govm_root",
    "ensure_structure",
    # Locking
    "LockManager",
    "LockTimeout",
    # Platform
    "PlatformInfo",
    "detect_platform",
    # Config
    "GovmConfig",
    "DownloadConfig",
    "load_config",
    # Interfaces
    "Installer",
    # Exceptions
    "GovmError",
    "InvalidVersionError",
    "NotInstalledError",
    "VersionNotInstalledError",
    "NoVersionConfiguredError",
    "BinaryNotFoundError",
    "GovmIOError",
    "InstallerError",
    "CatalogError",
    "CatalogEntryMissingError",
    "NoPlatformBinaryError",
    "ConfigError",
]
