"""
Platform detection for govm.

Go release archives are published per operating system and architecture
using Go's own naming (GOOS/GOARCH). This module maps the running platform
onto those names so the matching archive can be picked from the catalog.

Usage:
    from govm.core.platform import detect_platform

    platform_info = detect_platform()
    print(platform_info.platform_string())  # e.g. 'linux-amd64'
"""

import functools
import platform
from dataclasses import dataclass


@dataclass(frozen=True)
class PlatformInfo:
    """
    Platform information in Go naming.

    Attributes:
        os: GOOS value ('linux', 'darwin', 'windows', or 'unknown')
        arch: GOARCH value ('amd64', 'arm64', '386', 'armv6l', or 'unknown')
    """

    os: str
    arch: str

    def platform_string(self) -> str:
        """
        Get canonical platform string (e.g., 'linux-amd64', 'darwin-arm64').
        """
        return f"{self.os}-{self.arch}"

    def __str__(self) -> str:
        return self.platform_string()


@functools.lru_cache(maxsize=1)
def detect_platform() -> PlatformInfo:
    """
    Detect current platform information.

    This function is cached - it only runs detection once per process.

    Example:
        >>> detect_platform().platform_string()
        'linux-amd64'
    """
    return PlatformInfo(os=_detect_os(), arch=_detect_architecture())


def _detect_os() -> str:
    """
    Detect operating system.

    Returns:
        GOOS name: 'linux', 'darwin', 'windows', or 'unknown'
    """
    system = platform.system().lower()

    if system in ("linux", "darwin", "windows"):
        return system
    return "unknown"


def _detect_architecture() -> str:
    """
    Detect CPU architecture.

    Returns:
        GOARCH name: 'amd64', 'arm64', '386', 'armv6l', or 'unknown'
    """
    machine = platform.machine().lower()

    if machine in ("x86_64", "amd64", "x64"):
        return "amd64"
    elif machine in ("aarch64", "arm64"):
        return "arm64"
    elif machine in ("i386", "i686", "x86"):
        return "386"
    elif machine.startswith("arm"):
        # Go publishes 32-bit ARM builds as armv6l only
        return "armv6l"
    else:
        return "unknown"


__all__ = [
    "PlatformInfo",
    "detect_platform",
]
