"""
Version resolution.

Decides which Go version applies to an invocation. The precedence chain,
first match wins:

1. ``GOVM_VERSION`` override
2. nearest ``.go-version`` pin, walking from the working directory upward
3. global default marker (``<root>/version``)
4. nothing configured

All functions take an explicit ``ResolutionContext`` instead of reading the
process environment, so the chain can be tested without global state.
``ResolutionContext.from_environment`` is the single place where the real
environment and working directory are captured.

Example:
    >>> context = ResolutionContext.from_environment(paths)
    >>> resolve(context)
    '1.22.0'
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterator, Mapping, Optional, Tuple

from govm.core.directory import PIN_FILENAME, VERSION_ENV_VAR, GovmPaths
from govm.versions.normalize import canonical

logger = logging.getLogger(__name__)


class SelectionSource(Enum):
    """Where a resolved version came from."""

    OVERRIDE = "override"
    SCOPED_PIN = "scoped-pin"
    GLOBAL_DEFAULT = "global-default"
    UNSET = "unset"


@dataclass(frozen=True)
class ResolutionContext:
    """
    Inputs to version resolution.

    Attributes:
        override: Raw override value (``GOVM_VERSION``), if any
        cwd: Directory the search for pins starts from
        global_marker: Path of the global default marker file
        pin_filename: Name of the scoped pin marker
    """

    override: Optional[str]
    cwd: Path
    global_marker: Path
    pin_filename: str = PIN_FILENAME

    @classmethod
    def from_environment(
        cls,
        paths: GovmPaths,
        environ: Optional[Mapping[str, str]] = None,
        cwd: Optional[Path] = None,
    ) -> "ResolutionContext":
        """Capture the override and working directory of this process."""
        if environ is None:
            environ = os.environ
        return cls(
            override=environ.get(VERSION_ENV_VAR),
            cwd=Path(cwd) if cwd is not None else Path.cwd(),
            global_marker=paths.global_version_file,
        )


@dataclass(frozen=True)
class Resolution:
    """
    Result of resolution together with its provenance.

    ``version`` is only a pointer: it may name a version that is not
    installed. Callers that need the binaries check the registry.
    """

    version: Optional[str]
    source: SelectionSource
    path: Optional[Path] = None

    @property
    def is_set(self) -> bool:
        return self.version is not None


def read_marker(path: Path) -> Optional[str]:
    """
    Read a marker file and return its canonical content.

    Returns:
        The trimmed, canonicalized version, or None when the file is
        missing, unreadable, or effectively empty
    """
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Ignoring unreadable version marker {path}: {e}")
        return None

    version = canonical(content.strip())
    return version or None


def _ancestors(start: Path) -> Iterator[Path]:
    start = Path(os.path.abspath(start))
    yield start
    yield from start.parents


def _find_scoped_pin(context: ResolutionContext) -> Optional[Tuple[Path, str]]:
    for directory in _ancestors(context.cwd):
        candidate = directory / context.pin_filename
        version = read_marker(candidate)
        if version:
            return candidate, version
    return None


def locate_scoped_pin(context: ResolutionContext) -> Optional[Path]:
    """
    Find the pin file that resolution would use.

    Empty and unreadable pin files are skipped exactly as ``resolve`` skips
    them, so the path reported here always matches the resolved version.
    """
    found = _find_scoped_pin(context)
    return found[0] if found else None


def resolve_with_source(context: ResolutionContext) -> Resolution:
    """Resolve the current version and report which source produced it."""
    if context.override is not None:
        version = canonical(context.override.strip())
        if version:
            return Resolution(version, SelectionSource.OVERRIDE)

    found = _find_scoped_pin(context)
    if found:
        pin_path, version = found
        return Resolution(version, SelectionSource.SCOPED_PIN, pin_path)

    version = read_marker(context.global_marker)
    if version:
        return Resolution(
            version, SelectionSource.GLOBAL_DEFAULT, context.global_marker
        )

    return Resolution(None, SelectionSource.UNSET)


def resolve(context: ResolutionContext) -> Optional[str]:
    """
    Resolve the version that applies in ``context``.

    Returns:
        Canonical version, or None if nothing is configured
    """
    return resolve_with_source(context).version


__all__ = [
    "SelectionSource",
    "ResolutionContext",
    "Resolution",
    "read_marker",
    "locate_scoped_pin",
    "resolve_with_source",
    "resolve",
]
