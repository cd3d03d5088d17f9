"""
Shim generation.

A shim is a tiny script named after a Go binary (``go``, ``gofmt``) that
lives in ``<root>/shims``. With that directory first on ``PATH``, every
invocation of the binary runs ``govm exec <binary> <args...>``, which
resolves the version for the caller's directory and runs the real binary.

Shims are version independent: they only embed the path of the govm
executable. A shim that does not mention the current command line is
stale (govm was reinstalled elsewhere) and gets rewritten.
"""

import logging
import os
import shlex
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from govm.core.exceptions import GovmIOError
from govm.core.filesystem import IS_WINDOWS, atomic_write, make_executable

logger = logging.getLogger(__name__)

SHIM_MARKER = "Shim created by govm - DO NOT EDIT"


@dataclass(frozen=True)
class ManagerCommand:
    """
    How a shim launches govm.

    Attributes:
        executable: Absolute path of the govm executable (or the Python
            interpreter when govm runs as a module)
        args: Arguments placed before ``exec``, e.g. ``("-m", "govm")``
    """

    executable: Path
    args: Tuple[str, ...] = ()


def current_manager_command() -> ManagerCommand:
    """
    Determine how the running govm process was started.

    An installed ``govm`` console script is used directly. When govm runs
    via ``python -m govm`` the interpreter is used with ``-m govm``.
    """
    if sys.argv and sys.argv[0]:
        script = Path(sys.argv[0])
        if script.suffix != ".py" and script.is_file():
            return ManagerCommand(script.resolve())

    return ManagerCommand(Path(os.path.abspath(sys.executable)), ("-m", "govm"))


def render_launcher(manager: ManagerCommand) -> str:
    """Render the govm command line exactly as it appears inside a shim."""
    if IS_WINDOWS:
        return " ".join(
            [f'"{manager.executable}"'] + [f'"{arg}"' for arg in manager.args]
        )
    return " ".join(
        shlex.quote(part) for part in (str(manager.executable), *manager.args)
    )


def render_shim(binary: str, manager: ManagerCommand) -> str:
    """
    Render the shim script for one binary.

    The script forwards all arguments unchanged and replaces itself with
    ``govm exec <binary>`` so signals and exit codes pass straight through.
    """
    launcher = render_launcher(manager)
    if IS_WINDOWS:
        return (
            "@echo off\r\n"
            f"rem {SHIM_MARKER}\r\n"
            f'{launcher} exec "{binary}" %*\r\n'
            "exit /b %ERRORLEVEL%\r\n"
        )

    return (
        "#!/bin/sh\n"
        f"# {SHIM_MARKER}\n"
        f"# Routes '{binary}' to the Go version selected for the current directory\n"
        "\n"
        f'exec {launcher} exec {shlex.quote(binary)} "$@"\n'
    )


class ShimManager:
    """
    Creates and repairs shims for the managed binaries.

    Example:
        >>> shims = ShimManager(paths.shims_dir, ["go", "gofmt"])
        >>> shims.ensure_current(current_manager_command())
        ['go', 'gofmt']
        >>> shims.ensure_current(current_manager_command())
        []
    """

    def __init__(self, shims_dir: Path, binaries: Iterable[str]):
        self.shims_dir = Path(shims_dir)
        self.binaries: List[str] = list(dict.fromkeys(binaries))

    def shim_path(self, binary: str) -> Path:
        name = f"{binary}.cmd" if IS_WINDOWS else binary
        return self.shims_dir / name

    def is_stale(self, binary: str, manager: ManagerCommand) -> bool:
        """
        Check whether a shim is missing or bound to another govm executable.

        The check looks for the launcher command line exactly as
        ``render_launcher`` writes it, quoting included, so a shim that is
        already current is never rewritten.
        """
        try:
            content = self.shim_path(binary).read_text(encoding="utf-8")
        except FileNotFoundError:
            return True
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Unreadable shim {self.shim_path(binary)}: {e}")
            return True

        return f"{render_launcher(manager)} exec " not in content

    def write_shim(self, binary: str, manager: ManagerCommand) -> Path:
        """
        Write one shim and mark it executable.

        Raises:
            GovmIOError: If the shim cannot be written
        """
        shim_path = self.shim_path(binary)
        atomic_write(shim_path, render_shim(binary, manager))
        make_executable(shim_path)
        logger.debug(f"Wrote shim {shim_path}")
        return shim_path

    def ensure_current(self, manager: ManagerCommand) -> List[str]:
        """
        Write shims that are missing or stale; leave current ones untouched.

        Returns:
            Names of the binaries whose shims were written

        Raises:
            GovmIOError: If a shim cannot be written
        """
        self._ensure_dir()
        written = []
        for binary in self.binaries:
            if self.is_stale(binary, manager):
                self.write_shim(binary, manager)
                written.append(binary)
        return written

    def force_regenerate(self, manager: ManagerCommand) -> List[str]:
        """
        Rewrite every shim unconditionally.

        Returns:
            Names of the binaries whose shims were written
        """
        self._ensure_dir()
        for binary in self.binaries:
            self.write_shim(binary, manager)
        return list(self.binaries)

    def _ensure_dir(self) -> None:
        try:
            self.shims_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise GovmIOError(
                self.shims_dir, f"Failed to create shims directory ({e})"
            ) from e


def shims_on_path(shims_dir: Path, path_value: Sequence[str]) -> bool:
    """Check whether the shims directory appears on a PATH-style list."""
    target = os.path.normcase(os.path.abspath(shims_dir))
    return any(
        os.path.normcase(os.path.abspath(entry)) == target
        for entry in path_value
        if entry
    )


__all__ = [
    "SHIM_MARKER",
    "ManagerCommand",
    "current_manager_command",
    "render_launcher",
    "render_shim",
    "ShimManager",
    "shims_on_path",
]
