"""
Lifecycle operations.

``LifecycleOrchestrator`` composes resolution, the installation registry,
the shim layer and an ``Installer`` into the operations the CLI exposes:
install, use, global/local, uninstall, exec, which, prune and rehash.

Operations return plain result dataclasses and raise ``GovmError``
subclasses for expected failures; rendering both is left to the caller.

Example:
    >>> orchestrator = LifecycleOrchestrator(paths, installer=GoInstaller(...))
    >>> result = orchestrator.install("go1.22.0")
    >>> result.status
    <InstallStatus.INSTALLED: 'installed'>
"""

import logging
import os
import signal
import subprocess
import threading
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from govm.core.config import GovmConfig
from govm.core.directory import GovmPaths
from govm.core.exceptions import (
    BinaryNotFoundError,
    GovmError,
    InstallerError,
    InvalidVersionError,
    NoVersionConfiguredError,
    NotInstalledError,
    VersionNotInstalledError,
)
from govm.core.filesystem import atomic_write, remove_file
from govm.core.interfaces import Installer
from govm.core.locking import LockManager, LockTimeout
from govm.core.platform import PlatformInfo, detect_platform
from govm.toolchain.catalog import find_archive, find_entry
from govm.toolchain.registry import InstallationRegistry
from govm.toolchain.shims import ManagerCommand, ShimManager, current_manager_command
from govm.versions.normalize import canonical, is_safe_name
from govm.versions.resolution import (
    Resolution,
    ResolutionContext,
    read_marker,
    resolve,
    resolve_with_source,
)

logger = logging.getLogger(__name__)

RUNTIME_ROOT_ENV_VAR = "GOROOT"

ProcessRunner = Callable[[Sequence[str], Mapping[str, str]], int]


def _is_binary_name(binary: str) -> bool:
    return bool(binary) and binary not in (".", "..") and not any(
        sep in binary for sep in ("/", "\\")
    )


class _ChildSignals:
    """
    Keep govm alive while a child runs, so the child decides how to stop.

    Ctrl-C reaches the whole foreground process group, so the child already
    receives SIGINT and govm only has to ignore it. Signals sent to govm alone
    (SIGTERM, SIGHUP) are passed on to the child.

    Handlers are Python functions rather than ``SIG_IGN``: the child inherits
    ignored signals across exec, but caught ones are reset to the default.
    """

    FORWARDED = ("SIGTERM", "SIGHUP")

    def __init__(self):
        self.process: Optional[subprocess.Popen] = None
        self._previous: Dict[int, object] = {}
        self._pending: List[int] = []

    def _handle(self, signum, frame):
        if signum == signal.SIGINT:
            return
        if self.process is None:
            self._pending.append(signum)
        else:
            self.process.send_signal(signum)

    def spawn(
        self, command: Sequence[str], env: Mapping[str, str]
    ) -> subprocess.Popen:
        """Start the child, then deliver signals that arrived while starting it."""
        self.process = subprocess.Popen(list(command), env=dict(env))
        while self._pending:
            self.process.send_signal(self._pending.pop(0))
        return self.process

    def __enter__(self):
        # signal.signal only works in the main thread
        if threading.current_thread() is not threading.main_thread():
            return self

        signums = [signal.SIGINT] + [
            getattr(signal, name) for name in self.FORWARDED if hasattr(signal, name)
        ]
        for signum in signums:
            self._previous[signum] = signal.signal(signum, self._handle)
        return self

    def __exit__(self, *exc_info):
        for signum, handler in self._previous.items():
            signal.signal(signum, handler)
        self._previous.clear()


def run_process(command: Sequence[str], env: Mapping[str, str]) -> int:
    """
    Run a command to completion and return its exit code.

    govm never kills the child: interrupts are left to the child, and its
    exit code is returned even when it stopped because of Ctrl-C. A child
    killed by signal N is reported as ``128 + N``, like a shell does.
    """
    with _ChildSignals() as signals:
        returncode = signals.spawn(command, env).wait()

    if returncode < 0:
        return 128 - returncode
    return returncode


# ============================================================================
# Results
# ============================================================================


class InstallStatus(Enum):
    INSTALLED = "installed"
    ALREADY_INSTALLED = "already-installed"


@dataclass(frozen=True)
class InstallResult:
    version: str
    status: InstallStatus
    path: Path
    shims_written: List[str] = field(default_factory=list)
    set_as_global: bool = False


@dataclass(frozen=True)
class UseResult:
    version: str
    local: bool
    marker_path: Path
    install: InstallResult


@dataclass(frozen=True)
class UninstallResult:
    version: str
    removed: bool
    cleared_global: bool = False


@dataclass(frozen=True)
class InstalledVersion:
    version: str
    current: bool
    is_global: bool


@dataclass(frozen=True)
class RemoteVersion:
    version: str
    stable: bool
    installed: bool
    current: bool


@dataclass(frozen=True)
class PrunePlan:
    """What a prune would do: keep the newest ``keep``, spare the global."""

    keep: int
    kept: List[str]
    protected: Optional[str]
    to_remove: List[str]


@dataclass(frozen=True)
class PruneResult:
    plan: PrunePlan
    removed: List[str]
    cancelled: bool = False


@dataclass(frozen=True)
class ExecTarget:
    """A fully checked binary ready to be executed."""

    version: str
    binary: str
    path: Path
    env: Dict[str, str]

    def command(self, args: Sequence[str]) -> List[str]:
        return [str(self.path), *args]


# ============================================================================
# Orchestrator
# ============================================================================


class LifecycleOrchestrator:
    """
    Implements govm's commands on top of the core components.

    Args:
        paths: Manager root layout
        installer: Release installer; only needed by install, use and
            list_remote
        config: Configuration (defaults if None)
        context: Resolution context (captured from the process if None)
        manager: How shims launch govm (detected if None)
        platform_info: Platform to install for (detected if None)
        lock_manager: Cross-process locks (under ``paths.lock_dir`` if None)
        environ: Base environment for executed binaries (os.environ if None)
        process_runner: Runs an executed binary and returns its exit code
    """

    def __init__(
        self,
        paths: GovmPaths,
        installer: Optional[Installer] = None,
        config: Optional[GovmConfig] = None,
        context: Optional[ResolutionContext] = None,
        manager: Optional[ManagerCommand] = None,
        platform_info: Optional[PlatformInfo] = None,
        lock_manager: Optional[LockManager] = None,
        environ: Optional[Mapping[str, str]] = None,
        process_runner: ProcessRunner = run_process,
    ):
        self.paths = paths
        self.installer = installer
        self.config = config or GovmConfig()
        self.context = context or ResolutionContext.from_environment(paths)
        self.manager = manager or current_manager_command()
        self.platform_info = platform_info or detect_platform()
        self._lock_manager = lock_manager
        self.environ = environ if environ is not None else os.environ
        self.process_runner = process_runner

        self.registry = InstallationRegistry(paths.versions_dir)
        self.shims = ShimManager(paths.shims_dir, self.config.binaries)

    @property
    def lock_manager(self) -> LockManager:
        if self._lock_manager is None:
            self._lock_manager = LockManager(self.paths.lock_dir)
        return self._lock_manager

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _canonical(version: str) -> str:
        value = canonical(version.strip())
        if not is_safe_name(value):
            raise InvalidVersionError(version)
        return value

    def _require_installer(self) -> Installer:
        if self.installer is None:
            raise GovmError("No installer configured for this operation")
        return self.installer

    @property
    def pin_path(self) -> Path:
        """Scoped pin marker in the working directory."""
        return self.context.cwd / self.context.pin_filename

    @staticmethod
    def _write_marker(path: Path, version: str) -> None:
        atomic_write(path, f"{version}\n")
        logger.debug(f"Wrote {version} to {path}")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def current(self) -> Resolution:
        """Resolve the version for this invocation, with its source."""
        return resolve_with_source(self.context)

    def global_version(self) -> Optional[str]:
        return read_marker(self.paths.global_version_file)

    def list_installed(self) -> List[InstalledVersion]:
        """Installed versions, newest first, flagged current and global."""
        current = resolve(self.context)
        global_version = self.global_version()
        return [
            InstalledVersion(
                version=version,
                current=version == current,
                is_global=version == global_version,
            )
            for version in self.registry.list_installed()
        ]

    def list_remote(
        self, include_unstable: bool = False, limit: Optional[int] = 20
    ) -> List[RemoteVersion]:
        """
        Versions available for download, in catalog order.

        Args:
            include_unstable: Include release candidates and betas
            limit: Maximum number of versions (None for all)
        """
        if limit is not None and limit < 0:
            raise ValueError("limit must not be negative")

        entries = self._require_installer().list_catalog()
        installed = set(self.registry.list_installed())
        current = resolve(self.context)

        result = []
        for entry in entries:
            if not include_unstable and not entry.stable:
                continue
            if limit is not None and len(result) >= limit:
                break
            version = entry.canonical_version
            result.append(
                RemoteVersion(
                    version=version,
                    stable=entry.stable,
                    installed=version in installed,
                    current=version == current,
                )
            )
        return result

    # ------------------------------------------------------------------
    # Install / use
    # ------------------------------------------------------------------

    def install(self, version: str) -> InstallResult:
        """
        Install a version unless it is already installed.

        After a successful install the shims are created if missing, and the
        version becomes the global default if it is the only one installed.

        Raises:
            InvalidVersionError: If the version is empty or not a plain name
            CatalogEntryMissingError: If go.dev has no such release
            NoPlatformBinaryError: If there is no archive for this platform
            InstallerError: If downloading or unpacking fails
        """
        version = self._canonical(version)
        install_dir = self.registry.install_dir(version)

        if self.registry.is_installed(version):
            logger.debug(f"Go {version} already installed at {install_dir}")
            return InstallResult(version, InstallStatus.ALREADY_INSTALLED, install_dir)

        installer = self._require_installer()

        try:
            with self.lock_manager.version_lock(version):
                # Another process may have finished while we waited
                if self.registry.is_installed(version):
                    logger.debug(f"Go {version} installed by another process")
                    return InstallResult(
                        version, InstallStatus.ALREADY_INSTALLED, install_dir
                    )

                entry = find_entry(installer.list_catalog(), version)
                archive = find_archive(entry, self.platform_info)
                logger.debug(f"Installing {archive.filename} into {install_dir}")
                installer.fetch_and_place(archive, install_dir)
        except LockTimeout as e:
            raise InstallerError(
                f"Timed out waiting for another install of Go {version}"
            ) from e

        shims_written = self.shims.ensure_current(self.manager)

        set_as_global = False
        if self.registry.list_installed() == [version]:
            self._write_marker(self.paths.global_version_file, version)
            set_as_global = True

        return InstallResult(
            version,
            InstallStatus.INSTALLED,
            install_dir,
            shims_written=shims_written,
            set_as_global=set_as_global,
        )

    def use(self, version: str, local: bool = False) -> UseResult:
        """Install a version if needed, then select it globally or locally."""
        install = self.install(version)
        marker_path = self.pin_path if local else self.paths.global_version_file
        self._write_marker(marker_path, install.version)
        return UseResult(install.version, local, marker_path, install)

    def set_global(self, version: str) -> str:
        """
        Make an installed version the global default.

        Returns:
            The canonical version written

        Raises:
            NotInstalledError: If the version is not installed
        """
        version = self._canonical(version)
        if not self.registry.is_installed(version):
            raise NotInstalledError(version)
        self._write_marker(self.paths.global_version_file, version)
        return version

    def set_local(self, version: str) -> str:
        """
        Pin an installed version to the working directory.

        Returns:
            The canonical version written

        Raises:
            NotInstalledError: If the version is not installed
        """
        version = self._canonical(version)
        if not self.registry.is_installed(version):
            raise NotInstalledError(version)
        self._write_marker(self.pin_path, version)
        return version

    # ------------------------------------------------------------------
    # Removal
    # ------------------------------------------------------------------

    def uninstall(self, version: str) -> UninstallResult:
        """
        Remove an installed version.

        If it is the global default the marker is cleared first, so the
        default never points at a version that is being deleted.
        """
        version = self._canonical(version)
        if not self.registry.is_installed(version):
            return UninstallResult(version, removed=False)

        cleared_global = False
        if self.global_version() == version:
            remove_file(self.paths.global_version_file)
            cleared_global = True
            logger.debug(f"Cleared global default {version}")

        self.registry.remove(version)
        return UninstallResult(version, removed=True, cleared_global=cleared_global)

    def plan_prune(self, keep: int) -> PrunePlan:
        """
        Decide which versions a prune removes.

        The newest ``keep`` versions are kept, and the global default is
        never removed even when it falls outside that window.
        """
        if keep < 0:
            raise ValueError("keep must not be negative")

        installed = self.registry.list_installed()
        global_version = self.global_version()
        kept = installed[:keep]
        candidates = installed[keep:]

        protected = global_version if global_version in candidates else None
        to_remove = [v for v in candidates if v != global_version]
        return PrunePlan(keep, kept, protected, to_remove)

    def prune(self, keep: int, confirm: Callable[[List[str]], bool]) -> PruneResult:
        """
        Remove old versions after confirmation.

        Args:
            keep: Number of most recent versions to keep
            confirm: Called with the versions about to be removed; nothing is
                deleted unless it returns True
        """
        plan = self.plan_prune(keep)
        if not plan.to_remove:
            return PruneResult(plan, removed=[])

        if not confirm(list(plan.to_remove)):
            return PruneResult(plan, removed=[], cancelled=True)

        removed = []
        for version in plan.to_remove:
            self.registry.remove(version)
            removed.append(version)
            logger.debug(f"Pruned Go {version}")
        return PruneResult(plan, removed=removed)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def prepare_exec(self, binary: str) -> ExecTarget:
        """
        Resolve and check the binary an exec would run.

        Raises:
            NoVersionConfiguredError: If no version is configured
            VersionNotInstalledError: If the configured version is missing
            BinaryNotFoundError: If the version has no such binary, or the
                name is a path
        """
        version = resolve(self.context)
        if version is None:
            raise NoVersionConfiguredError()

        if not self.registry.is_installed(version):
            raise VersionNotInstalledError(version)

        binary_path = self.registry.binary_path(version, binary)
        if not _is_binary_name(binary) or not binary_path.is_file():
            raise BinaryNotFoundError(binary, version)

        env = dict(self.environ)
        env[RUNTIME_ROOT_ENV_VAR] = str(self.registry.install_dir(version))
        return ExecTarget(version, binary, binary_path, env)

    def which(self, binary: str) -> Path:
        """Path of the binary that exec would run."""
        return self.prepare_exec(binary).path

    def exec(self, binary: str, args: Sequence[str]) -> int:
        """
        Run a toolchain binary of the resolved version.

        Returns:
            The child's exit code
        """
        target = self.prepare_exec(binary)
        logger.debug(f"Executing {target.path} (Go {target.version})")
        return self.process_runner(target.command(args), target.env)

    # ------------------------------------------------------------------
    # Shims
    # ------------------------------------------------------------------

    def rehash(self) -> List[str]:
        """Rewrite every shim."""
        return self.shims.force_regenerate(self.manager)

    def refresh_shims(self) -> List[str]:
        """
        Repair stale shims once any version is installed.

        Run on ordinary invocations so that moving the govm executable is
        picked up without an explicit rehash.
        """
        if not self.registry.list_installed():
            return []
        return self.shims.ensure_current(self.manager)


__all__ = [
    "RUNTIME_ROOT_ENV_VAR",
    "ProcessRunner",
    "run_process",
    "InstallStatus",
    "InstallResult",
    "UseResult",
    "UninstallResult",
    "InstalledVersion",
    "RemoteVersion",
    "PrunePlan",
    "PruneResult",
    "ExecTarget",
    "LifecycleOrchestrator",
]
