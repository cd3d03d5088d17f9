"""
Go toolchain management for govm.

This package provides:
- The release catalog model
- The filesystem registry of installed versions
- Shim generation
- The lifecycle operations behind every CLI command

The network installer lives in ``govm.toolchain.installer`` and is imported
explicitly by the commands that need it.
"""

from govm.toolchain.catalog import (
    CatalogEntry,
    CatalogFile,
    parse_catalog,
    find_entry,
    find_archive,
)
from govm.toolchain.registry import InstallationRegistry
from govm.toolchain.shims import (
    ManagerCommand,
    ShimManager,
    current_manager_command,
    render_launcher,
    render_shim,
    shims_on_path,
)
from govm.toolchain.lifecycle import (
    LifecycleOrchestrator,
    InstallStatus,
    InstallResult,
    UseResult,
    UninstallResult,
    InstalledVersion,
    RemoteVersion,
    PrunePlan,
    PruneResult,
    ExecTarget,
    run_process,
)

__all__ = [
    # Catalog
    "CatalogEntry",
    "CatalogFile",
    "parse_catalog",
    "find_entry",
    "find_archive",
    # Registry
    "InstallationRegistry",
    # Shims
    "ManagerCommand",
    "ShimManager",
    "current_manager_command",
    "render_launcher",
    "render_shim",
    "shims_on_path",
    # Lifecycle
    "LifecycleOrchestrator",
    "InstallStatus",
    "InstallResult",
    "UseResult",
    "UninstallResult",
    "InstalledVersion",
    "RemoteVersion",
    "PrunePlan",
    "PruneResult",
    "ExecTarget",
    "run_process",
]
