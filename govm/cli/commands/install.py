"""
Install command implementation.

Downloads and installs a Go release.
"""

import logging

from govm.cli.utils import build_orchestrator, safe_print, warn_if_shims_not_on_path
from govm.toolchain.lifecycle import InstallResult, InstallStatus

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the install command.

    Args:
        args: Parsed command-line arguments with:
            - version: Version to install

    Returns:
        Exit code (0 for success)
    """
    orchestrator = build_orchestrator(args, with_installer=True)
    result = orchestrator.install(args.version)
    report_install(result)

    if result.status is InstallStatus.INSTALLED:
        warn_if_shims_not_on_path(orchestrator.paths)
    return 0


def report_install(result: InstallResult):
    """Print the outcome of an install; shared with the use command."""
    if result.status is InstallStatus.ALREADY_INSTALLED:
        safe_print(f"→ Go {result.version} is already installed")
        return

    safe_print(f"✓ Go {result.version} installed successfully")
    if result.shims_written:
        safe_print(f"  Created shims: {', '.join(result.shims_written)}")
    if result.set_as_global:
        safe_print(f"→ Set Go {result.version} as global default")
