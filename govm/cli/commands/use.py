"""
Use command implementation.

Switches to a Go version, installing it first when needed.
"""

import logging

from govm.cli.commands.install import report_install
from govm.cli.utils import build_orchestrator, safe_print, warn_if_shims_not_on_path
from govm.toolchain.lifecycle import InstallStatus

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the use command.

    Args:
        args: Parsed command-line arguments with:
            - version: Version to switch to
            - local: Pin in ./.go-version instead of setting the global default

    Returns:
        Exit code (0 for success)
    """
    orchestrator = build_orchestrator(args, with_installer=True)
    result = orchestrator.use(args.version, local=args.local)

    if result.install.status is InstallStatus.INSTALLED:
        report_install(result.install)

    if result.local:
        safe_print(f"✓ Using Go {result.version} in {result.marker_path.parent}")
    else:
        safe_print(f"✓ Using Go {result.version} globally")

    if result.install.status is InstallStatus.INSTALLED:
        warn_if_shims_not_on_path(orchestrator.paths)
    return 0
