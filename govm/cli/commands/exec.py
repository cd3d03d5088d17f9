"""
Exec command implementation.

Runs a toolchain binary of the resolved version. Every shim invocation
ends up here, so this path avoids network imports and shim maintenance.
"""

import logging

from govm.cli.utils import build_orchestrator

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the exec command.

    Args:
        args: Parsed command-line arguments with:
            - binary: Toolchain binary name
            - args: Arguments forwarded unchanged

    Returns:
        Exit code of the executed binary
    """
    orchestrator = build_orchestrator(args, refresh_shims=False)
    return orchestrator.exec(args.binary, list(args.args))
