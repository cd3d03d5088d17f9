"""
Global command implementation.

Shows or sets the global default version.
"""

import logging

from govm.cli.utils import build_orchestrator, safe_print

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the global command.

    Without a version the current global default is printed.

    Args:
        args: Parsed command-line arguments with:
            - version: Installed version to make the default (optional)

    Returns:
        Exit code (0 for success)
    """
    orchestrator = build_orchestrator(args)

    if not args.version:
        global_version = orchestrator.global_version()
        if global_version:
            print(global_version)
        else:
            safe_print("→ No global version set")
        return 0

    version = orchestrator.set_global(args.version)
    safe_print(f"✓ Global Go version set to {version}")
    return 0
