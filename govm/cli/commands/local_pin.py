"""
Local command implementation.

Pins a Go version to the current directory.
"""

from govm.cli.utils import build_orchestrator, safe_print


def run(args) -> int:
    """
    Run the local command.

    Args:
        args: Parsed command-line arguments with:
            - version: Installed version to pin

    Returns:
        Exit code (0 for success)
    """
    orchestrator = build_orchestrator(args)
    version = orchestrator.set_local(args.version)
    safe_print(f"✓ Local Go version set to {version} ({orchestrator.pin_path})")
    return 0
