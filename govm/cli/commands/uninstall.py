"""
Uninstall command implementation.

Removes an installed Go version.
"""

from govm.cli.utils import build_orchestrator, safe_print


def run(args) -> int:
    """
    Run the uninstall command.

    Args:
        args: Parsed command-line arguments with:
            - version: Version to remove

    Returns:
        Exit code (0 for success)
    """
    orchestrator = build_orchestrator(args)
    result = orchestrator.uninstall(args.version)

    if not result.removed:
        safe_print(f"✗ Go {result.version} is not installed")
        return 0

    if result.cleared_global:
        safe_print("→ Cleared global version")
    safe_print(f"✓ Go {result.version} uninstalled")
    return 0
