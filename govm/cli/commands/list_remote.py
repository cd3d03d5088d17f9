"""
List-remote command implementation.

Lists Go releases available for download.
"""

import logging

from govm.cli.utils import build_orchestrator, safe_print

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the list-remote command.

    Args:
        args: Parsed command-line arguments with:
            - all: Include unstable releases
            - limit: Number of versions to show (0 for all)

    Returns:
        Exit code (0 for success, 1 for an invalid limit)
    """
    if args.limit < 0:
        logger.error("--limit must not be negative")
        return 1

    orchestrator = build_orchestrator(args, with_installer=True)
    logger.info("Fetching available Go versions...")
    remote = orchestrator.list_remote(
        include_unstable=args.all, limit=args.limit or None
    )

    print("Available Go versions:")
    print()
    for item in remote:
        if item.current:
            status = f"→ {item.version}"
        elif item.installed:
            status = f"✓ {item.version}"
        else:
            status = f"  {item.version}"
        label = "" if item.stable else " (unstable)"
        safe_print(f"  {status}{label}")

    if not args.all:
        print()
        print("  Use 'govm list-remote --all' to see release candidates and betas")
    return 0
