"""
Prune command implementation.

Removes old Go versions, keeping the newest ones and the global default.
"""

import logging
from typing import List

from govm.cli.utils import build_orchestrator, confirm, safe_print

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the prune command.

    Args:
        args: Parsed command-line arguments with:
            - keep: Number of newest versions to keep (config default if None)
            - yes: Skip the confirmation prompt

    Returns:
        Exit code (0 for success, 1 for an invalid --keep)
    """
    orchestrator = build_orchestrator(args)
    keep = args.keep if args.keep is not None else orchestrator.config.prune_keep
    if keep < 0:
        logger.error("--keep must not be negative")
        return 1

    def ask(to_remove: List[str]) -> bool:
        print("The following versions will be removed:")
        for version in to_remove:
            print(f"  - {version}")
        print()
        return args.yes or confirm("Continue?")

    result = orchestrator.prune(keep, ask)

    if not result.plan.to_remove:
        installed = len(result.plan.kept) + (1 if result.plan.protected else 0)
        safe_print(
            f"→ Nothing to prune. {installed} versions installed, keeping {keep}."
        )
        return 0

    if result.cancelled:
        safe_print("→ Prune cancelled")
        return 0

    for version in result.removed:
        safe_print(f"✓ Removed Go {version}")
    if result.plan.protected:
        safe_print(f"→ Kept global default {result.plan.protected}")
    return 0
