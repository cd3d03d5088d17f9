"""
Rehash command implementation.

Rewrites every shim for the current govm location.
"""

from govm.cli.utils import build_orchestrator, safe_print, warn_if_shims_not_on_path


def run(args) -> int:
    """
    Run the rehash command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    orchestrator = build_orchestrator(args, refresh_shims=False)
    safe_print("→ Regenerating shims...")
    for binary in orchestrator.rehash():
        safe_print(f"  ✓ {binary}")
    safe_print(f"✓ Shims regenerated in {orchestrator.paths.shims_dir}")
    warn_if_shims_not_on_path(orchestrator.paths)
    return 0
