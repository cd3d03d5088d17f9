"""
Version command implementation.

Shows the Go version that applies in the current directory and which
setting selected it.
"""

from govm.cli.utils import build_orchestrator, safe_print
from govm.core.directory import VERSION_ENV_VAR
from govm.versions.resolution import Resolution, SelectionSource


def describe_source(resolution: Resolution) -> str:
    """Describe where a resolved version was set."""
    if resolution.source is SelectionSource.OVERRIDE:
        return f"set by {VERSION_ENV_VAR}"
    if resolution.path is not None:
        return f"set by {resolution.path}"
    return "not set"


def run(args) -> int:
    """
    Run the version command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    orchestrator = build_orchestrator(args)
    resolution = orchestrator.current()

    if not resolution.is_set:
        safe_print("→ No Go version configured")
        print("  Set a global version: govm global <version>")
        print("  Or create a local .go-version file: govm local <version>")
        return 0

    safe_print(f"→ {resolution.version} ({describe_source(resolution)})")
    if not orchestrator.registry.is_installed(resolution.version):
        safe_print(
            f"  ⚠ This version is not installed. Run: govm install {resolution.version}"
        )
    return 0
