"""
Shared utilities for CLI commands.

Provides the orchestrator factory and the output helpers every command
uses, so all commands report results and errors the same way.
"""

import logging
import os
import sys
from typing import List, Optional

from govm.core.config import load_config
from govm.core.directory import GovmPaths, get_govm_root
from govm.core.exceptions import GovmError
from govm.toolchain.lifecycle import LifecycleOrchestrator
from govm.toolchain.shims import shims_on_path

logger = logging.getLogger(__name__)


# ============================================================================
# Orchestrator Construction
# ============================================================================


def get_paths() -> GovmPaths:
    """Get the manager layout for the configured root."""
    return GovmPaths(get_govm_root())


def build_orchestrator(
    args, with_installer: bool = False, refresh_shims: bool = True
) -> LifecycleOrchestrator:
    """
    Create an orchestrator for a command.

    Args:
        args: Parsed command-line arguments
        with_installer: Attach a network installer (install, use, list-remote)
        refresh_shims: Repair shims bound to a previous govm location

    Returns:
        Configured LifecycleOrchestrator

    Raises:
        ConfigError: If config.yaml is invalid
    """
    paths = get_paths()
    config = load_config(paths.config_file)

    installer = None
    if with_installer:
        # Imported here so the exec path never pays for loading requests
        from govm.toolchain.installer import GoInstaller

        installer = GoInstaller(
            config,
            staging_root=paths.tmp_dir,
            progress_callback=make_progress_callback(args),
        )

    orchestrator = LifecycleOrchestrator(paths, installer=installer, config=config)

    if refresh_shims:
        try:
            repaired = orchestrator.refresh_shims()
        except GovmError as e:
            logger.warning(f"Could not refresh shims: {e}")
        else:
            if repaired:
                logger.info(f"Updated shims: {', '.join(repaired)}")

    return orchestrator


# ============================================================================
# User Interface / Output Formatting
# ============================================================================


def print_error(message: str, details: Optional[str] = None):
    """
    Print error message to stderr in consistent format.

    Args:
        message: Main error message
        details: Optional additional details
    """
    print(f"ERROR: {message}", file=sys.stderr)
    if details:
        print(f"  {details}", file=sys.stderr)


def print_warning(message: str):
    """Print warning message to stderr."""
    print(f"WARNING: {message}", file=sys.stderr)


def safe_print(message: str, file=None):
    """
    Print message with safe encoding handling for Windows console.

    Falls back to ASCII markers if the status glyphs can't be encoded.

    Args:
        message: Message to print
        file: Output file (default: stdout)
    """
    try:
        print(message, file=file)
    except UnicodeEncodeError:
        safe_message = (
            message.replace("✓", "[OK]")
            .replace("✗", "[X]")
            .replace("→", "->")
            .replace("⚠", "WARNING:")
        )
        print(safe_message, file=file)


def confirm(prompt: str) -> bool:
    """
    Ask a yes/no question on the terminal; anything but 'y'/'yes' is no.

    End of input and Ctrl-C count as no.
    """
    try:
        response = input(f"{prompt} [y/N] ").strip().lower()
    except (EOFError, KeyboardInterrupt):
        print()
        return False
    return response in ("y", "yes")


def make_progress_callback(args):
    """Create a download progress printer, or None when output is quiet."""
    if getattr(args, "quiet", False) or not sys.stderr.isatty():
        return None

    from govm.core.download import format_progress

    def report(progress):
        end = "\n" if progress.bytes_downloaded >= progress.total_bytes else ""
        print(f"\r  {format_progress(progress)}", end=end, file=sys.stderr, flush=True)

    return report


def warn_if_shims_not_on_path(paths: GovmPaths, path_value: Optional[str] = None):
    """Tell the user how to enable the shims if they are not on PATH."""
    if path_value is None:
        path_value = os.environ.get("PATH", "")
    entries: List[str] = path_value.split(os.pathsep)
    if shims_on_path(paths.shims_dir, entries):
        return

    print_warning(f"{paths.shims_dir} is not on your PATH")
    if os.name == "nt":
        print(
            f"  Add it to the front of PATH: set PATH={paths.shims_dir};%PATH%",
            file=sys.stderr,
        )
    else:
        print(
            f'  Add to your shell profile: export PATH="{paths.shims_dir}:$PATH"',
            file=sys.stderr,
        )
