"""
Versions command implementation.

Lists installed Go versions.
"""

from govm.cli.utils import build_orchestrator, safe_print


def run(args) -> int:
    """
    Run the versions command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    orchestrator = build_orchestrator(args)
    installed = orchestrator.list_installed()

    if not installed:
        safe_print("→ No Go versions installed")
        print("  Run 'govm list-remote' to see available versions")
        return 0

    print("Installed Go versions:")
    print()
    for item in installed:
        labels = []
        if item.current:
            labels.append("current")
        if item.is_global:
            labels.append("global")
        marker = "→" if item.current else " "
        label_str = f" ({', '.join(labels)})" if labels else ""
        safe_print(f"  {marker} {item.version}{label_str}")
    return 0
