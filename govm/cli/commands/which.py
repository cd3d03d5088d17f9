"""
Which command implementation.

Prints the path of the binary a shim would run.
"""

from govm.cli.utils import build_orchestrator


def run(args) -> int:
    """
    Run the which command.

    Args:
        args: Parsed command-line arguments with:
            - binary: Toolchain binary name

    Returns:
        Exit code (0 for success)
    """
    orchestrator = build_orchestrator(args)
    print(orchestrator.which(args.binary))
    return 0
