"""
govm CLI argument parser.

This module implements the command-line interface for govm using argparse.
"""

import argparse
import importlib
import logging
import sys
from typing import List, Optional

from govm import __version__
from govm.cli.utils import print_error
from govm.core.exceptions import GovmError

logger = logging.getLogger(__name__)

# Command name (and aliases) -> module exposing run(args)
COMMAND_MODULES = {
    "install": "govm.cli.commands.install",
    "i": "govm.cli.commands.install",
    "use": "govm.cli.commands.use",
    "global": "govm.cli.commands.global_default",
    "local": "govm.cli.commands.local_pin",
    "version": "govm.cli.commands.version",
    "versions": "govm.cli.commands.versions",
    "ls": "govm.cli.commands.versions",
    "list-remote": "govm.cli.commands.list_remote",
    "ls-remote": "govm.cli.commands.list_remote",
    "uninstall": "govm.cli.commands.uninstall",
    "rm": "govm.cli.commands.uninstall",
    "which": "govm.cli.commands.which",
    "exec": "govm.cli.commands.exec",
    "rehash": "govm.cli.commands.rehash",
    "prune": "govm.cli.commands.prune",
}


class CLI:
    """govm command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="govm",
            description="govm - Go version manager",
            epilog='Use "govm COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"govm {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )

        # Subcommands
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_install_command(subparsers)
        self._add_use_command(subparsers)
        self._add_global_command(subparsers)
        self._add_local_command(subparsers)
        self._add_version_command(subparsers)
        self._add_versions_command(subparsers)
        self._add_list_remote_command(subparsers)
        self._add_uninstall_command(subparsers)
        self._add_which_command(subparsers)
        self._add_exec_command(subparsers)
        self._add_rehash_command(subparsers)
        self._add_prune_command(subparsers)

        return parser

    def _add_install_command(self, subparsers):
        """Add 'install' subcommand."""
        parser = subparsers.add_parser(
            "install",
            aliases=["i"],
            help="Install a Go version",
            description="Download and install a Go release from go.dev",
        )
        parser.add_argument(
            "version", help="Version to install (e.g., 1.22.0, go1.22.0)"
        )

    def _add_use_command(self, subparsers):
        """Add 'use' subcommand."""
        parser = subparsers.add_parser(
            "use",
            help="Install if needed and switch to a Go version",
            description=(
                "Switch to a Go version, installing it first if necessary. "
                "Sets the global default unless --local is given."
            ),
        )
        parser.add_argument("version", help="Version to use")
        parser.add_argument(
            "--local",
            "-l",
            action="store_true",
            help="Pin the version in ./.go-version instead of globally",
        )

    def _add_global_command(self, subparsers):
        """Add 'global' subcommand."""
        parser = subparsers.add_parser(
            "global",
            help="Show or set the global default version",
            description="Show the global default Go version, or set it",
        )
        parser.add_argument(
            "version", nargs="?", help="Installed version to make the default"
        )

    def _add_local_command(self, subparsers):
        """Add 'local' subcommand."""
        parser = subparsers.add_parser(
            "local",
            help="Pin a version for the current directory",
            description="Write .go-version in the current directory",
        )
        parser.add_argument("version", help="Installed version to pin")

    def _add_version_command(self, subparsers):
        """Add 'version' subcommand."""
        subparsers.add_parser(
            "version",
            help="Show the active Go version and where it is set",
            description="Show the Go version that applies here and its source",
        )

    def _add_versions_command(self, subparsers):
        """Add 'versions' subcommand."""
        subparsers.add_parser(
            "versions",
            aliases=["ls"],
            help="List installed versions",
            description="List installed Go versions, newest first",
        )

    def _add_list_remote_command(self, subparsers):
        """Add 'list-remote' subcommand."""
        parser = subparsers.add_parser(
            "list-remote",
            aliases=["ls-remote"],
            help="List versions available for download",
            description="List Go releases published on go.dev",
        )
        parser.add_argument(
            "--all",
            "-a",
            action="store_true",
            help="Include release candidates and betas",
        )
        parser.add_argument(
            "--limit",
            "-n",
            type=int,
            default=20,
            metavar="N",
            help="Number of versions to show, 0 for all (default: 20)",
        )

    def _add_uninstall_command(self, subparsers):
        """Add 'uninstall' subcommand."""
        parser = subparsers.add_parser(
            "uninstall",
            aliases=["rm"],
            help="Remove an installed version",
            description="Remove an installed Go version",
        )
        parser.add_argument("version", help="Version to remove")

    def _add_which_command(self, subparsers):
        """Add 'which' subcommand."""
        parser = subparsers.add_parser(
            "which",
            help="Show the path of a toolchain binary",
            description="Show the binary that a shim would run here",
        )
        parser.add_argument(
            "binary",
            nargs="?",
            default="go",
            help="Toolchain binary (default: go)",
        )

    def _add_exec_command(self, subparsers):
        """Add 'exec' subcommand."""
        parser = subparsers.add_parser(
            "exec",
            help="Run a toolchain binary of the active version",
            description=(
                "Run a binary of the Go version that applies here. "
                "This is what the shims call."
            ),
        )
        parser.add_argument("binary", help="Toolchain binary (e.g., go, gofmt)")
        parser.add_argument(
            "args",
            nargs=argparse.REMAINDER,
            help="Arguments passed to the binary unchanged",
        )

    def _add_rehash_command(self, subparsers):
        """Add 'rehash' subcommand."""
        subparsers.add_parser(
            "rehash",
            help="Regenerate shims",
            description="Rewrite every shim for the current govm location",
        )

    def _add_prune_command(self, subparsers):
        """Add 'prune' subcommand."""
        parser = subparsers.add_parser(
            "prune",
            help="Remove old versions",
            description=(
                "Remove all but the newest versions. "
                "The global default is never removed."
            ),
        )
        parser.add_argument(
            "--keep",
            "-k",
            type=int,
            metavar="N",
            help="Number of newest versions to keep (default: prune.keep, 3)",
        )
        parser.add_argument(
            "--yes",
            "-y",
            action="store_true",
            help="Remove without asking for confirmation",
        )

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        ``exec <binary> ...`` bypasses argparse so that everything after the
        binary name, including "--" and option-like values, reaches the
        binary unchanged. Shims always call govm in this form.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        if args is None:
            args = sys.argv[1:]

        if len(args) >= 2 and args[0] == "exec" and not args[1].startswith("-"):
            return argparse.Namespace(
                command="exec",
                binary=args[1],
                args=list(args[2:]),
                verbose=False,
                quiet=False,
            )

        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code: the child's code for exec, otherwise 0 for success,
            1 for errors and 130 when interrupted
        """
        parsed_args = self.parse_args(args)

        # Configure logging
        self._configure_logging(parsed_args)

        # Check if command specified
        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except GovmError as e:
            print_error(str(e), e.hint)
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1
        except Exception as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Log records go to stderr so that toolchain output on stdout stays
        clean when redirected.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            stream=sys.stderr,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        module_name = COMMAND_MODULES.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
