"""
pyver CLI argument parser.

This module implements the command-line interface for pyver using argparse.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("pyver")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)


class CLI:
    """pyver command-line interface."""

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
            prog="pyver",
            description="pyver - A Python version manager",
            epilog='Use "pyver COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"pyver {__version__}"
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
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to YAML configuration file",
        )

        # Subcommands
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_list_command(subparsers)
        self._add_cached_command(subparsers)
        self._add_which_command(subparsers)
        self._add_build_command(subparsers)

        return parser

    def _add_root_argument(self, parser):
        parser.add_argument(
            "--root",
            "-r",
            metavar="DIR",
            help="pyver root directory (default: $PYVER_ROOT or ~/.pyver)",
        )

    def _add_list_command(self, subparsers):
        """Add 'list' subcommand."""
        parser = subparsers.add_parser(
            "list",
            help="List installed versions",
            description="List installed Python versions",
        )
        self._add_root_argument(parser)

    def _add_cached_command(self, subparsers):
        """Add 'cached' subcommand."""
        parser = subparsers.add_parser(
            "cached",
            help="List cached sources",
            description="List versions with cached source archives",
        )
        self._add_root_argument(parser)

    def _add_which_command(self, subparsers):
        """Add 'which' subcommand."""
        parser = subparsers.add_parser(
            "which",
            help="Show interpreter path for an installed version",
            description="Print the python3 path of the first installed version "
            "starting with VERSION",
        )
        self._add_root_argument(parser)
        parser.add_argument("version", metavar="VERSION", help="Version prefix")

    def _add_build_command(self, subparsers):
        """Add 'build' subcommand."""
        parser = subparsers.add_parser(
            "build",
            help="Fetch, extract and build a version",
            description="Fetch, extract and (with --no-dry-run) build and install "
            "a Python version",
        )
        self._add_root_argument(parser)
        parser.add_argument(
            "--version",
            required=True,
            metavar="VERSION",
            help="Version to build (e.g., 3.11.4)",
        )
        parser.add_argument(
            "--no-dry-run",
            "-n",
            action="store_true",
            help="Actually run configure and make install",
        )

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        # Configure logging
        self._configure_logging(parsed_args)

        # Check if command specified
        if not parsed_args.command:
            self.parser.print_help()
            return 1

        # Dispatch to command handler
        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except Exception as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        format_str = "%(message)s"
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            # Errors already carry an "Error:" prefix
            level = logging.ERROR
        else:
            level = logging.INFO

        logging.basicConfig(
            level=level,
            format=format_str,
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
        from pyver.cli.commands import build, inventory, which

        command_map = {
            "list": inventory.run_list,
            "cached": inventory.run_cached,
            "which": which.run,
            "build": build.run,
        }

        return command_map[args.command](args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
