"""
composerkit CLI argument parser.

This module implements the command-line interface for composerkit using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from composerkit import __version__
from composerkit.core.exceptions import ComposerKitError

logger = logging.getLogger(__name__)


class CLI:
    """composerkit command-line interface."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="composerkit",
            description="composerkit - locate, install and run PHP Composer",
            epilog='Use "composerkit COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"composerkit {__version__}"
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
            help="Path to configuration file (default: ./composerkit.yaml)",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_detect_command(subparsers)
        self._add_install_command(subparsers)
        self._add_run_command(subparsers)
        self._add_version_command(subparsers)

        return parser

    def _add_detect_command(self, subparsers):
        """Add 'detect' subcommand."""
        parser = subparsers.add_parser(
            "detect",
            help="Locate the Composer executable",
            description="Print the Composer executable found on this host",
        )
        parser.add_argument(
            "--list",
            action="store_true",
            help="List every candidate path and whether it is executable",
        )

    def _add_install_command(self, subparsers):
        """Add 'install' subcommand."""
        parser = subparsers.add_parser(
            "install",
            help="Install Composer",
            description="Download the Composer installer and install composer.phar",
        )
        parser.add_argument(
            "--install-path",
            type=Path,
            metavar="DIR",
            help="Installation directory (default: platform specific)",
        )
        parser.add_argument(
            "--sudo",
            action="store_true",
            help="Use sudo when the installation directory is not writable",
        )
        parser.add_argument(
            "--no-brew",
            action="store_true",
            help="Do not try Homebrew on macOS",
        )

    def _add_run_command(self, subparsers):
        """Add 'run' subcommand."""
        parser = subparsers.add_parser(
            "run",
            help="Run a Composer command",
            description="Run Composer with the given arguments and print its output",
        )
        parser.add_argument(
            "--timeout",
            type=float,
            metavar="SECONDS",
            help="Timeout for the command (default: from configuration)",
        )
        parser.add_argument(
            "--working-dir",
            "-d",
            type=Path,
            metavar="DIR",
            help="Directory to run Composer in",
        )
        parser.add_argument(
            "composer_args",
            nargs=argparse.REMAINDER,
            metavar="ARGS",
            help="Arguments passed to Composer",
        )

    def _add_version_command(self, subparsers):
        """Add 'version' subcommand."""
        subparsers.add_parser(
            "version",
            help="Show the Composer version",
            description="Print the version reported by `composer --version`",
        )

    def parse_args(self, args: Optional[List[str]] = None) -> argparse.Namespace:
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

        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except ComposerKitError as e:
            logger.error(f"Error: {e}")
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

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
        command_map = {
            "detect": "composerkit.cli.commands.detect",
            "install": "composerkit.cli.commands.install",
            "run": "composerkit.cli.commands.run",
            "version": "composerkit.cli.commands.version",
        }

        module_name = command_map.get(args.command)
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
