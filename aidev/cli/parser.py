"""
aidev CLI argument parser.

This module implements the command-line interface for aidev using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from aidev import __version__

logger = logging.getLogger(__name__)

COMMAND_MODULES = {
    "dev": "aidev.cli.commands.dev",
    "minimal": "aidev.cli.commands.minimal",
    "doctor": "aidev.cli.commands.doctor",
}


class CLI:
    """aidev command-line interface."""

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
            prog="aidev",
            description="aidev - AI development environment bootstrapper",
            epilog='Use "aidev COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument("--version", action="version", version=f"aidev {__version__}")
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
            help="Path to configuration file (default: ./aidev.yaml)",
        )
        parser.add_argument(
            "--project-root",
            type=Path,
            metavar="PATH",
            default=Path.cwd(),
            help="Project root directory (default: current directory)",
        )

        # Subcommands
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_dev_command(subparsers)
        self._add_minimal_command(subparsers)
        self._add_doctor_command(subparsers)

        return parser

    def _add_shell_options(self, parser):
        """Add options controlling how the session is entered."""
        group = parser.add_mutually_exclusive_group()
        group.add_argument(
            "--no-shell",
            action="store_true",
            help="Bootstrap and report only, do not start a shell",
        )
        group.add_argument(
            "--print-env",
            action="store_true",
            help='Print an activation script for: eval "$(aidev COMMAND --print-env)"',
        )

    def _add_dev_command(self, subparsers):
        """Add 'dev' subcommand."""
        parser = subparsers.add_parser(
            "dev",
            help="Enter the full AI development shell",
            description=(
                "Configure the install prefix, load .env files, create missing "
                "scaffold files, install AI assistant CLIs, and report status"
            ),
        )
        self._add_shell_options(parser)
        parser.add_argument(
            "--skip-install",
            action="store_true",
            help="Do not install or update global packages",
        )

    def _add_minimal_command(self, subparsers):
        """Add 'minimal' subcommand."""
        parser = subparsers.add_parser(
            "minimal",
            help="Enter the minimal shell",
            description="Load .env and .env.local only, without scaffolding or installs",
        )
        self._add_shell_options(parser)

    def _add_doctor_command(self, subparsers):
        """Add 'doctor' subcommand."""
        parser = subparsers.add_parser(
            "doctor",
            help="Check shell tools and API keys",
            description="Report which tools the shell expects are available",
        )
        parser.add_argument(
            "--variant",
            choices=["dev", "minimal"],
            default="dev",
            metavar="VARIANT",
            help="Shell variant to check (dev|minimal) [default: dev]",
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
