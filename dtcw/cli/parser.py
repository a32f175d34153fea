"""
dtcw CLI argument parser.

This module implements the command-line interface for dtcw using argparse.

Usage:
    dtcw [OPTIONS] [local|sdk|docker] install toolchain|runtime
    dtcw [OPTIONS] [local|sdk|docker] TASK [TASK...]
"""

import argparse
import logging
import sys
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from dtcw.cli.commands.install import Component, parse_component
from dtcw.cli.utils import print_error, resolve_project_root
from dtcw.core.config import load_settings, with_detected_branch
from dtcw.core.exceptions import ArgumentError, DtcwError, EXIT_ARGUMENT
from dtcw.environment.selector import resolve_requested_environment
from dtcw.environment.types import Environment

try:
    __version__ = version("dtcw")
except PackageNotFoundError:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)

EPILOG = """\
environment variables:
  DTC_VERSION         docToolchain version, 'latest' or 'latestdev'
  DTC_ROOT            install root (default: ~/.doctoolchain)
  DTC_CONFIG_FILE     docToolchain config (default: docToolchainConfig.groovy)
  DTC_SITETHEME       URL of a site theme
  DTC_TEMPLATE1..N    URLs of additional templates
  DTC_HEADLESS        true to disable interactive behaviour
  DTC_PROJECT_BRANCH  branch name handed to docToolchain
  DTC_OPTS            extra options for every docToolchain call

examples:
  dtcw install toolchain
  dtcw local install runtime
  dtcw generateHTML generatePDF
  dtcw docker generateSite
"""


@dataclass(frozen=True)
class Invocation:
    """
    Positional arguments split into their roles.

    Attributes:
        environment: Environment token given first, or None
        component: Component to install, None for task runs
        tasks: docToolchain tasks passed through verbatim
    """

    environment: Optional[str]
    component: Optional[Component]
    tasks: Tuple[str, ...] = ()

    @property
    def install(self) -> bool:
        return self.component is not None


def parse_invocation(tokens: Sequence[str]) -> Invocation:
    """
    Split positional arguments into environment, install directive and tasks.

    Args:
        tokens: Positional arguments after global options

    Returns:
        Invocation

    Raises:
        ArgumentError: If nothing but an environment is given, or an install
            directive is malformed

    Example:
        >>> parse_invocation(["docker", "generateHTML"])
        Invocation(environment='docker', component=None, tasks=('generateHTML',))
    """
    tokens = list(tokens)
    environment = None
    if tokens and Environment.from_token(tokens[0]) is not None:
        environment = tokens.pop(0)

    if not tokens:
        raise ArgumentError(
            "no task given",
            remediation="Pass docToolchain tasks, or 'install toolchain|runtime'.",
        )

    if tokens[0] == "install":
        if len(tokens) > 2:
            raise ArgumentError(
                f"unexpected arguments after install: {' '.join(tokens[2:])}"
            )
        component = parse_component(tokens[1] if len(tokens) > 1 else None)
        return Invocation(environment=environment, component=component)

    return Invocation(environment=environment, component=None, tasks=tuple(tokens))


class CLI:
    """dtcw command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="dtcw",
            usage="%(prog)s [OPTIONS] [local|sdk|docker] "
            "(install toolchain|runtime | TASK...)",
            description="dtcw - run docToolchain locally, with SDKMAN or in Docker",
            epilog=EPILOG,
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"dtcw {__version__}"
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
            "--project-root",
            type=Path,
            metavar="PATH",
            default=None,
            help="Documentation project directory (default: current directory)",
        )
        parser.add_argument(
            "arguments",
            nargs=argparse.REMAINDER,
            metavar="ARGS",
            help="Optional environment, then 'install COMPONENT' or docToolchain tasks",
        )

        return parser

    def parse_args(self, args: Optional[List[str]] = None) -> argparse.Namespace:
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
            Exit code (0 for success, docToolchain's code for task runs)
        """
        parsed_args = self.parse_args(args)

        # Configure logging
        self._configure_logging(parsed_args)

        if not parsed_args.arguments:
            self.parser.print_help()
            return EXIT_ARGUMENT

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except DtcwError as e:
            print_error(str(e), e.remediation)
            if isinstance(e, ArgumentError):
                self.parser.print_usage(sys.stderr)
            return e.exit_code

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
        Validate the invocation and dispatch to the install or run command.

        Argument errors are raised here, before git or the host is probed.

        Args:
            args: Parsed arguments

        Returns:
            Exit code from command handler
        """
        args.project_root = resolve_project_root(args.project_root)
        args.invocation = parse_invocation(args.arguments)
        args.settings = load_settings(args.project_root)
        args.requested = resolve_requested_environment(
            args.invocation.environment, args.settings.version
        )
        args.settings = with_detected_branch(args.settings, args.project_root)

        logger.info(f"dtcw {__version__} - docToolchain {args.settings.version}")

        if args.invocation.install:
            from dtcw.cli.commands import install

            return install.run(args)

        from dtcw.cli.commands import run

        return run.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
