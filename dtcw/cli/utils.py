"""
Shared utilities for CLI commands.

Provides the environment resolution pipeline shared by the install and run
commands, plus consistent error output.
"""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dtcw.core.capabilities import HostCapabilities, probe_capabilities
from dtcw.core.config import Settings
from dtcw.environment.prober import probe_installations
from dtcw.environment.registry import get_available_environments
from dtcw.environment.selector import select_environment
from dtcw.environment.types import (
    Environment,
    EnvironmentCapabilities,
    InstallationState,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Environment Resolution
# ============================================================================


@dataclass(frozen=True)
class Resolution:
    """Everything known about the host once an environment is selected."""

    settings: Settings
    host: HostCapabilities
    capabilities: EnvironmentCapabilities
    state: InstallationState
    environment: Environment


def resolve_environment(
    settings: Settings, requested: Optional[Environment], install: bool
) -> Resolution:
    """
    Probe the host and select the environment for this invocation.

    Args:
        settings: Resolved settings
        requested: Validated explicit environment, or None
        install: Whether the invocation is an install

    Returns:
        Resolution with the selected environment

    Raises:
        ArgumentError: If the requested environment isn't available
    """
    host = probe_capabilities()
    capabilities = get_available_environments(host)
    state = probe_installations(settings, host, capabilities)
    environment = select_environment(
        requested, install, settings.version, capabilities, state
    )
    logger.info(f"Using environment: {environment}")
    return Resolution(
        settings=settings,
        host=host,
        capabilities=capabilities,
        state=state,
        environment=environment,
    )


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


def resolve_project_root(path: Optional[Path] = None) -> Path:
    """
    Resolve project root directory.

    Args:
        path: Optional path (defaults to current directory)

    Returns:
        Resolved absolute path
    """
    if path is None:
        path = Path.cwd()
    return path.resolve()
