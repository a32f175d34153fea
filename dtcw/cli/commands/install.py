"""
Install command implementation.

Installs docToolchain ('toolchain') or a Java runtime ('runtime') into the
selected environment. Without an explicit environment, installs always go
to the local environment.
"""

import logging
from enum import Enum
from typing import Optional

from dtcw.cli.utils import resolve_environment
from dtcw.core.exceptions import ArgumentError, UnreachableStateError
from dtcw.environment.types import Environment
from dtcw.runtime.installer import install_runtime
from dtcw.toolchain.installer import install_toolchain

logger = logging.getLogger(__name__)


class Component(Enum):
    """Installable components."""

    TOOLCHAIN = "toolchain"
    RUNTIME = "runtime"


_ALIASES = {
    "toolchain": Component.TOOLCHAIN,
    "doctoolchain": Component.TOOLCHAIN,
    "runtime": Component.RUNTIME,
    "java": Component.RUNTIME,
}


def parse_component(token: Optional[str]) -> Component:
    """
    Parse the component named after 'install'.

    Raises:
        ArgumentError: If the component is missing or unknown
    """
    if token is None:
        raise ArgumentError(
            "missing component to install",
            remediation="Use 'dtcw install toolchain' or 'dtcw install runtime'.",
        )
    component = _ALIASES.get(token.lower())
    if component is None:
        raise ArgumentError(
            f"unknown component '{token}'",
            remediation="Installable components: toolchain, runtime.",
        )
    return component


def run(args) -> int:
    """
    Run the install command.

    Args:
        args: Parsed arguments with settings, requested environment and invocation

    Returns:
        Exit code (0 for success)
    """
    resolution = resolve_environment(args.settings, args.requested, install=True)
    environment = resolution.environment
    component = args.invocation.component

    if component is Component.TOOLCHAIN:
        install_toolchain(environment, resolution.settings, resolution.host)
    elif component is Component.RUNTIME:
        if environment is Environment.DOCKER:
            logger.info("Nothing to install for docker, the image ships its own Java")
        else:
            install_runtime(resolution.settings.root)
    else:
        raise UnreachableStateError(f"unhandled component {component}")

    return 0
