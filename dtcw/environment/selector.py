"""
Environment selection.

Selection runs in two steps so that argument errors are reported before the
host is probed:

1. resolve_requested_environment() validates the optional environment token
   against the fixed set and the requested version.
2. select_environment() picks exactly one environment using the probe
   results.

Decision rule:
    - an explicit environment wins if the host provides it;
    - installs, floating versions and hosts where nothing is installed use local;
    - otherwise the first environment (local, sdk, docker) that has the
      version installed.
"""

import logging
from typing import Optional

from dtcw.core.config import ToolchainVersion
from dtcw.core.exceptions import ArgumentError, UnreachableStateError
from dtcw.environment.types import (
    Environment,
    EnvironmentCapabilities,
    InstallationState,
)

logger = logging.getLogger(__name__)

_PREREQUISITES = {
    Environment.SDK: "SDKMAN (https://sdkman.io)",
    Environment.DOCKER: "Docker (https://docs.docker.com/get-docker/)",
}


def resolve_requested_environment(
    token: Optional[str], version: ToolchainVersion
) -> Optional[Environment]:
    """
    Validate an explicitly requested environment.

    Args:
        token: Environment name given on the command line, or None
        version: Requested docToolchain version

    Returns:
        The requested Environment, or None when nothing was requested

    Raises:
        ArgumentError: If the token names no environment, or a floating
            version is combined with anything but local
    """
    if token is None:
        return None

    environment = Environment.from_token(token)
    if environment is None:
        names = ", ".join(e.value for e in Environment)
        raise ArgumentError(
            f"unknown environment '{token}'",
            remediation=f"Use one of: {names}.",
        )

    if version.is_floating and environment is not Environment.LOCAL:
        raise ArgumentError(
            f"using '{version}' as version is only supported with the local "
            f"environment, not '{environment}'",
            remediation="Set DTC_VERSION to a release, or use 'dtcw local ...'.",
        )
    return environment


def select_environment(
    requested: Optional[Environment],
    install: bool,
    version: ToolchainVersion,
    capabilities: EnvironmentCapabilities,
    state: InstallationState,
) -> Environment:
    """
    Choose the environment that runs this invocation.

    Args:
        requested: Validated explicit environment, or None
        install: Whether the invocation is an install
        version: Requested docToolchain version
        capabilities: Environments available on this host
        state: Installation probe results

    Returns:
        The selected Environment

    Raises:
        ArgumentError: If the requested environment isn't available on this host
        UnreachableStateError: If no rule produced a selection
    """
    if requested is not None:
        if requested not in capabilities:
            raise ArgumentError(
                f"environment '{requested}' is not available on this host",
                remediation=f"Install {_PREREQUISITES[requested]} to use it.",
            )
        logger.debug(f"Using requested environment: {requested}")
        return requested

    if install or version.is_floating or state.none_usable:
        logger.debug("Falling back to the local environment")
        return Environment.LOCAL

    for environment in capabilities:
        if state.is_installed(environment):
            return environment

    raise UnreachableStateError(
        f"no environment selected although [{' '.join(map(str, state.installed()))}] "
        "report an installation"
    )
