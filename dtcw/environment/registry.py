"""
Environment registry.

Turns probed host capabilities into the ordered set of environments that
can run docToolchain here: local always, then sdk, then docker.
"""

import logging

from dtcw.core.capabilities import HostCapabilities
from dtcw.environment.types import Environment, EnvironmentCapabilities

logger = logging.getLogger(__name__)


def get_available_environments(host: HostCapabilities) -> EnvironmentCapabilities:
    """
    List the environments usable on this host.

    Args:
        host: Probed host capabilities

    Returns:
        EnvironmentCapabilities in default preference order

    Example:
        >>> get_available_environments(HostCapabilities(docker="/usr/bin/docker"))
        EnvironmentCapabilities(environments=(<Environment.LOCAL: 'local'>, <Environment.DOCKER: 'docker'>))
    """
    environments = [Environment.LOCAL]
    if host.has_sdkman:
        environments.append(Environment.SDK)
    if host.has_docker:
        environments.append(Environment.DOCKER)

    capabilities = EnvironmentCapabilities(tuple(environments))
    logger.info(f"Available docToolchain environments: {capabilities}")
    return capabilities
