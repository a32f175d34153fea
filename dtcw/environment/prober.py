"""
Installation prober.

Answers, per environment, whether the requested docToolchain version can be
launched without installing anything. Nothing is installed or modified here.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

from dtcw.core.capabilities import HostCapabilities
from dtcw.core.config import Settings
from dtcw.core.directory import (
    get_entry_point,
    get_sdkman_candidate_home,
    get_toolchain_home,
    is_launchable,
)
from dtcw.environment.types import (
    Environment,
    EnvironmentCapabilities,
    InstallationState,
)

logger = logging.getLogger(__name__)


def get_install_home(
    environment: Environment, settings: Settings, host: HostCapabilities
) -> Optional[Path]:
    """
    Get the directory holding the requested version in an environment.

    Returns:
        Installation directory, or None for docker and for sdk without SDKMAN
    """
    version = settings.version.value
    if environment is Environment.LOCAL:
        return get_toolchain_home(settings.root, version)
    if environment is Environment.SDK and host.sdkman_dir is not None:
        return get_sdkman_candidate_home(host.sdkman_dir, version)
    return None


def is_installed(
    environment: Environment, settings: Settings, host: HostCapabilities
) -> bool:
    """True if the requested version is launchable in the environment."""
    if environment is Environment.DOCKER:
        # image is pulled on first use
        return True

    home = get_install_home(environment, settings, host)
    if home is None:
        return False
    return is_launchable(get_entry_point(home))


def probe_installations(
    settings: Settings,
    host: HostCapabilities,
    capabilities: EnvironmentCapabilities,
) -> InstallationState:
    """
    Probe every available environment for the requested version.

    Args:
        settings: Resolved settings (version and install root)
        host: Probed host capabilities
        capabilities: Environments available on this host

    Returns:
        InstallationState covering every available environment
    """
    usable: Dict[Environment, bool] = {
        environment: is_installed(environment, settings, host)
        for environment in capabilities
    }
    state = InstallationState(usable=usable, order=capabilities.environments)

    installed = " ".join(str(e) for e in state.installed()) or "none"
    logger.info(f"Environments with docToolchain [{settings.version}]: {installed}")
    return state
