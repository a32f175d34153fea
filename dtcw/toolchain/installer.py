"""
docToolchain installation.

Two strategies, chosen by the version's kind:

- floating ('latest', 'latestdev'): a git checkout under
  <root>/docToolchain-<version>, cloned once and pulled afterwards.
  'latestdev' clones over SSH so the checkout can be pushed from.
- pinned releases: the release zip is downloaded to <root>/source.zip,
  unpacked into <root> with unzip and removed again.

Installing into SDKMAN delegates to 'sdk install'. Docker needs no install.
Every strategy is idempotent.
"""

import logging
import subprocess
from pathlib import Path
from typing import List

from dtcw.core.capabilities import HostCapabilities
from dtcw.core.config import Settings, VersionKind
from dtcw.core.directory import (
    TOOLCHAIN_ARCHIVE_NAME,
    get_entry_point,
    get_toolchain_home,
    is_launchable,
)
from dtcw.core.download import download_file
from dtcw.core.exceptions import (
    EXIT_FAILURE,
    MissingPrerequisiteError,
    RemoteOperationError,
    UnreachableStateError,
)
from dtcw.environment.prober import is_installed
from dtcw.environment.types import Environment

logger = logging.getLogger(__name__)

GITHUB_PROJECT_URL = "https://github.com/docToolchain/docToolchain"
GITHUB_CLONE_URLS = {
    VersionKind.LATEST: f"{GITHUB_PROJECT_URL}.git",
    VersionKind.LATEST_DEV: "git@github.com:docToolchain/docToolchain.git",
}


def get_release_url(version: str) -> str:
    """
    Get the download URL of a docToolchain release.

    Example:
        >>> get_release_url('3.4.2')
        'https://github.com/docToolchain/docToolchain/releases/download/v3.4.2/docToolchain-3.4.2.zip'
    """
    return f"{GITHUB_PROJECT_URL}/releases/download/v{version}/docToolchain-{version}.zip"


def _run(args: List[str], description: str) -> None:
    logger.debug(f"Running: {args}")
    try:
        result = subprocess.run(args)
    except OSError as e:
        raise RemoteOperationError(f"{description} failed: {e}", exit_code=1)
    if result.returncode != 0:
        raise RemoteOperationError(
            f"{description} failed (exit code {result.returncode})",
            exit_code=result.returncode,
        )


def install_floating(settings: Settings, host: HostCapabilities) -> Path:
    """
    Clone or update a development checkout of docToolchain.

    Raises:
        MissingPrerequisiteError: If git is not installed
        RemoteOperationError: If clone or pull fails
    """
    if host.git is None:
        raise MissingPrerequisiteError(
            f"git is required to install docToolchain '{settings.version}'",
            remediation="Install git (https://git-scm.com/downloads) or set "
            "DTC_VERSION to a release.",
        )

    home = get_toolchain_home(settings.root, settings.version.value)
    if (home / ".git").is_dir():
        logger.info(f"Updating docToolchain checkout in {home}")
        _run([host.git, "-C", str(home), "pull"], f"git pull in {home}")
        return home

    url = GITHUB_CLONE_URLS.get(settings.version.kind)
    if url is None:
        raise UnreachableStateError(
            f"no clone URL for version kind {settings.version.kind}"
        )

    settings.root.mkdir(parents=True, exist_ok=True)
    logger.info(f"Cloning docToolchain from {url}")
    _run([host.git, "clone", url, str(home)], f"git clone {url}")
    return home


def install_release(settings: Settings, host: HostCapabilities) -> Path:
    """
    Download and unpack a docToolchain release.

    Raises:
        MissingPrerequisiteError: If unzip or an HTTP client is missing
        RemoteOperationError: If the download or unzip fails, or the archive
            holds no launcher
    """
    version = settings.version.value
    home = get_toolchain_home(settings.root, version)

    if is_launchable(get_entry_point(home)):
        logger.info(f"docToolchain {version} is already installed in {home}")
        return home

    # zipfile would drop the executable bit of bin/doctoolchain
    if host.unzip is None:
        raise MissingPrerequisiteError(
            "unzip is required to install docToolchain",
            remediation="Install unzip with your package manager and try again.",
        )

    settings.root.mkdir(parents=True, exist_ok=True)
    archive_path = settings.root / TOOLCHAIN_ARCHIVE_NAME

    logger.info(f"Installing docToolchain {version} to {home}")
    download_file(get_release_url(version), archive_path)
    _run(
        [host.unzip, "-q", "-o", str(archive_path), "-d", str(settings.root)],
        f"unzip {archive_path}",
    )
    archive_path.unlink()

    if not is_launchable(get_entry_point(home)):
        raise RemoteOperationError(
            f"{archive_path.name} did not contain {get_entry_point(home)}",
            exit_code=EXIT_FAILURE,
        )

    logger.info(f"Installed docToolchain {version} successfully")
    return home


def install_with_sdkman(settings: Settings, host: HostCapabilities) -> None:
    """
    Install docToolchain as an SDKMAN candidate.

    Raises:
        MissingPrerequisiteError: If SDKMAN is not installed
        RemoteOperationError: If 'sdk install' fails
    """
    if host.sdkman_dir is None:
        raise MissingPrerequisiteError(
            "SDKMAN is not installed",
            remediation="Install SDKMAN from https://sdkman.io.",
        )

    version = settings.version.value
    if is_installed(Environment.SDK, settings, host):
        logger.info(f"docToolchain {version} is already installed with SDKMAN")
        return

    init_script = host.sdkman_dir / "bin" / "sdkman-init.sh"
    script = f'source "{init_script}" && sdk install doctoolchain {version}'
    _run(["bash", "-c", script], f"sdk install doctoolchain {version}")


def install_toolchain(
    environment: Environment, settings: Settings, host: HostCapabilities
) -> None:
    """
    Install the requested docToolchain version into an environment.

    Args:
        environment: Selected environment
        settings: Resolved settings
        host: Probed host capabilities
    """
    if environment is Environment.DOCKER:
        logger.info(
            "Nothing to install for docker, the image is pulled on first use"
        )
        return

    if environment is Environment.SDK:
        install_with_sdkman(settings, host)
        return

    if settings.version.is_floating:
        install_floating(settings, host)
    else:
        install_release(settings, host)
