"""
Host capability probe.

Detects the optional tools dtcw can make use of:

- docker: container engine, enables the 'docker' environment
- SDKMAN: version manager, enables the 'sdk' environment
- git: needed to install floating docToolchain versions
- unzip: needed to install docToolchain releases
- curl/wget/fetch: needed for every download

A missing capability is a normal outcome, never an error. Operations that
need one check for it themselves and fail with remediation text.
"""

import logging
import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dtcw.core.download import find_download_tool

logger = logging.getLogger(__name__)

SDKMAN_INIT_SCRIPT = Path("bin") / "sdkman-init.sh"


@dataclass(frozen=True)
class HostCapabilities:
    """
    Optional tools found on the host.

    Attributes:
        docker: Path to the docker executable, or None
        sdkman_dir: SDKMAN installation directory, or None
        git: Path to git, or None
        unzip: Path to unzip, or None
        download_tool: Name of the preferred HTTP client, or None
    """

    docker: Optional[str] = None
    sdkman_dir: Optional[Path] = None
    git: Optional[str] = None
    unzip: Optional[str] = None
    download_tool: Optional[str] = None

    @property
    def has_docker(self) -> bool:
        return self.docker is not None

    @property
    def has_sdkman(self) -> bool:
        return self.sdkman_dir is not None

    def __str__(self) -> str:
        found = [
            name
            for name, value in (
                ("docker", self.docker),
                ("sdkman", self.sdkman_dir),
                ("git", self.git),
                ("unzip", self.unzip),
                ("download", self.download_tool),
            )
            if value
        ]
        return ", ".join(found) or "none"


def find_sdkman_dir(environ: Optional[Mapping[str, str]] = None) -> Optional[Path]:
    """
    Locate an SDKMAN installation.

    Args:
        environ: Environment mapping (default: os.environ)

    Returns:
        SDKMAN_DIR (or ~/.sdkman) if it holds bin/sdkman-init.sh, else None
    """
    environ = os.environ if environ is None else environ
    candidate = Path(environ.get("SDKMAN_DIR") or Path.home() / ".sdkman")
    if (candidate / SDKMAN_INIT_SCRIPT).is_file():
        return candidate
    return None


def probe_capabilities(environ: Optional[Mapping[str, str]] = None) -> HostCapabilities:
    """
    Probe the host for optional tools.

    Args:
        environ: Environment mapping (default: os.environ)

    Returns:
        HostCapabilities for this run
    """
    found = find_download_tool()
    capabilities = HostCapabilities(
        docker=shutil.which("docker"),
        sdkman_dir=find_sdkman_dir(environ),
        git=shutil.which("git"),
        unzip=shutil.which("unzip"),
        download_tool=found[0].name if found else None,
    )
    logger.debug(f"Host capabilities: {capabilities}")
    return capabilities
