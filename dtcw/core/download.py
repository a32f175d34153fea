"""
Downloads through the host's HTTP client.

dtcw doesn't ship an HTTP stack of its own. It drives whichever of ``curl``,
``wget`` or ``fetch`` the host provides, in that order of preference. Only
the first client found is ever run: its failure is reported with its own
exit code and no other client is tried.
"""

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from dtcw.core.exceptions import MissingPrerequisiteError, RemoteOperationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DownloadTool:
    """A command-line HTTP client and how to ask it for one file."""

    name: str
    build_args: Callable[[str, str, Path], List[str]]


def _curl_args(executable: str, url: str, destination: Path) -> List[str]:
    return [executable, "--fail", "--location", "--output", str(destination), url]


def _wget_args(executable: str, url: str, destination: Path) -> List[str]:
    return [executable, "--quiet", f"--output-document={destination}", url]


def _fetch_args(executable: str, url: str, destination: Path) -> List[str]:
    return [executable, "--quiet", f"--output={destination}", url]


DOWNLOAD_TOOLS: Tuple[DownloadTool, ...] = (
    DownloadTool("curl", _curl_args),
    DownloadTool("wget", _wget_args),
    DownloadTool("fetch", _fetch_args),
)


def find_download_tool() -> Optional[Tuple[DownloadTool, str]]:
    """
    Find the preferred download tool on this host.

    Returns:
        (tool, executable path) for the first tool on PATH, or None
    """
    for tool in DOWNLOAD_TOOLS:
        executable = shutil.which(tool.name)
        if executable:
            return tool, executable
    return None


def download_file(url: str, destination: Path) -> Path:
    """
    Download url to destination with the first available HTTP client.

    Args:
        url: URL to download from
        destination: Local path to save the file

    Returns:
        Path to the downloaded file

    Raises:
        MissingPrerequisiteError: If none of curl, wget or fetch is installed
        RemoteOperationError: If the client exits non-zero; exit_code is the
            client's exit code

    Example:
        >>> download_file("https://example.com/docToolchain-3.4.2.zip",
        ...               Path("/tmp/source.zip"))
    """
    found = find_download_tool()
    if found is None:
        names = ", ".join(tool.name for tool in DOWNLOAD_TOOLS)
        raise MissingPrerequisiteError(
            f"no HTTP client found ({names})",
            remediation=f"Install one of {names} and try again.",
        )

    tool, executable = found
    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)

    args = tool.build_args(executable, url, destination)
    logger.info(f"Downloading {url}")
    logger.debug(f"Running {tool.name}: {args}")

    result = subprocess.run(args)
    if result.returncode != 0:
        raise RemoteOperationError(
            f"{tool.name} failed to download {url} (exit code {result.returncode})",
            exit_code=result.returncode,
        )

    logger.debug(f"Download complete: {destination}")
    return destination
