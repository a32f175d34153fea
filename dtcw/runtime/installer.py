"""
Java runtime installation for dtcw.

Installs an Eclipse Temurin JDK from the Adoptium API into <root>/jdk, where
the runtime validator looks first. The archive's top-level directory
(e.g. jdk-17.0.9+9/) is stripped so the JDK lands directly in <root>/jdk.

Supported hosts: Linux and macOS on x64 or aarch64, and Cygwin.
"""

import logging
import shutil
import sys
import tarfile
from pathlib import Path, PurePosixPath
from typing import Optional

from dtcw.core.directory import JAVA_ARCHIVE_NAME, get_java_dir
from dtcw.core.download import download_file
from dtcw.core.exceptions import DtcwError
from dtcw.core.platform import HostInfo, detect_host
from dtcw.runtime.java import find_java_in_home

logger = logging.getLogger(__name__)

JAVA_VERSION = 17

ADOPTIUM_URL = (
    "https://api.adoptium.net/v3/binary/latest/{version}/ga/{os}/{arch}"
    "/jdk/hotspot/normal/eclipse?project=jdk"
)


class RuntimeExtractionError(DtcwError):
    """Raised when the JDK archive can't be unpacked."""

    pass


def get_java_url(host: HostInfo, version: int = JAVA_VERSION) -> str:
    """
    Get the Adoptium download URL for a host.

    Example:
        >>> get_java_url(HostInfo('linux', 'x64', 'Linux', 'x86_64'))
        'https://api.adoptium.net/v3/binary/latest/17/ga/linux/x64/jdk/hotspot/normal/eclipse?project=jdk'
    """
    return ADOPTIUM_URL.format(version=version, os=host.os, arch=host.arch)


def _stripped_name(member_name: str) -> Optional[PurePosixPath]:
    path = PurePosixPath(member_name)
    if path.is_absolute() or ".." in path.parts:
        raise RuntimeExtractionError(f"Refusing unsafe archive member: {member_name}")
    parts = path.parts[1:]
    if not parts:
        return None
    return PurePosixPath(*parts)


def _validate_inside(path: Path, destination: Path, member_name: str) -> None:
    """
    Ensure an extracted path stays below the destination.

    Raises:
        RuntimeExtractionError: If the path resolves outside destination
    """
    if not path.resolve().is_relative_to(destination.resolve()):
        raise RuntimeExtractionError(
            f"Refusing archive member escaping {destination}: {member_name}"
        )


def extract_stripped(archive_path: Path, destination: Path) -> None:
    """
    Extract a .tar.gz archive, dropping the first path component of every member.

    Every member and link target is checked to stay below destination
    before anything is written.

    Args:
        archive_path: Archive to extract
        destination: Directory receiving the archive's contents

    Raises:
        RuntimeExtractionError: If the archive is unreadable or contains
            members escaping the destination
    """
    destination.mkdir(parents=True, exist_ok=True)

    try:
        with tarfile.open(archive_path, "r:gz") as tar:
            members = []
            links = set()
            for member in tar.getmembers():
                stripped = _stripped_name(member.name)
                if stripped is None:
                    continue
                if links.intersection(stripped.parents):
                    raise RuntimeExtractionError(
                        f"Refusing archive member below a symlink: {member.name}"
                    )
                target = destination / stripped
                _validate_inside(target, destination, member.name)

                if member.issym():
                    _validate_inside(
                        target.parent / member.linkname, destination, member.name
                    )
                    links.add(stripped)
                elif member.islnk():
                    # hard link targets are archive paths, strip them too
                    link = _stripped_name(member.linkname)
                    if link is None:
                        raise RuntimeExtractionError(
                            f"Refusing hard link to the archive root: {member.name}"
                        )
                    _validate_inside(destination / link, destination, member.name)
                    member.linkname = str(link)

                member.name = str(stripped)
                members.append(member)

            # Extract with filter for security (Python 3.12+)
            if sys.version_info >= (3, 12):
                tar.extractall(destination, members=members, filter="data")
            else:
                tar.extractall(destination, members=members)
    except (tarfile.TarError, OSError) as e:
        raise RuntimeExtractionError(f"Failed to extract {archive_path}: {e}")


def install_runtime(root: Path, host: Optional[HostInfo] = None) -> Path:
    """
    Install the Java runtime into <root>/jdk.

    Idempotent: an existing JDK is left untouched.

    Args:
        root: dtcw install root
        host: Host tokens (default: detected). Unsupported hosts fail here,
            before anything is downloaded.

    Returns:
        Path to the installed java executable

    Raises:
        UnsupportedPlatformError: If there's no JDK for this host
        MissingPrerequisiteError: If no HTTP client is installed
        RemoteOperationError: If the download fails
        RuntimeExtractionError: If extraction fails
    """
    java_dir = get_java_dir(root)
    existing = find_java_in_home(java_dir) if java_dir.is_dir() else None
    if existing is not None:
        logger.info(f"Java is already installed at {java_dir}")
        return existing

    if host is None:
        host = detect_host()

    url = get_java_url(host)
    archive_path = root / JAVA_ARCHIVE_NAME

    logger.info(f"Installing Java {JAVA_VERSION} for {host.platform_string()}...")
    download_file(url, archive_path)

    try:
        extract_stripped(archive_path, java_dir)
    except RuntimeExtractionError:
        shutil.rmtree(java_dir, ignore_errors=True)
        raise

    archive_path.unlink()

    executable = find_java_in_home(java_dir)
    if executable is None:
        raise RuntimeExtractionError(
            f"Extraction completed but no java executable found in {java_dir}"
        )

    logger.info(f"Java successfully installed at: {java_dir}")
    return executable
