"""
Install root layout for dtcw.

Directory Structure:
    Install root (~/.doctoolchain/ unless DTC_ROOT is set):
        - docToolchain-<version>/ : One docToolchain installation per version
          - bin/doctoolchain      : Entry point launched for every task
        - jdk/                    : Java runtime installed by 'dtcw install runtime'
        - .gradle/                : Gradle user home for interactive runs
        - source.zip, jdk.tar.gz  : Scratch archives, present only during installs

    SDKMAN (~/.sdkman/ unless SDKMAN_DIR is set):
        - candidates/doctoolchain/<version>/bin/doctoolchain
"""

import os
from pathlib import Path

TOOLCHAIN_DIR_PREFIX = "docToolchain-"
JAVA_DIR_NAME = "jdk"
GRADLE_DIR_NAME = ".gradle"
TOOLCHAIN_ARCHIVE_NAME = "source.zip"
JAVA_ARCHIVE_NAME = "jdk.tar.gz"


def get_default_root() -> Path:
    """
    Get the default install root.

    Returns:
        Path: ~/.doctoolchain
    """
    return Path.home() / ".doctoolchain"


def get_toolchain_home(root: Path, version: str) -> Path:
    """
    Get the installation directory of a docToolchain version.

    Example:
        >>> get_toolchain_home(Path('/home/user/.doctoolchain'), '3.4.2')
        PosixPath('/home/user/.doctoolchain/docToolchain-3.4.2')
    """
    return root / f"{TOOLCHAIN_DIR_PREFIX}{version}"


def get_entry_point_name() -> str:
    """Name of the docToolchain launcher script on this host."""
    if os.name == "nt":
        return "doctoolchain.bat"
    return "doctoolchain"


def get_entry_point(home: Path) -> Path:
    """Path of the docToolchain launcher inside an installation directory."""
    return home / "bin" / get_entry_point_name()


def get_java_dir(root: Path) -> Path:
    """Directory holding the Java runtime installed by dtcw."""
    return root / JAVA_DIR_NAME


def get_gradle_home(root: Path) -> Path:
    """Gradle user home shared by interactive runs."""
    return root / GRADLE_DIR_NAME


def get_sdkman_candidate_home(sdkman_dir: Path, version: str) -> Path:
    """
    Get SDKMAN's installation directory for a docToolchain version.

    Example:
        >>> get_sdkman_candidate_home(Path('/home/user/.sdkman'), '3.4.2')
        PosixPath('/home/user/.sdkman/candidates/doctoolchain/3.4.2')
    """
    return sdkman_dir / "candidates" / "doctoolchain" / version


def is_launchable(path: Path) -> bool:
    """True if path is an existing file the current user may execute."""
    return path.is_file() and os.access(path, os.X_OK)
