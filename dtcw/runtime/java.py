"""
Java runtime discovery and validation.

docToolchain runs on the JVM, so every environment except docker needs a
Java runtime on the host. The runtime is searched in this order:

1. <root>/jdk, installed by 'dtcw install runtime'. It takes priority over
   JAVA_HOME, and a warning is logged when it shadows one.
2. $JAVA_HOME/bin/java
3. java on PATH

Known gap: a PATH runtime whose version differs from the one in <root>/jdk
is not reported; the local JDK simply wins.
"""

import logging
import os
import re
import shutil
import subprocess
from pathlib import Path
from typing import Mapping, Optional, Tuple

from packaging.specifiers import SpecifierSet
from packaging.version import Version

from dtcw.core.directory import get_java_dir
from dtcw.core.exceptions import (
    DtcwError,
    MissingPrerequisiteError,
    UnsupportedRuntimeError,
)
from dtcw.environment.types import RuntimeDescriptor

logger = logging.getLogger(__name__)

SUPPORTED_JAVA_VERSIONS = SpecifierSet(">=11,<=17")

_VERSION_PATTERN = re.compile(r'version\s+"([^"]+)"')


def find_java_in_home(java_home: Path) -> Optional[Path]:
    """
    Find the java executable in a JDK directory.

    macOS archives keep the JDK below Contents/Home.

    Returns:
        Path to java, or None if the directory holds none
    """
    name = "java.exe" if os.name == "nt" else "java"
    candidates = [
        java_home / "bin" / name,
        java_home / "Contents" / "Home" / "bin" / name,
    ]
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None


def locate_java(
    root: Path, environ: Optional[Mapping[str, str]] = None
) -> Tuple[Path, Optional[Path], str]:
    """
    Locate the Java runtime to use.

    Args:
        root: dtcw install root
        environ: Environment mapping (default: os.environ)

    Returns:
        (java executable, JDK directory or None, source label)

    Raises:
        MissingPrerequisiteError: If no runtime is found
    """
    environ = os.environ if environ is None else environ
    env_java_home = environ.get("JAVA_HOME")

    local_jdk = get_java_dir(root)
    if local_jdk.is_dir():
        executable = find_java_in_home(local_jdk)
        if executable is not None:
            if env_java_home:
                logger.warning(
                    f"JAVA_HOME is set to {env_java_home} but is overridden by "
                    f"the JDK installed by dtcw at {local_jdk}"
                )
            return executable, executable.parent.parent, "dtcw"

    if env_java_home:
        executable = find_java_in_home(Path(env_java_home))
        if executable is not None:
            return executable, Path(env_java_home), "JAVA_HOME"
        logger.debug(f"JAVA_HOME={env_java_home} holds no java executable")

    on_path = shutil.which("java")
    if on_path:
        return Path(on_path), None, "PATH"

    raise MissingPrerequisiteError(
        "unable to locate a Java Runtime",
        remediation="docToolchain needs Java 11 to 17. Install one with "
        "'dtcw local install runtime', or set JAVA_HOME to an installed JDK.",
    )


def parse_major_version(version_output: str) -> Optional[int]:
    """
    Extract the major version from 'java -version' output.

    Legacy '1.x' numbering is normalised first, so '1.8.0_292' yields 8.

    Example:
        >>> parse_major_version('openjdk version "17.0.2" 2022-01-18')
        17
        >>> parse_major_version('java version "1.8.0_292"')
        8
    """
    match = _VERSION_PATTERN.search(version_output)
    if not match:
        return None

    version = match.group(1)
    if version.startswith("1."):
        version = version[2:]
    major = re.split(r"[.+_-]", version, maxsplit=1)[0]
    if not major.isdigit():
        return None
    return int(major)


def is_supported_version(major: int) -> bool:
    """True if docToolchain runs on this Java major version."""
    return Version(str(major)) in SUPPORTED_JAVA_VERSIONS


def get_java_version_output(executable: Path) -> str:
    """
    Run 'java -version' and return what it printed.

    Raises:
        DtcwError: If the executable cannot be started
    """
    try:
        result = subprocess.run(
            [str(executable), "-version"],
            capture_output=True,
            text=True,
        )
    except OSError as e:
        raise DtcwError(f"Failed to run {executable}: {e}")

    # java prints its version to stderr
    return result.stderr + result.stdout


def validate_runtime(
    root: Path, environ: Optional[Mapping[str, str]] = None
) -> RuntimeDescriptor:
    """
    Locate the Java runtime and check its version.

    Args:
        root: dtcw install root
        environ: Environment mapping (default: os.environ)

    Returns:
        RuntimeDescriptor for an accepted runtime

    Raises:
        MissingPrerequisiteError: If no runtime is found
        UnsupportedRuntimeError: If the major version is outside 11..17 or
            can't be parsed
    """
    executable, java_home, source = locate_java(root, environ)
    output = get_java_version_output(executable)
    major = parse_major_version(output)

    if major is None:
        detected = output.strip().splitlines()[0] if output.strip() else "unknown"
        raise UnsupportedRuntimeError(detected, str(executable))
    if not is_supported_version(major):
        raise UnsupportedRuntimeError(str(major), str(executable))

    runtime = RuntimeDescriptor(
        executable=executable,
        major_version=major,
        java_home=java_home,
        source=source,
    )
    logger.info(f"Using {runtime}")
    return runtime
