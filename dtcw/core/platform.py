"""
Host identification for runtime downloads.

Maps the kernel and machine names reported by the host (the values ``uname -s``
and ``uname -m`` print) to the tokens the Adoptium API expects in its URLs.

Usage:
    from dtcw.core.platform import detect_host

    host = detect_host()
    print(f"Downloading JDK for {host.platform_string()}")
"""

import platform
from dataclasses import dataclass

from dtcw.core.exceptions import UnsupportedPlatformError


@dataclass(frozen=True)
class HostInfo:
    """
    Adoptium tokens for the current host.

    Attributes:
        os: Adoptium operating system ('linux', 'mac', 'windows')
        arch: Adoptium architecture ('x64', 'aarch64')
        kernel: Raw kernel name as reported by the host
        machine: Raw machine name as reported by the host
    """

    os: str
    arch: str
    kernel: str
    machine: str

    def platform_string(self) -> str:
        """
        Get canonical platform string (e.g., 'linux-x64', 'mac-aarch64').

        Example:
            >>> HostInfo('linux', 'x64', 'Linux', 'x86_64').platform_string()
            'linux-x64'
        """
        return f"{self.os}-{self.arch}"


def map_kernel(kernel: str) -> str:
    """
    Map a kernel name to its Adoptium OS token.

    Raises:
        UnsupportedPlatformError: For Git Bash (MINGW/MSYS) and unknown kernels
    """
    upper = kernel.upper()
    if upper == "LINUX":
        return "linux"
    if upper == "DARWIN":
        return "mac"
    if upper.startswith("CYGWIN"):
        return "windows"
    if upper.startswith(("MINGW", "MSYS")):
        raise UnsupportedPlatformError(
            f"{kernel} is not supported for the Java installation",
            remediation="Run dtcw from WSL or Cygwin, or install a JDK "
            "(11 to 17) yourself and set JAVA_HOME.",
        )
    raise UnsupportedPlatformError(
        f"Unsupported operating system: {kernel}",
        remediation="Install a JDK (11 to 17) yourself and set JAVA_HOME.",
    )


def map_machine(machine: str) -> str:
    """
    Map a machine name to its Adoptium architecture token.

    Raises:
        UnsupportedPlatformError: If no JDK is published for the architecture
    """
    lower = machine.lower()
    if lower in ("x86_64", "amd64", "x64"):
        return "x64"
    if lower in ("aarch64", "arm64"):
        return "aarch64"
    raise UnsupportedPlatformError(
        f"Unsupported architecture: {machine}",
        remediation="Install a JDK (11 to 17) yourself and set JAVA_HOME.",
    )


def detect_host() -> HostInfo:
    """
    Detect the current host.

    Returns:
        HostInfo with Adoptium tokens

    Raises:
        UnsupportedPlatformError: If the host has no matching JDK distribution
    """
    kernel = platform.system()
    machine = platform.machine()
    return HostInfo(
        os=map_kernel(kernel),
        arch=map_machine(machine),
        kernel=kernel,
        machine=machine,
    )


__all__ = [
    "HostInfo",
    "detect_host",
    "map_kernel",
    "map_machine",
]
