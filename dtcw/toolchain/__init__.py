"""
docToolchain management module for dtcw.

This module provides functionality for:
- Installing docToolchain (git checkouts, release archives, SDKMAN)
- Building the command that runs docToolchain in an environment
"""

from dtcw.toolchain.installer import (
    get_release_url,
    install_floating,
    install_release,
    install_toolchain,
)
from dtcw.toolchain.command import (
    build_command,
    build_docker_command,
    build_local_command,
)

__all__ = [
    "get_release_url",
    "install_floating",
    "install_release",
    "install_toolchain",
    "build_command",
    "build_docker_command",
    "build_local_command",
]
