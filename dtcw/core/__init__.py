"""
Core functionality for dtcw.

This package contains the foundational modules that other components depend on.
"""

from .config import (
    Settings,
    ToolchainVersion,
    VersionKind,
    load_settings,
)

from .capabilities import (
    HostCapabilities,
    probe_capabilities,
)

from .exceptions import (
    DtcwError,
    ArgumentError,
    MissingPrerequisiteError,
    UnsupportedRuntimeError,
    UnsupportedPlatformError,
    RemoteOperationError,
    UnreachableStateError,
)

__all__ = [
    # Config
    "Settings",
    "ToolchainVersion",
    "VersionKind",
    "load_settings",
    # Capabilities
    "HostCapabilities",
    "probe_capabilities",
    # Exceptions
    "DtcwError",
    "ArgumentError",
    "MissingPrerequisiteError",
    "UnsupportedRuntimeError",
    "UnsupportedPlatformError",
    "RemoteOperationError",
    "UnreachableStateError",
]
