"""
Centralized exception hierarchy for dtcw.

Every exception carries the exit code the CLI returns when it reaches the
top level, so error classification and process status stay in one place.
"""

from typing import Optional

# Exit codes owned by dtcw. Everything else is passed through from the
# invoked tool.
EXIT_FAILURE = 1
EXIT_ARGUMENT = 2
EXIT_UNREACHABLE = 3


# ============================================================================
# Base Exceptions
# ============================================================================


class DtcwError(Exception):
    """Base exception for all dtcw errors."""

    exit_code = EXIT_FAILURE

    def __init__(self, message: str, remediation: Optional[str] = None):
        self.remediation = remediation
        super().__init__(message)


# ============================================================================
# Usage Exceptions
# ============================================================================


class ArgumentError(DtcwError):
    """Invalid or unavailable environment, component or version combination."""

    exit_code = EXIT_ARGUMENT


# ============================================================================
# Prerequisite Exceptions
# ============================================================================


class MissingPrerequisiteError(DtcwError):
    """A host tool or installation needed for the requested operation is absent."""

    pass


class UnsupportedRuntimeError(DtcwError):
    """Raised when the located Java runtime has an unsupported major version."""

    def __init__(self, version: str, executable: str):
        self.version = version
        self.executable = executable
        super().__init__(
            f"unsupported Java version {version} [{executable}]",
            remediation="docToolchain supports Java versions 11 to 17. "
            "Install one with 'dtcw local install runtime' or point JAVA_HOME "
            "to a supported JDK.",
        )


class UnsupportedPlatformError(DtcwError):
    """Raised when the host OS/architecture has no runtime distribution."""

    pass


# ============================================================================
# Remote Operation Exceptions
# ============================================================================


class RemoteOperationError(DtcwError):
    """A download, clone or pull failed; carries the tool's own exit code."""

    def __init__(self, message: str, exit_code: int):
        super().__init__(message)
        self.exit_code = exit_code


# ============================================================================
# Defects
# ============================================================================


class UnreachableStateError(DtcwError):
    """Internal invariant violated. This is a bug in dtcw, not a user error."""

    exit_code = EXIT_UNREACHABLE

    def __init__(self, message: str):
        super().__init__(
            f"{message} (this is a bug in dtcw, please report it)",
        )
