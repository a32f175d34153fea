"""Data types shared by the environment resolution pipeline."""

import shlex
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, Mapping, Optional, Tuple


class Environment(Enum):
    """The ways docToolchain can be reached on a host."""

    LOCAL = "local"
    SDK = "sdk"
    DOCKER = "docker"

    @classmethod
    def from_token(cls, token: str) -> Optional["Environment"]:
        """Return the environment named by token, or None."""
        for environment in cls:
            if environment.value == token:
                return environment
        return None

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class EnvironmentCapabilities:
    """
    Environments usable on this host, in default preference order.

    Local is always first; the order is used when nothing is requested
    explicitly.
    """

    environments: Tuple[Environment, ...] = (Environment.LOCAL,)

    def __post_init__(self):
        if Environment.LOCAL not in self.environments:
            raise ValueError("local environment must always be available")

    def __contains__(self, environment: object) -> bool:
        return environment in self.environments

    def __iter__(self) -> Iterator[Environment]:
        return iter(self.environments)

    def __str__(self) -> str:
        return " ".join(str(e) for e in self.environments)


@dataclass(frozen=True)
class InstallationState:
    """
    Whether the requested docToolchain version is usable per environment.

    Attributes:
        usable: Mapping of probed environments to their install status
        order: Registry order used by installed()
    """

    usable: Mapping[Environment, bool]
    order: Tuple[Environment, ...]

    def is_installed(self, environment: Environment) -> bool:
        return bool(self.usable.get(environment, False))

    def installed(self) -> Tuple[Environment, ...]:
        """Environments with the version usable, in registry order."""
        return tuple(e for e in self.order if self.is_installed(e))

    @property
    def none_usable(self) -> bool:
        """True when no environment can run the version without an install."""
        return not self.installed()


@dataclass(frozen=True)
class RuntimeDescriptor:
    """
    A Java runtime accepted for running docToolchain.

    Attributes:
        executable: Path to the java executable
        major_version: Parsed major version (e.g. 17)
        java_home: JDK directory when the runtime came from one, else None
        source: Where it was found ('dtcw', 'JAVA_HOME', 'PATH')
    """

    executable: Path
    major_version: int
    java_home: Optional[Path] = None
    source: str = "PATH"

    def __str__(self) -> str:
        return f"Java {self.major_version} ({self.source}) at {self.executable}"


@dataclass(frozen=True)
class InvocationPlan:
    """
    The fully resolved command for one run.

    Attributes:
        environment: Environment the command targets
        argv: Program and arguments
        env: Variables set on top of the current process environment
    """

    environment: Environment
    argv: Tuple[str, ...]
    env: Dict[str, str] = field(default_factory=dict)

    @property
    def command(self) -> str:
        """The command as a shell-quoted string."""
        return shlex.join(self.argv)

    def __str__(self) -> str:
        return self.command
