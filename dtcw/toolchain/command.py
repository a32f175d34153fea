"""
Command construction for docToolchain invocations.

Builds the InvocationPlan for the selected environment:

- local/sdk: the installed launcher, the project directory ('.'), the
  requested tasks and the common option block.
- docker: a throw-away container from doctoolchain/doctoolchain:v<version>
  with the current directory mounted at /project and the preview server
  port published.
"""

import logging
import os
import re
import shlex
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from dtcw.core.capabilities import HostCapabilities
from dtcw.core.config import Settings
from dtcw.core.directory import get_entry_point, get_gradle_home
from dtcw.core.exceptions import UnreachableStateError
from dtcw.environment.prober import get_install_home
from dtcw.environment.types import Environment, InvocationPlan, RuntimeDescriptor

logger = logging.getLogger(__name__)

DOCKER_IMAGE = "doctoolchain/doctoolchain"
DOCKER_PLATFORM = "linux/amd64"
PREVIEW_PORT = 8042
CONTAINER_PROJECT_DIR = "/project"

_WINDOWS_DRIVE = re.compile(r"^([A-Za-z]):[\\/]?(.*)$")


def get_common_options(settings: Settings) -> List[str]:
    """Options passed to every docToolchain run, in and out of containers."""
    options = [
        f"-PmainConfigFile={settings.config_file}",
        "--warning-mode=none",
        "--no-daemon",
    ]
    options.extend(settings.options)
    return options


def translate_mount_path(path: str) -> str:
    """
    Translate a host directory into a docker bind-mount source.

    Windows drive paths become /<drive>/<rest>; POSIX paths pass through.

    Example:
        >>> translate_mount_path('C:\\\\Users\\\\me\\\\docs')
        '/c/Users/me/docs'
        >>> translate_mount_path('/home/me/docs')
        '/home/me/docs'
    """
    match = _WINDOWS_DRIVE.match(path)
    if not match:
        return path
    drive, rest = match.groups()
    rest = rest.replace("\\", "/")
    return f"/{drive.lower()}/{rest}".rstrip("/")


def get_container_name(version: str, now: Optional[datetime] = None) -> str:
    """
    Get a unique container name for a run.

    Example:
        >>> get_container_name('3.4.2', datetime(2024, 1, 31, 12, 0, 5))
        'doctoolchain-3.4.2-20240131_120005'
    """
    now = now or datetime.now()
    return f"doctoolchain-{version}-{now.strftime('%Y%m%d_%H%M%S')}"


def get_user_mapping() -> Optional[str]:
    """The host uid:gid, or None on hosts without POSIX ids."""
    if not hasattr(os, "getuid"):
        return None
    return f"{os.getuid()}:{os.getgid()}"


def build_docker_command(
    settings: Settings,
    tasks: Sequence[str],
    cwd: Path,
    now: Optional[datetime] = None,
    user: Optional[str] = None,
) -> InvocationPlan:
    """
    Build the docker invocation.

    Args:
        settings: Resolved settings
        tasks: docToolchain task names and arguments
        cwd: Directory mounted into the container
        now: Timestamp for the container name (default: now)
        user: uid:gid to run as (default: the current user)

    Returns:
        InvocationPlan targeting docker
    """
    version = settings.version.value
    user = user if user is not None else get_user_mapping()
    variables = settings.exported_variables()
    # the container never has a terminal for gradle to talk to
    variables["DTC_HEADLESS"] = "true"

    argv = ["docker", "run", "--rm", "-i", "--platform", DOCKER_PLATFORM]
    if user:
        argv += ["-u", user]
    argv += ["--name", get_container_name(version, now)]
    argv += ["-e", "DTC_HEADLESS=true", "-e", "DTC_SITETHEME"]
    argv += ["-e", f"DTC_PROJECT_BRANCH={variables['DTC_PROJECT_BRANCH']}"]
    for name in variables:
        if name.startswith("DTC_TEMPLATE"):
            argv += ["-e", name]
    argv += ["-p", f"{PREVIEW_PORT}:{PREVIEW_PORT}"]
    argv += ["--entrypoint", "/bin/bash"]
    argv += ["-v", f"{translate_mount_path(str(cwd))}:{CONTAINER_PROJECT_DIR}"]
    argv.append(f"{DOCKER_IMAGE}:v{version}")

    inner = ["doctoolchain", "."] + list(tasks) + get_common_options(settings)
    argv += ["-c", f"{shlex.join(inner)} && exit"]

    return InvocationPlan(
        environment=Environment.DOCKER, argv=tuple(argv), env=variables
    )


def build_local_command(
    environment: Environment,
    settings: Settings,
    host: HostCapabilities,
    tasks: Sequence[str],
    runtime: RuntimeDescriptor,
) -> InvocationPlan:
    """
    Build the invocation of an installed launcher (local or sdk).

    Args:
        environment: Environment.LOCAL or Environment.SDK
        settings: Resolved settings
        host: Probed host capabilities
        tasks: docToolchain task names and arguments
        runtime: Validated Java runtime

    Returns:
        InvocationPlan targeting the environment

    Raises:
        UnreachableStateError: If the environment has no install location
    """
    home = get_install_home(environment, settings, host)
    if home is None:
        raise UnreachableStateError(f"no install location for {environment}")

    argv = [str(get_entry_point(home).absolute()), "."]
    argv += list(tasks)
    argv += get_common_options(settings)
    if not settings.headless:
        argv.append(f"-Dgradle.user.home={get_gradle_home(settings.root)}")

    env: Dict[str, str] = settings.exported_variables()
    if runtime.java_home is not None:
        env["JAVA_HOME"] = str(runtime.java_home)

    return InvocationPlan(environment=environment, argv=tuple(argv), env=env)


def build_command(
    environment: Environment,
    settings: Settings,
    host: HostCapabilities,
    tasks: Sequence[str],
    runtime: Optional[RuntimeDescriptor] = None,
    cwd: Optional[Path] = None,
) -> InvocationPlan:
    """
    Build the invocation for the selected environment.

    Args:
        environment: Selected environment
        settings: Resolved settings
        host: Probed host capabilities
        tasks: docToolchain task names and arguments
        runtime: Validated Java runtime (required unless docker)
        cwd: Project directory (default: current directory)

    Returns:
        InvocationPlan ready for execution

    Raises:
        UnreachableStateError: If a non-docker environment has no runtime
    """
    if environment is Environment.DOCKER:
        plan = build_docker_command(settings, tasks, cwd or Path.cwd())
    elif environment in (Environment.LOCAL, Environment.SDK):
        if runtime is None:
            raise UnreachableStateError(
                f"no Java runtime resolved for environment {environment}"
            )
        plan = build_local_command(environment, settings, host, tasks, runtime)
    else:
        raise UnreachableStateError(f"unknown environment {environment}")

    logger.debug(f"Command: {plan.command}")
    return plan
