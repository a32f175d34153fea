"""
Run command implementation.

Runs docToolchain tasks in the selected environment and returns
docToolchain's own exit code.
"""

import logging
import os
import subprocess
from pathlib import Path

from dtcw.cli.utils import resolve_environment
from dtcw.core.exceptions import DtcwError, MissingPrerequisiteError
from dtcw.environment.types import Environment, InvocationPlan
from dtcw.runtime.java import validate_runtime
from dtcw.toolchain.command import build_command

logger = logging.getLogger(__name__)


def execute(plan: InvocationPlan, cwd: Path) -> int:
    """
    Run the planned command, streaming its output.

    Args:
        plan: Command to run
        cwd: Working directory

    Returns:
        The command's exit code

    Raises:
        DtcwError: If the command cannot be started
    """
    env = dict(os.environ)
    env.update(plan.env)
    try:
        result = subprocess.run(list(plan.argv), env=env, cwd=cwd)
    except OSError as e:
        raise DtcwError(f"Failed to start {plan.argv[0]}: {e}")
    return result.returncode


def run(args) -> int:
    """
    Run docToolchain tasks.

    Args:
        args: Parsed arguments with settings, requested environment and invocation

    Returns:
        docToolchain's exit code
    """
    resolution = resolve_environment(args.settings, args.requested, install=False)
    settings = resolution.settings
    environment = resolution.environment

    if not resolution.state.is_installed(environment):
        raise MissingPrerequisiteError(
            f"docToolchain {settings.version} is not installed "
            f"in the {environment} environment",
            remediation=f"Run 'dtcw {environment} install toolchain' first.",
        )

    runtime = None
    if environment is not Environment.DOCKER:
        runtime = validate_runtime(settings.root)

    plan = build_command(
        environment,
        settings,
        resolution.host,
        args.invocation.tasks,
        runtime=runtime,
        cwd=args.project_root,
    )
    logger.info(f"Running: {plan.command}")
    return execute(plan, args.project_root)
