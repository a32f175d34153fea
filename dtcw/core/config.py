"""
Configuration resolution for dtcw.

Settings are resolved once per run. Each value comes from, in order of
precedence:

1. the process environment (``DTC_*`` variables),
2. an optional ``dtcw.yaml`` in the project directory,
3. built-in defaults.

Example ``dtcw.yaml``::

    version: 3.4.2
    config_file: docs/docToolchainConfig.groovy
    site_theme: https://example.com/theme.zip
    templates:
      - https://example.com/arc42.zip
    options: -PpdfThemeDir=./theme
"""

import logging
import os
import shlex
import shutil
import subprocess
import sys
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from dtcw.core.directory import get_default_root
from dtcw.core.exceptions import ArgumentError, DtcwError

logger = logging.getLogger(__name__)

DEFAULT_VERSION = "3.4.2"
DEFAULT_CONFIG_FILE = "docToolchainConfig.groovy"
PROJECT_CONFIG_NAME = "dtcw.yaml"
UNKNOWN_BRANCH = "-"

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")


class VersionKind(Enum):
    """How a requested docToolchain version is obtained."""

    PINNED = "pinned"
    LATEST = "latest"
    LATEST_DEV = "latestdev"


@dataclass(frozen=True)
class ToolchainVersion:
    """
    A requested docToolchain version with its kind decided once at parse time.

    Attributes:
        value: Version string as given (e.g. '3.4.2', 'latest')
        kind: PINNED for release tags, LATEST/LATEST_DEV for floating checkouts
    """

    value: str
    kind: VersionKind

    @classmethod
    def parse(cls, value: str) -> "ToolchainVersion":
        """
        Classify a version string.

        Raises:
            ArgumentError: If the version string is empty
        """
        value = (value or "").strip()
        if not value:
            raise ArgumentError("DTC_VERSION must not be empty")

        for kind in (VersionKind.LATEST, VersionKind.LATEST_DEV):
            if value == kind.value:
                return cls(value=value, kind=kind)
        return cls(value=value, kind=VersionKind.PINNED)

    @property
    def is_floating(self) -> bool:
        """True for versions tracking the unreleased development state."""
        return self.kind is not VersionKind.PINNED

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Settings:
    """
    Resolved configuration for one dtcw run.

    Attributes:
        version: Requested docToolchain version
        root: Install root holding every docToolchain version and the JDK
        config_file: docToolchain configuration file passed to every task
        site_theme: URL of a site theme override (empty when unset)
        templates: URLs of additional templates, in DTC_TEMPLATE<n> order
        headless: Whether the session has no interactive terminal attached
        project_branch: Current source-control branch; None until detected,
            exported as '-' when unknown
        options: Extra option words appended to every docToolchain call
    """

    version: ToolchainVersion
    root: Path
    config_file: str = DEFAULT_CONFIG_FILE
    site_theme: str = ""
    templates: Tuple[str, ...] = ()
    headless: bool = False
    project_branch: Optional[str] = None
    options: Tuple[str, ...] = field(default_factory=tuple)

    def exported_variables(self) -> Dict[str, str]:
        """
        Variables handed to docToolchain, inside or outside a container.

        Returns:
            Mapping of DTC_* variable names to values
        """
        variables = {
            "DTC_HEADLESS": "true" if self.headless else "false",
            "DTC_PROJECT_BRANCH": self.project_branch or UNKNOWN_BRANCH,
            "DTC_SITETHEME": self.site_theme,
        }
        for index, url in enumerate(self.templates, start=1):
            variables[f"DTC_TEMPLATE{index}"] = url
        return variables


def load_yaml_config(config_file: Path) -> Dict[str, Any]:
    """
    Load the optional project configuration file.

    Args:
        config_file: Path to the YAML file

    Returns:
        Configuration dictionary (empty if the file doesn't exist)

    Raises:
        DtcwError: If the file is not valid YAML or not a mapping
    """
    if not config_file.exists():
        logger.debug(f"Config file not found (optional): {config_file}")
        return {}

    logger.debug(f"Loading configuration from {config_file}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise DtcwError(f"Invalid YAML in {config_file}: {e}")

    config = config or {}
    if not isinstance(config, dict):
        raise DtcwError(f"{config_file} must contain a mapping at the top level")
    return config


def parse_bool(name: str, value: Any) -> bool:
    """
    Parse a boolean setting.

    Raises:
        ArgumentError: If the value is not a recognised boolean
    """
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ArgumentError(f"{name} must be true or false, got '{value}'")


def detect_headless() -> bool:
    """True when stdin is not attached to a terminal."""
    try:
        return not sys.stdin.isatty()
    except (AttributeError, ValueError):
        # stdin closed or replaced
        return True


def detect_project_branch(project_dir: Path) -> str:
    """
    Detect the current git branch of the project.

    Returns:
        Branch name, or '-' if git is missing or this isn't a checkout
    """
    git = shutil.which("git")
    if not git:
        return UNKNOWN_BRANCH

    try:
        result = subprocess.run(
            [git, "branch", "--show-current"],
            capture_output=True,
            text=True,
            cwd=project_dir,
        )
    except OSError as e:
        logger.debug(f"Could not run git: {e}")
        return UNKNOWN_BRANCH

    branch = result.stdout.strip()
    if result.returncode != 0 or not branch:
        return UNKNOWN_BRANCH
    return branch


def _read_templates(environ: Mapping[str, str], file_config: Dict[str, Any]):
    templates = []
    index = 1
    while environ.get(f"DTC_TEMPLATE{index}"):
        templates.append(environ[f"DTC_TEMPLATE{index}"])
        index += 1
    if templates:
        return tuple(templates)
    return tuple(str(url) for url in file_config.get("templates") or [])


def _read_options(raw: Any) -> Tuple[str, ...]:
    if not raw:
        return ()
    if isinstance(raw, (list, tuple)):
        return tuple(str(option) for option in raw)
    return tuple(shlex.split(str(raw)))


def load_settings(
    project_dir: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """
    Resolve settings for the current run.

    No process is started here: an unconfigured branch stays None until
    with_detected_branch() is called.

    Args:
        project_dir: Directory holding the documentation project (default: cwd)
        environ: Environment mapping (default: os.environ)

    Returns:
        Resolved Settings

    Raises:
        ArgumentError: If a value cannot be parsed
        DtcwError: If dtcw.yaml is malformed

    Example:
        >>> settings = load_settings(Path("."), {"DTC_VERSION": "latest"})
        >>> settings.version.is_floating
        True
    """
    project_dir = Path(project_dir) if project_dir else Path.cwd()
    environ = os.environ if environ is None else environ
    file_config = load_yaml_config(project_dir / PROJECT_CONFIG_NAME)

    def lookup(env_name: str, key: str) -> Optional[Any]:
        if environ.get(env_name):
            return environ[env_name]
        return file_config.get(key)

    version = ToolchainVersion.parse(
        str(lookup("DTC_VERSION", "version") or DEFAULT_VERSION)
    )

    root_value = lookup("DTC_ROOT", "root")
    if root_value:
        root = Path(str(root_value)).expanduser()
    else:
        root = get_default_root()

    headless_value = lookup("DTC_HEADLESS", "headless")
    if headless_value is None:
        headless = detect_headless()
    else:
        headless = parse_bool("DTC_HEADLESS", headless_value)

    branch = lookup("DTC_PROJECT_BRANCH", "project_branch")

    settings = Settings(
        version=version,
        root=root,
        config_file=str(lookup("DTC_CONFIG_FILE", "config_file") or DEFAULT_CONFIG_FILE),
        site_theme=str(lookup("DTC_SITETHEME", "site_theme") or ""),
        templates=_read_templates(environ, file_config),
        headless=headless,
        project_branch=str(branch) if branch else None,
        options=_read_options(lookup("DTC_OPTS", "options")),
    )
    logger.debug(f"Resolved settings: {settings}")
    return settings


def with_detected_branch(settings: Settings, project_dir: Path) -> Settings:
    """
    Fill in the project branch from git when it wasn't configured.

    Args:
        settings: Settings from load_settings()
        project_dir: Directory holding the documentation project

    Returns:
        Settings with project_branch set
    """
    if settings.project_branch:
        return settings
    return replace(settings, project_branch=detect_project_branch(project_dir))
