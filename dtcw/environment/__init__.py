"""
Environment resolution for dtcw.

This package provides:
- The environment and plan data types
- The environment registry built from host capabilities
- The installation prober
- The environment selector
"""

from dtcw.environment.types import (
    Environment,
    EnvironmentCapabilities,
    InstallationState,
    InvocationPlan,
    RuntimeDescriptor,
)
from dtcw.environment.registry import get_available_environments
from dtcw.environment.prober import probe_installations
from dtcw.environment.selector import (
    resolve_requested_environment,
    select_environment,
)

__all__ = [
    "Environment",
    "EnvironmentCapabilities",
    "InstallationState",
    "InvocationPlan",
    "RuntimeDescriptor",
    "get_available_environments",
    "probe_installations",
    "resolve_requested_environment",
    "select_environment",
]
