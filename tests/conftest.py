"""
Pytest configuration and shared fixtures for dtcw tests.
"""

import logging

import pytest

# Import test fixtures to make them available to all tests
# These imports register the fixtures with pytest's fixture discovery system
# ruff: noqa: F401
from tests.fixtures.directories import (
    dtc_root,
    installed_toolchain,
    sdkman_dir,
    local_jdk,
)
from tests.fixtures.settings import (
    make_settings,
    bare_host,
    full_host,
)


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Create isolated home directory and clear DTC_* variables."""
    fake_home = tmp_path / "home"
    fake_home.mkdir()

    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.setenv("USERPROFILE", str(fake_home))
    for name in (
        "DTC_VERSION",
        "DTC_ROOT",
        "DTC_CONFIG_FILE",
        "DTC_SITETHEME",
        "DTC_TEMPLATE1",
        "DTC_HEADLESS",
        "DTC_PROJECT_BRANCH",
        "DTC_OPTS",
        "JAVA_HOME",
        "SDKMAN_DIR",
    ):
        monkeypatch.delenv(name, raising=False)

    return fake_home


@pytest.fixture(autouse=True)
def reset_logging():
    """Keep CLI logging configuration from leaking between tests."""
    yield
    logging.getLogger().handlers.clear()
