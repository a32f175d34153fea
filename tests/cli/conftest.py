"""
Fixtures for CLI tests.
"""

import pytest


@pytest.fixture
def project_dir(tmp_path, isolated_home, dtc_root, monkeypatch):
    """
    Create a documentation project and point dtcw at the mock install root.

    Headless mode and the branch are fixed so no terminal or git is consulted.
    """
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.setenv("DTC_ROOT", str(dtc_root))
    monkeypatch.setenv("DTC_HEADLESS", "true")
    monkeypatch.setenv("DTC_PROJECT_BRANCH", "main")
    return project
