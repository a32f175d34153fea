"""
Unit tests for dtcw.core.directory module.
"""

from pathlib import Path

from dtcw.core.directory import (
    get_default_root,
    get_entry_point,
    get_java_dir,
    get_sdkman_candidate_home,
    get_toolchain_home,
    is_launchable,
)


class TestLayout:
    """Tests for install root layout helpers."""

    def test_default_root(self, isolated_home):
        assert get_default_root() == isolated_home / ".doctoolchain"

    def test_toolchain_home(self):
        root = Path("/home/user/.doctoolchain")
        assert get_toolchain_home(root, "3.4.2") == root / "docToolchain-3.4.2"
        assert get_toolchain_home(root, "latest") == root / "docToolchain-latest"

    def test_entry_point(self):
        assert get_entry_point(Path("/x")) == Path("/x/bin/doctoolchain")

    def test_java_dir(self):
        assert get_java_dir(Path("/r")) == Path("/r/jdk")

    def test_sdkman_candidate_home(self):
        home = get_sdkman_candidate_home(Path("/s"), "3.4.2")
        assert home == Path("/s/candidates/doctoolchain/3.4.2")


class TestIsLaunchable:
    """Tests for is_launchable function."""

    def test_executable_file(self, installed_toolchain):
        assert is_launchable(installed_toolchain / "bin" / "doctoolchain")

    def test_missing_file(self, tmp_path):
        assert not is_launchable(tmp_path / "doctoolchain")

    def test_directory(self, tmp_path):
        assert not is_launchable(tmp_path)

    def test_not_executable(self, tmp_path):
        script = tmp_path / "doctoolchain"
        script.write_text("echo")
        script.chmod(0o644)
        assert not is_launchable(script)
