"""
Tests for the installation prober.
"""

from dtcw.core.capabilities import HostCapabilities
from dtcw.environment.prober import get_install_home, is_installed, probe_installations
from dtcw.environment.registry import get_available_environments
from dtcw.environment.types import Environment
from tests.fixtures.directories import make_launcher


class TestIsInstalled:
    """Tests for is_installed function."""

    def test_local_missing(self, make_settings, bare_host):
        assert not is_installed(Environment.LOCAL, make_settings(), bare_host)

    def test_local_installed(self, make_settings, bare_host, installed_toolchain):
        assert is_installed(Environment.LOCAL, make_settings(), bare_host)

    def test_local_other_version(self, make_settings, bare_host, installed_toolchain):
        """Test that an install of another version doesn't count."""
        assert not is_installed(Environment.LOCAL, make_settings("3.0.0"), bare_host)

    def test_local_directory_without_launcher(self, make_settings, bare_host, dtc_root):
        """Test that a half-extracted directory doesn't count."""
        (dtc_root / "docToolchain-3.4.2" / "bin").mkdir(parents=True)
        assert not is_installed(Environment.LOCAL, make_settings(), bare_host)

    def test_sdk_installed(self, make_settings, sdkman_dir):
        host = HostCapabilities(sdkman_dir=sdkman_dir)
        make_launcher(sdkman_dir / "candidates" / "doctoolchain" / "3.4.2" / "bin" / "doctoolchain")
        assert is_installed(Environment.SDK, make_settings(), host)

    def test_sdk_other_version(self, make_settings, sdkman_dir):
        host = HostCapabilities(sdkman_dir=sdkman_dir)
        make_launcher(sdkman_dir / "candidates" / "doctoolchain" / "2.2.1" / "bin" / "doctoolchain")
        assert not is_installed(Environment.SDK, make_settings(), host)

    def test_sdk_without_sdkman(self, make_settings, bare_host):
        assert not is_installed(Environment.SDK, make_settings(), bare_host)
        assert get_install_home(Environment.SDK, make_settings(), bare_host) is None

    def test_docker_always_installed(self, make_settings, bare_host):
        assert is_installed(Environment.DOCKER, make_settings(), bare_host)


class TestProbeInstallations:
    """Tests for probe_installations function."""

    def test_nothing_installed(self, make_settings, bare_host):
        """Test the distinguished 'none usable' state."""
        capabilities = get_available_environments(bare_host)
        state = probe_installations(make_settings(), bare_host, capabilities)

        assert state.none_usable
        assert state.installed() == ()

    def test_docker_counts_as_installed(self, make_settings):
        host = HostCapabilities(docker="/usr/bin/docker")
        capabilities = get_available_environments(host)
        state = probe_installations(make_settings(), host, capabilities)

        assert not state.none_usable
        assert state.installed() == (Environment.DOCKER,)

    def test_registry_order(self, make_settings, full_host, installed_toolchain):
        capabilities = get_available_environments(full_host)
        make_launcher(
            full_host.sdkman_dir / "candidates" / "doctoolchain" / "3.4.2" / "bin" / "doctoolchain"
        )
        state = probe_installations(make_settings(), full_host, capabilities)

        assert state.installed() == (
            Environment.LOCAL,
            Environment.SDK,
            Environment.DOCKER,
        )

    def test_unavailable_environments_not_probed(self, make_settings, bare_host):
        capabilities = get_available_environments(bare_host)
        state = probe_installations(make_settings(), bare_host, capabilities)
        assert not state.is_installed(Environment.DOCKER)
