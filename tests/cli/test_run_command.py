"""
Tests for running docToolchain tasks.
"""

from unittest.mock import MagicMock, patch

import pytest

from dtcw.cli.commands.run import execute
from dtcw.cli.parser import CLI
from dtcw.core.capabilities import HostCapabilities
from dtcw.core.exceptions import DtcwError, UnsupportedRuntimeError
from dtcw.environment.types import Environment, InvocationPlan, RuntimeDescriptor


def run_cli(project_dir, *arguments):
    return CLI().run(["--project-root", str(project_dir), *arguments])


@pytest.fixture
def runtime(local_jdk):
    return RuntimeDescriptor(
        executable=local_jdk / "bin" / "java",
        major_version=17,
        java_home=local_jdk,
        source="dtcw",
    )


class TestExecute:
    """Tests for execute function."""

    def test_returns_exit_code(self, tmp_path, monkeypatch):
        monkeypatch.setenv("KEEP_ME", "1")
        plan = InvocationPlan(
            environment=Environment.LOCAL,
            argv=("doctoolchain", ".", "tasks"),
            env={"DTC_HEADLESS": "true"},
        )

        with patch("subprocess.run", return_value=MagicMock(returncode=4)) as mock_run:
            assert execute(plan, tmp_path) == 4

        env = mock_run.call_args[1]["env"]
        assert env["DTC_HEADLESS"] == "true"
        assert env["KEEP_ME"] == "1"
        assert mock_run.call_args[1]["cwd"] == tmp_path

    def test_cannot_start(self, tmp_path):
        plan = InvocationPlan(environment=Environment.LOCAL, argv=("missing",))
        with patch("subprocess.run", side_effect=FileNotFoundError("missing")):
            with pytest.raises(DtcwError):
                execute(plan, tmp_path)


class TestRunTasks:
    """Tests for 'dtcw [env] TASK...'."""

    def test_local_run(self, project_dir, installed_toolchain, runtime):
        with patch("dtcw.cli.utils.probe_capabilities", return_value=HostCapabilities()):
            with patch("dtcw.cli.commands.run.validate_runtime", return_value=runtime):
                with patch(
                    "subprocess.run", return_value=MagicMock(returncode=0)
                ) as mock_run:
                    exit_code = run_cli(project_dir, "generateHTML", "generatePDF")

        assert exit_code == 0
        argv = mock_run.call_args[0][0]
        assert argv[:4] == [
            str(installed_toolchain / "bin" / "doctoolchain"),
            ".",
            "generateHTML",
            "generatePDF",
        ]
        assert mock_run.call_args[1]["cwd"] == project_dir.resolve()
        assert mock_run.call_args[1]["env"]["JAVA_HOME"] == str(runtime.java_home)

    def test_exit_code_passthrough(self, project_dir, installed_toolchain, runtime):
        with patch("dtcw.cli.utils.probe_capabilities", return_value=HostCapabilities()):
            with patch("dtcw.cli.commands.run.validate_runtime", return_value=runtime):
                with patch("subprocess.run", return_value=MagicMock(returncode=42)):
                    exit_code = run_cli(project_dir, "generateHTML")

        assert exit_code == 42

    def test_not_installed(self, project_dir, capsys):
        with patch("dtcw.cli.utils.probe_capabilities", return_value=HostCapabilities()):
            with patch("subprocess.run") as mock_run:
                exit_code = run_cli(project_dir, "generateHTML")

        assert exit_code == 1
        mock_run.assert_not_called()
        assert "dtcw local install toolchain" in capsys.readouterr().err

    def test_docker_selected_when_only_docker_usable(self, project_dir):
        host = HostCapabilities(docker="/usr/bin/docker")
        with patch("dtcw.cli.utils.probe_capabilities", return_value=host):
            with patch("dtcw.cli.commands.run.validate_runtime") as mock_validate:
                with patch(
                    "subprocess.run", return_value=MagicMock(returncode=0)
                ) as mock_run:
                    exit_code = run_cli(project_dir, "generateSite")

        assert exit_code == 0
        mock_validate.assert_not_called()
        argv = mock_run.call_args[0][0]
        assert argv[0] == "docker"
        assert f"{project_dir.resolve()}:/project" in argv

    def test_unsupported_java(self, project_dir, installed_toolchain, capsys):
        with patch("dtcw.cli.utils.probe_capabilities", return_value=HostCapabilities()):
            with patch(
                "dtcw.cli.commands.run.validate_runtime",
                side_effect=UnsupportedRuntimeError("8", "/usr/bin/java"),
            ):
                with patch("subprocess.run") as mock_run:
                    exit_code = run_cli(project_dir, "generateHTML")

        assert exit_code == 1
        mock_run.assert_not_called()
        assert "unsupported Java version 8" in capsys.readouterr().err

    def test_project_root_defaults_to_cwd(self, project_dir, installed_toolchain, runtime, monkeypatch):
        monkeypatch.chdir(project_dir)
        with patch("dtcw.cli.utils.probe_capabilities", return_value=HostCapabilities()):
            with patch("dtcw.cli.commands.run.validate_runtime", return_value=runtime):
                with patch(
                    "subprocess.run", return_value=MagicMock(returncode=0)
                ) as mock_run:
                    exit_code = CLI().run(["generateHTML"])

        assert exit_code == 0
        assert mock_run.call_args[1]["cwd"] == project_dir.resolve()
