"""
Tests for Java runtime discovery and validation.
"""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from dtcw.core.exceptions import (
    DtcwError,
    MissingPrerequisiteError,
    UnsupportedRuntimeError,
)
from dtcw.runtime.java import (
    find_java_in_home,
    get_java_version_output,
    is_supported_version,
    locate_java,
    parse_major_version,
    validate_runtime,
)
from tests.fixtures.directories import make_java


def version_output(version: str) -> str:
    return (
        f'openjdk version "{version}" 2022-01-18\n'
        "OpenJDK Runtime Environment Temurin (build 17.0.2+8)\n"
    )


class TestParseMajorVersion:
    """Tests for parse_major_version function."""

    @pytest.mark.parametrize(
        "output,expected",
        [
            ('openjdk version "17.0.2" 2022-01-18', 17),
            ('openjdk version "11.0.21" 2023-10-17 LTS', 11),
            ('java version "1.8.0_292"', 8),
            ('openjdk version "1.8.0-internal"', 8),
            ('openjdk version "21" 2023-09-19', 21),
            ('openjdk version "17-ea"', 17),
            ('openjdk version "10.0.2" 2018-07-17', 10),
        ],
    )
    def test_parse(self, output, expected):
        assert parse_major_version(output) == expected

    @pytest.mark.parametrize(
        "output",
        ["", "command not found", 'openjdk version "abc"'],
    )
    def test_unparseable(self, output):
        assert parse_major_version(output) is None


class TestIsSupportedVersion:
    """Tests for the supported Java range."""

    @pytest.mark.parametrize("major", [11, 12, 13, 14, 15, 16, 17])
    def test_supported(self, major):
        assert is_supported_version(major)

    @pytest.mark.parametrize("major", [8, 10, 18, 21])
    def test_unsupported(self, major):
        assert not is_supported_version(major)


class TestLocateJava:
    """Tests for locate_java function."""

    def test_local_jdk_first(self, dtc_root, local_jdk, tmp_path):
        other_home = tmp_path / "other-jdk"
        make_java(other_home)

        executable, java_home, source = locate_java(
            dtc_root, {"JAVA_HOME": str(other_home)}
        )

        assert executable == local_jdk / "bin" / "java"
        assert java_home == local_jdk
        assert source == "dtcw"

    def test_local_jdk_shadowing_logged(self, dtc_root, local_jdk, tmp_path, caplog):
        other_home = tmp_path / "other-jdk"
        make_java(other_home)

        with caplog.at_level("WARNING"):
            locate_java(dtc_root, {"JAVA_HOME": str(other_home)})

        assert "overridden" in caplog.text

    def test_macos_layout(self, dtc_root):
        java_home = dtc_root / "jdk"
        make_java(java_home / "Contents" / "Home")

        executable, _, source = locate_java(dtc_root, {})

        assert executable == java_home / "Contents" / "Home" / "bin" / "java"
        assert source == "dtcw"

    def test_java_home(self, dtc_root, tmp_path):
        java_home = tmp_path / "jdk-11"
        executable = make_java(java_home)

        found, found_home, source = locate_java(dtc_root, {"JAVA_HOME": str(java_home)})

        assert found == executable
        assert found_home == java_home
        assert source == "JAVA_HOME"

    def test_path(self, dtc_root):
        with patch("shutil.which", return_value="/usr/bin/java"):
            executable, java_home, source = locate_java(dtc_root, {})

        assert executable == Path("/usr/bin/java")
        assert java_home is None
        assert source == "PATH"

    def test_invalid_java_home_falls_back_to_path(self, dtc_root, tmp_path):
        with patch("shutil.which", return_value="/usr/bin/java"):
            _, _, source = locate_java(dtc_root, {"JAVA_HOME": str(tmp_path / "nope")})
        assert source == "PATH"

    def test_not_found(self, dtc_root):
        with patch("shutil.which", return_value=None):
            with pytest.raises(MissingPrerequisiteError) as exc_info:
                locate_java(dtc_root, {})
        assert "install runtime" in exc_info.value.remediation

    def test_find_java_in_empty_home(self, tmp_path):
        assert find_java_in_home(tmp_path) is None


class TestGetJavaVersionOutput:
    """Tests for get_java_version_output function."""

    def test_reads_stderr(self):
        result = MagicMock(returncode=0, stderr='openjdk version "17.0.2"\n', stdout="")
        with patch("subprocess.run", return_value=result) as mock_run:
            output = get_java_version_output(Path("/usr/bin/java"))

        assert "17.0.2" in output
        assert mock_run.call_args[0][0] == ["/usr/bin/java", "-version"]

    def test_cannot_start(self):
        with patch("subprocess.run", side_effect=OSError("Exec format error")):
            with pytest.raises(DtcwError):
                get_java_version_output(Path("/usr/bin/java"))


class TestValidateRuntime:
    """Tests for validate_runtime function."""

    def test_accepts_supported(self, dtc_root, local_jdk):
        with patch(
            "dtcw.runtime.java.get_java_version_output",
            return_value=version_output("17.0.2"),
        ):
            runtime = validate_runtime(dtc_root, {})

        assert runtime.major_version == 17
        assert runtime.java_home == local_jdk
        assert runtime.source == "dtcw"

    @pytest.mark.parametrize("version", ["1.8.0_292", "10.0.2", "18.0.1", "21.0.1"])
    def test_rejects_unsupported(self, dtc_root, local_jdk, version):
        with patch(
            "dtcw.runtime.java.get_java_version_output",
            return_value=version_output(version),
        ):
            with pytest.raises(UnsupportedRuntimeError) as exc_info:
                validate_runtime(dtc_root, {})

        assert exc_info.value.exit_code == 1
        assert str(local_jdk / "bin" / "java") in str(exc_info.value)

    def test_rejects_unparseable(self, dtc_root, local_jdk):
        with patch(
            "dtcw.runtime.java.get_java_version_output", return_value="garbage\n"
        ):
            with pytest.raises(UnsupportedRuntimeError) as exc_info:
                validate_runtime(dtc_root, {})
        assert "garbage" in str(exc_info.value)
