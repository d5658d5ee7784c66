"""
Tests for the local filesystem and subprocess capabilities.
"""

import os
import sys

import pytest

from composectl.filesystem import LocalFileSystem, SubprocessRunner


class TestLocalFileSystem:
    """Test file probing and directory listing."""

    def test_is_file(self, temp_workspace):
        fs = LocalFileSystem()
        (temp_workspace / "a.yml").write_text("services: {}\n")
        (temp_workspace / "sub").mkdir()

        assert fs.is_file(temp_workspace / "a.yml")
        assert not fs.is_file(temp_workspace / "sub")
        assert not fs.is_file(temp_workspace / "missing.yml")

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
    def test_symlink_counts_as_file(self, temp_workspace):
        fs = LocalFileSystem()
        (temp_workspace / "real.env").write_text("A=1\n")
        os.symlink(temp_workspace / "real.env", temp_workspace / ".env")
        os.symlink(temp_workspace / "nowhere", temp_workspace / "dangling")

        assert fs.is_file(temp_workspace / ".env")
        assert not fs.is_file(temp_workspace / "dangling")

    def test_exists(self, temp_workspace):
        fs = LocalFileSystem()
        (temp_workspace / ".env").write_text("")

        assert fs.exists(temp_workspace / ".env")
        assert fs.exists(temp_workspace)
        assert not fs.exists(temp_workspace / "missing")

    def test_is_directory(self, temp_workspace):
        fs = LocalFileSystem()
        (temp_workspace / "sub").mkdir()
        (temp_workspace / "a.yml").write_text("")

        assert fs.is_directory(temp_workspace / "sub")
        assert not fs.is_directory(temp_workspace / "a.yml")
        assert not fs.is_directory(temp_workspace / "missing")

    def test_get_files_and_directories(self, temp_workspace):
        fs = LocalFileSystem()
        (temp_workspace / ".env").write_text("")
        (temp_workspace / "b.yml").write_text("")
        (temp_workspace / "deploy").mkdir()

        assert fs.get_files(temp_workspace) == [temp_workspace / ".env", temp_workspace / "b.yml"]
        assert fs.get_directories(temp_workspace) == [temp_workspace / "deploy"]


class TestShellEscape:
    """Test POSIX shell escaping."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("docker-compose.yml", "docker-compose.yml"),
            ("deploy/prod.yml", "deploy/prod.yml"),
            ("", "''"),
            ("my file.yml", "'my file.yml'"),
            ("it's.yml", "'it'\"'\"'s.yml'"),
            ("$(rm -rf /)", "'$(rm -rf /)'"),
        ],
    )
    def test_shell_escape(self, value, expected):
        assert LocalFileSystem.shell_escape(value) == expected


@pytest.mark.skipif(sys.platform == "win32", reason="requires a POSIX shell")
class TestSubprocessRunner:
    """Test running commands through the shell."""

    def test_success(self, temp_workspace):
        result = SubprocessRunner().run("true", temp_workspace)

        assert result.exit_code == 0
        assert result.success
        assert result.error_message == ""

    def test_non_zero_exit(self, temp_workspace):
        result = SubprocessRunner().run("exit 3", temp_workspace)

        assert result.exit_code == 3
        assert not result.success
        assert "Command failed" in result.error_message

    def test_runs_in_working_directory(self, temp_workspace):
        result = SubprocessRunner().run("test -f marker.txt", temp_workspace)
        assert result.exit_code == 1

        (temp_workspace / "marker.txt").write_text("")
        result = SubprocessRunner().run("test -f marker.txt", temp_workspace)
        assert result.exit_code == 0

    def test_missing_working_directory(self, temp_workspace):
        """A spawn error is captured instead of raised."""
        result = SubprocessRunner().run("true", temp_workspace / "missing")

        assert result.exit_code is None
        assert not result.success
        assert result.error_message
