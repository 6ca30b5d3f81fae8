"""Tests for subprocess_utils module."""

import subprocess
from unittest.mock import patch

from cork.subprocess_utils import format_command, get_subprocess_creation_flags, safe_run


def test_get_subprocess_creation_flags_windows():
    """Test that Windows returns CREATE_NO_WINDOW flag."""
    with patch("sys.platform", "win32"), patch.object(subprocess, "CREATE_NO_WINDOW", 0x08000000, create=True):
        flags = get_subprocess_creation_flags()
        assert flags == 0x08000000


def test_get_subprocess_creation_flags_linux():
    """Test that Linux returns 0."""
    with patch("sys.platform", "linux"):
        flags = get_subprocess_creation_flags()
        assert flags == 0


@patch("subprocess.run")
def test_safe_run_no_flags_on_linux(mock_run):
    """Test that safe_run doesn't apply flags on Linux."""
    with patch("sys.platform", "linux"):
        safe_run(["gcc", "--version"], capture_output=True)

        mock_run.assert_called_once()
        call_kwargs = mock_run.call_args[1]
        assert "creationflags" not in call_kwargs
        assert call_kwargs["capture_output"] is True


@patch("subprocess.run")
def test_safe_run_merges_custom_creationflags(mock_run):
    """Test that custom creationflags are OR'd with defaults."""
    with patch("sys.platform", "win32"), patch.object(subprocess, "CREATE_NO_WINDOW", 0x08000000, create=True):
        custom_flag = 0x00000200
        safe_run(["gcc", "--version"], creationflags=custom_flag)

        call_kwargs = mock_run.call_args[1]
        assert call_kwargs["creationflags"] == custom_flag | 0x08000000


@patch("subprocess.run")
def test_safe_run_defaults_stdin_to_devnull(mock_run):
    """Toolchain processes never read from the terminal."""
    safe_run(["gcc", "-c", "main.c"])

    assert mock_run.call_args[1]["stdin"] == subprocess.DEVNULL


@patch("subprocess.run")
def test_safe_run_keeps_explicit_stdin(mock_run):
    """stdin=None lets a built program inherit the terminal."""
    safe_run(["./app"], stdin=None)

    assert mock_run.call_args[1]["stdin"] is None


@patch("subprocess.run")
def test_safe_run_returns_completed_process(mock_run):
    mock_run.return_value = subprocess.CompletedProcess(args=["gcc"], returncode=1, stderr="boom")

    result = safe_run(["gcc"], capture_output=True, text=True)

    assert result.returncode == 1
    assert result.stderr == "boom"


def test_format_command_posix():
    with patch("sys.platform", "linux"):
        assert format_command(["gcc", "-c", "main.c"]) == "gcc -c main.c"
