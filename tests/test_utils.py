"""
Tests for the pass password-store helper.
"""

from __future__ import annotations

import subprocess
from unittest.mock import Mock, patch

import pytest

from github_issue_copier.utils import InvalidPassPathError, PassError, get_pass_value


def _called_process_error(returncode: int, stderr: str) -> subprocess.CalledProcessError:
    return subprocess.CalledProcessError(returncode, ["pass", "show", "x"], output="", stderr=stderr)


@pytest.mark.unit
class TestGetPassValue:
    @pytest.mark.parametrize("path", ["", "../etc/passwd", "github/cli/token; rm -rf /", "a//b", "/abs"])
    def test_invalid_path_rejected(self, path: str) -> None:
        with patch("subprocess.run") as mock_run, pytest.raises(ValueError, match="Invalid pass path"):
            get_pass_value(path)
        mock_run.assert_not_called()

    def test_returns_first_line(self) -> None:
        with patch("subprocess.run", return_value=Mock(stdout="ghp_secret\nlogin: octocat\n")) as mock_run:
            assert get_pass_value("github/cli/token") == "ghp_secret"
        mock_run.assert_called_once_with(
            ["pass", "show", "github/cli/token"],
            capture_output=True,
            text=True,
            check=True,
            stdin=subprocess.DEVNULL,
        )

    def test_empty_entry(self) -> None:
        with patch("subprocess.run", return_value=Mock(stdout="")):
            assert get_pass_value("github/cli/token") == ""

    def test_missing_entry(self) -> None:
        error = _called_process_error(1, "Error: github/none is not in the password store.")
        with patch("subprocess.run", side_effect=error), pytest.raises(InvalidPassPathError, match="not found"):
            get_pass_value("github/none")

    def test_locked_key_fails_without_prompting(self) -> None:
        gpg_error = _called_process_error(2, "gpg: public key decryption failed: No pinentry")
        with (
            patch("subprocess.run", side_effect=gpg_error) as mock_run,
            patch("builtins.input") as mock_input,
            pytest.raises(PassError, match="status 2: gpg: public key decryption failed"),
        ):
            get_pass_value("github/cli/token")
        mock_run.assert_called_once()
        mock_input.assert_not_called()

    def test_pass_not_installed_raises_os_error(self) -> None:
        with (
            patch("subprocess.run", side_effect=FileNotFoundError(2, "No such file or directory", "pass")),
            pytest.raises(FileNotFoundError),
        ):
            get_pass_value("github/cli/token")
