"""
Tests for elevation strategies.
"""

import subprocess
import sys
from unittest.mock import Mock, call, patch

import pytest

from composerkit.core.elevation import (
    DirectElevation,
    SudoElevation,
    get_elevation,
)


class TestGetElevation:
    """Test strategy selection."""

    def test_direct(self):
        assert isinstance(get_elevation(False), DirectElevation)

    def test_sudo(self):
        assert isinstance(get_elevation(True), SudoElevation)


class TestDirectElevation:
    """Test DirectElevation."""

    @patch("subprocess.run")
    def test_run_combines_output(self, mock_run):
        """Test stdout and stderr are merged and decoded."""
        mock_run.return_value = Mock(returncode=0, stdout=b"All settings correct\n")

        result = DirectElevation().run(["php", "setup.php"], timeout=30)

        assert result.stdout == "All settings correct\n"
        args, kwargs = mock_run.call_args
        assert args[0] == ["php", "setup.php"]
        assert kwargs["stderr"] == subprocess.STDOUT
        assert kwargs["timeout"] == 30
        assert kwargs["check"] is False

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
    def test_write_file(self, tmp_path):
        """Test file is written with the requested mode."""
        target = tmp_path / "composer"

        DirectElevation().write_file(target, "#!/bin/sh\n", 0o755)

        assert target.read_text() == "#!/bin/sh\n"
        assert target.stat().st_mode & 0o777 == 0o755


class TestSudoElevation:
    """Test SudoElevation."""

    @patch("subprocess.run")
    def test_run_prefixes_sudo(self, mock_run):
        """Test commands are run through sudo."""
        mock_run.return_value = Mock(returncode=0, stdout=b"")

        SudoElevation().run(["php", "setup.php", "--install-dir=/usr/local/bin"])

        assert mock_run.call_args.args[0] == [
            "sudo",
            "php",
            "setup.php",
            "--install-dir=/usr/local/bin",
        ]

    @patch("subprocess.run")
    def test_write_file_uses_tee_and_chmod(self, mock_run):
        """Test content is piped to sudo tee, then chmod is applied."""
        mock_run.return_value = Mock(returncode=0, stdout=b"")

        SudoElevation().write_file("/usr/local/bin/composer", "#!/bin/sh\n", 0o755)

        assert mock_run.call_count == 2
        tee_call, chmod_call = mock_run.call_args_list
        assert tee_call.args[0] == ["sudo", "tee", "/usr/local/bin/composer"]
        assert tee_call.kwargs["input"] == b"#!/bin/sh\n"
        assert chmod_call.args[0] == ["sudo", "chmod", "755", "/usr/local/bin/composer"]

    @patch("subprocess.run")
    def test_tee_failure(self, mock_run):
        """Test tee failure raises OSError without running chmod."""
        mock_run.return_value = Mock(returncode=1, stdout=b"Permission denied")

        with pytest.raises(OSError, match="sudo tee"):
            SudoElevation().write_file("/usr/local/bin/composer", "x")

        assert mock_run.call_count == 1

    @patch("subprocess.run")
    def test_chmod_failure(self, mock_run):
        """Test chmod failure raises OSError."""
        mock_run.side_effect = [
            Mock(returncode=0, stdout=b""),
            Mock(returncode=1, stdout=b""),
        ]

        with pytest.raises(OSError, match="sudo chmod"):
            SudoElevation().write_file("/usr/local/bin/composer", "x")

    @patch("subprocess.run")
    def test_custom_sudo_binary(self, mock_run):
        """Test an alternative elevation binary can be used."""
        mock_run.return_value = Mock(returncode=0, stdout=b"")

        SudoElevation(sudo="doas").run(["true"])

        assert mock_run.call_args == call(
            ["doas", "true"],
            input=None,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            timeout=None,
            check=False,
        )
