"""
Tests for the Composer Detector.
"""

import subprocess
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from composerkit.core.exceptions import ExecutableNotFoundError
from composerkit.detector.detector import ENV_OVERRIDE, Detector, ExecutableLocation

pytestmark = pytest.mark.posix


@pytest.fixture(autouse=True)
def no_env_override(monkeypatch):
    monkeypatch.delenv(ENV_OVERRIDE, raising=False)


@pytest.fixture
def no_path_lookup():
    """Make which/where find nothing."""
    with patch("subprocess.run") as mock_run:
        mock_run.return_value = Mock(returncode=1, stdout="", stderr="")
        yield mock_run


class TestCandidateManagement:
    """Test candidate list handling."""

    def test_default_candidates(self):
        """Test detector seeds itself with platform paths."""
        detector = Detector(os_name="linux")

        assert detector.possible_paths[0] == Path("/usr/local/bin/composer")

    def test_possible_paths_is_copy(self):
        """Test mutating the returned list does not affect the detector."""
        detector = Detector(possible_paths=["/a"], os_name="linux")
        detector.possible_paths.append(Path("/b"))

        assert detector.possible_paths == [Path("/a")]

    def test_set_and_add(self):
        """Test replacing and extending the candidate list."""
        detector = Detector(os_name="linux")
        detector.set_possible_paths(["/x"])
        detector.add_possible_path("/y")

        assert detector.possible_paths == [Path("/x"), Path("/y")]

    def test_locations_live_validity(self, fake_composer, tmp_path):
        """Test location validity is probed on every access."""
        missing = tmp_path / "later"
        detector = Detector(possible_paths=[missing], os_name="linux")
        location = detector.locations()[0]

        assert isinstance(location, ExecutableLocation)
        assert location.is_valid is False

        fake_composer(name="later")

        assert location.is_valid is True


class TestDetect:
    """Test detection order."""

    def test_env_override_wins(self, monkeypatch, fake_composer, tmp_path, no_path_lookup):
        """Test COMPOSER_PATH beats candidate paths."""
        override = fake_composer(name="override")
        candidate = fake_composer(name="candidate")
        monkeypatch.setenv(ENV_OVERRIDE, str(override))

        detector = Detector(possible_paths=[candidate], os_name="linux")

        assert detector.detect() == override
        no_path_lookup.assert_not_called()

    def test_invalid_env_override_ignored(
        self, monkeypatch, fake_composer, non_executable_file, no_path_lookup
    ):
        """Test non-executable override falls through to candidates."""
        candidate = fake_composer()
        monkeypatch.setenv(ENV_OVERRIDE, str(non_executable_file))

        detector = Detector(possible_paths=[candidate], os_name="linux")

        assert detector.detect() == candidate

    def test_first_valid_candidate(self, fake_composer, tmp_path, non_executable_file, no_path_lookup):
        """Test candidates are scanned in order, skipping invalid ones."""
        first = fake_composer(name="first")
        second = fake_composer(name="second")
        detector = Detector(
            possible_paths=[tmp_path / "missing", non_executable_file, first, second],
            os_name="linux",
        )

        assert detector.detect() == first
        no_path_lookup.assert_not_called()

    def test_empty_candidates_use_which(self, fake_composer):
        """Test empty candidate list falls through to `which composer`."""
        found = fake_composer()
        detector = Detector(possible_paths=[], os_name="linux")

        with patch("subprocess.run") as mock_run:
            mock_run.return_value = Mock(returncode=0, stdout=f"{found}\n", stderr="")
            assert detector.detect() == found

        assert mock_run.call_args.args[0] == ["which", "composer"]

    def test_where_on_windows(self, fake_composer):
        """Test Windows uses `where` and takes the first line."""
        first = fake_composer(name="composer.bat")
        detector = Detector(possible_paths=[], os_name="windows")

        with patch("subprocess.run") as mock_run:
            mock_run.return_value = Mock(
                returncode=0, stdout=f"{first}\r\nC:\\other\\composer\r\n", stderr=""
            )
            assert detector.detect() == first

        assert mock_run.call_args.args[0] == ["where", "composer"]

    def test_which_result_must_be_executable(self, non_executable_file):
        """Test a reported path that fails the probe is rejected."""
        detector = Detector(possible_paths=[], os_name="linux")

        with patch("subprocess.run") as mock_run:
            mock_run.return_value = Mock(
                returncode=0, stdout=f"{non_executable_file}\n", stderr=""
            )
            with pytest.raises(ExecutableNotFoundError):
                detector.detect()

    @pytest.mark.parametrize(
        "error", [OSError("which: not found"), subprocess.TimeoutExpired("which", 10)]
    )
    def test_lookup_errors_mean_not_found(self, error):
        """Test lookup tool failures are treated as not found."""
        detector = Detector(possible_paths=[], os_name="linux")

        with patch("subprocess.run", side_effect=error):
            with pytest.raises(ExecutableNotFoundError, match="not found"):
                detector.detect()

    def test_not_found(self, tmp_path, no_path_lookup):
        """Test ExecutableNotFoundError when every strategy fails."""
        detector = Detector(possible_paths=[tmp_path / "nope"], os_name="linux")

        with pytest.raises(ExecutableNotFoundError):
            detector.detect()
        assert detector.is_installed() is False

    def test_no_caching(self, fake_composer, tmp_path, no_path_lookup):
        """Test an executable created after a failed detect is found."""
        target = tmp_path / "composer"
        detector = Detector(possible_paths=[target], os_name="linux")

        assert detector.is_installed() is False

        fake_composer()

        assert detector.is_installed() is True
        assert detector.detect() == target
