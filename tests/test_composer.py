"""
Tests for the Composer facade.
"""

from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from composerkit.composer import Composer, ComposerOptions, default_options
from composerkit.core.context import RunContext
from composerkit.core.exceptions import (
    DeadlineExceededError,
    DownloadError,
    ExecutableNotFoundError,
    InstallationError,
)
from composerkit.detector.detector import Detector
from composerkit.fixtures import FixtureTable, setup_mock_output
from composerkit.installer.config import InstallerConfig
from composerkit.installer.installer import Installer


@pytest.fixture
def detector():
    return Mock(spec=Detector)


@pytest.fixture
def installer():
    return Mock(spec=Installer)


class TestDefaultOptions:
    """Test default_options function."""

    def test_defaults(self):
        options = default_options()

        assert options.auto_install is True
        assert options.default_timeout == 600
        assert options.executable_path is None
        assert options.env == {}


class TestConstruction:
    """Test executable resolution at construction."""

    def test_explicit_path(self, tmp_path, detector, installer):
        """Test an existing explicit path skips detection."""
        exe = tmp_path / "composer.phar"
        exe.write_text("")

        composer = Composer(
            ComposerOptions(executable_path=exe, detector=detector, installer=installer)
        )

        assert composer.executable_path == exe
        detector.detect.assert_not_called()
        installer.install.assert_not_called()

    def test_explicit_path_missing(self, tmp_path, detector, installer):
        """Test a missing explicit path raises without fallback."""
        with pytest.raises(ExecutableNotFoundError, match="does not exist"):
            Composer(
                ComposerOptions(
                    executable_path=tmp_path / "missing",
                    detector=detector,
                    installer=installer,
                )
            )

        detector.detect.assert_not_called()
        installer.install.assert_not_called()

    def test_detected(self, detector, installer):
        """Test detection result is used."""
        detector.detect.return_value = Path("/usr/local/bin/composer")

        composer = Composer(ComposerOptions(detector=detector, installer=installer))

        assert composer.executable_path == Path("/usr/local/bin/composer")
        installer.install.assert_not_called()

    def test_auto_install_disabled(self, detector, installer):
        """Test auto_install=False never touches the installer."""
        detector.detect.side_effect = ExecutableNotFoundError("not found")

        with pytest.raises(ExecutableNotFoundError):
            Composer(
                ComposerOptions(
                    auto_install=False, detector=detector, installer=installer
                )
            )

        installer.install.assert_not_called()

    def test_auto_install_then_detect(self, detector, installer):
        """Test install followed by exactly one more detection."""
        detector.detect.side_effect = [
            ExecutableNotFoundError("not found"),
            Path("/usr/local/bin/composer"),
        ]

        composer = Composer(ComposerOptions(detector=detector, installer=installer))

        installer.install.assert_called_once_with()
        assert detector.detect.call_count == 2
        assert composer.executable_path == Path("/usr/local/bin/composer")

    def test_install_failure(self, detector, installer):
        """Test installer errors surface as InstallationError."""
        detector.detect.side_effect = ExecutableNotFoundError("not found")
        installer.install.side_effect = DownloadError("HTTP 503")

        with pytest.raises(InstallationError, match="HTTP 503") as exc_info:
            Composer(ComposerOptions(detector=detector, installer=installer))

        assert isinstance(exc_info.value.__cause__, DownloadError)

    def test_not_found_after_install(self, detector, installer):
        """Test a failed post-install detection raises ExecutableNotFoundError."""
        detector.detect.side_effect = ExecutableNotFoundError("not found")

        with pytest.raises(ExecutableNotFoundError, match="after installation"):
            Composer(ComposerOptions(detector=detector, installer=installer))

        assert detector.detect.call_count == 2

    def test_installer_exception_of_any_type(self, detector, installer):
        """Test errors outside the composerkit hierarchy are wrapped too."""
        detector.detect.side_effect = ExecutableNotFoundError("not found")
        installer.install.side_effect = OSError("No space left on device")

        with pytest.raises(InstallationError, match="No space left") as exc_info:
            Composer(ComposerOptions(detector=detector, installer=installer))

        assert isinstance(exc_info.value.__cause__, OSError)

    def test_installed_path_becomes_candidate(self, detector, installer):
        """Test the installed wrapper is searched by the second detection."""
        detector.detect.side_effect = [
            ExecutableNotFoundError("not found"),
            Path("/opt/composer/composer"),
        ]
        installer.executable_path = Path("/opt/composer/composer")

        Composer(ComposerOptions(detector=detector, installer=installer))

        detector.add_possible_path.assert_called_once_with(
            Path("/opt/composer/composer")
        )

    def test_default_collaborators(self, tmp_path):
        """Test detector and installer defaults are created."""
        exe = tmp_path / "composer"
        exe.write_text("")

        composer = Composer(ComposerOptions(executable_path=exe))

        assert isinstance(composer.detector, Detector)
        assert isinstance(composer.installer, Installer)


FAKE_PHP = """
for arg in "$@"; do
  case "$arg" in
    --install-dir=*) dir="${arg#--install-dir=}" ;;
    --filename=*) name="${arg#--filename=}" ;;
  esac
done
echo "<?php // composer" > "$dir/$name"
echo "Composer (version 2.5.0) successfully installed"
"""


def write_bootstrap(url, destination, config=None, expected_sha384=None):
    Path(destination).write_text("<?php // installer")
    return destination


class TestAutoInstall:
    """Test construction through a real installation."""

    @pytest.fixture
    def isolated_host(self, tmp_path, monkeypatch):
        """No COMPOSER_PATH and no which/where on PATH."""
        empty = tmp_path / "empty"
        empty.mkdir()
        monkeypatch.delenv("COMPOSER_PATH", raising=False)
        monkeypatch.setenv("PATH", str(empty))

    @pytest.mark.posix
    def test_custom_install_path_is_detected(self, fake_composer, tmp_path, isolated_host):
        """Test an install outside the default candidates ends Ready."""
        php = fake_composer(FAKE_PHP, name="php")
        install_path = tmp_path / "tools" / "bin"
        installer = Installer(
            InstallerConfig(install_path=install_path, runtime=str(php)),
            os_name="linux",
            downloader=write_bootstrap,
        )
        detector = Detector(possible_paths=[], os_name="linux")

        composer = Composer(ComposerOptions(installer=installer, detector=detector))

        assert composer.executable_path == install_path / "composer"
        assert (install_path / "composer.phar").exists()
        assert composer.is_installed()

    def test_temp_file_failure(self, tmp_path, isolated_host):
        """Test a failure creating the bootstrap temp file is InstallationError."""
        installer = Installer(
            InstallerConfig(install_path=tmp_path / "bin"),
            os_name="linux",
            downloader=write_bootstrap,
        )
        detector = Detector(possible_paths=[], os_name="linux")

        with patch("tempfile.mkstemp", side_effect=FileNotFoundError("no tmp dir")):
            with pytest.raises(InstallationError, match="no tmp dir"):
                Composer(ComposerOptions(installer=installer, detector=detector))


class TestAccessors:
    """Test working directory, environment and state accessors."""

    @pytest.fixture
    def composer(self, tmp_path):
        exe = tmp_path / "composer"
        exe.write_text("")
        return Composer(ComposerOptions(executable_path=exe, env={"A": "1"}))

    def test_working_dir(self, composer, tmp_path):
        assert composer.working_dir is None
        composer.set_working_dir(tmp_path)
        assert composer.working_dir == tmp_path

    def test_env(self, composer):
        """Test env is replaced wholesale and returned as a copy."""
        assert composer.env == {"A": "1"}

        composer.set_env({"COMPOSER_HOME": "/tmp/ch"})
        composer.env["X"] = "mutated"

        assert composer.env == {"COMPOSER_HOME": "/tmp/ch"}

    def test_is_installed(self, composer):
        assert composer.is_installed() is True
        composer.executable_path.unlink()
        assert composer.is_installed() is False


class TestRun:
    """Test run variants."""

    @pytest.fixture
    def composer(self, tmp_path):
        exe = tmp_path / "composer"
        exe.write_text("")
        return Composer(ComposerOptions(executable_path=exe))

    def test_run_uses_fixtures(self, composer):
        setup_mock_output("--version", "Composer version 2.5.0 2023-01-01")

        assert composer.run("--version") == "Composer version 2.5.0 2023-01-01"

    def test_injected_fixtures(self, tmp_path):
        """Test ComposerOptions.fixtures isolates an instance."""
        exe = tmp_path / "composer"
        exe.write_text("")
        table = FixtureTable()
        table.set("install", "from injected table")
        setup_mock_output("install", "from global table")

        composer = Composer(ComposerOptions(executable_path=exe, fixtures=table))

        assert composer.run("install") == "from injected table"

    def test_run_with_expired_context(self, composer):
        with pytest.raises(DeadlineExceededError):
            composer.run_with_context(RunContext(timeout=0), "install")

    @pytest.mark.posix
    def test_run_with_timeout_real_process(self, fake_composer):
        """Test a slow command is stopped by run_with_timeout."""
        composer = Composer(ComposerOptions(executable_path=fake_composer("sleep 5")))

        with pytest.raises(DeadlineExceededError):
            composer.run_with_timeout(0.2, "install")

    @pytest.mark.posix
    def test_run_real_process(self, fake_composer, tmp_path):
        """Test working dir and env reach the process."""
        script = fake_composer('echo "$(pwd) $COMPOSER_HOME $@"')
        composer = Composer(
            ComposerOptions(
                executable_path=script,
                working_dir=tmp_path,
                env={"COMPOSER_HOME": "/tmp/ch"},
            )
        )

        assert composer.run("install").strip() == f"{tmp_path.resolve()} /tmp/ch install"

    @pytest.mark.posix
    def test_no_default_timeout(self, fake_composer):
        """Test default_timeout=None runs without a deadline."""
        composer = Composer(
            ComposerOptions(executable_path=fake_composer("echo ok"), default_timeout=None)
        )

        assert composer.run() == "ok\n"

    def test_repr(self, composer):
        assert "composer" in repr(composer)
