"""
Installer configuration.

InstallerConfig is the immutable plan handed to a platform installer: where to
download the bootstrap script from, where to install, and how (proxy,
timeout, sudo, Homebrew preference).
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from composerkit.core.download import DownloadConfig
from composerkit.core.platform import detect_os

DEFAULT_DOWNLOAD_URL = "https://getcomposer.org/installer"
DEFAULT_TIMEOUT_SECONDS = 300
DEFAULT_RUNTIME = "php"
DEFAULT_PHAR_NAME = "composer.phar"


@dataclass(frozen=True)
class InstallerConfig:
    """
    Installation plan.

    Attributes:
        download_url: URL of the bootstrap script
        install_path: Directory receiving composer.phar and the wrapper
        use_proxy: Download through proxy_url
        proxy_url: HTTP proxy URL
        timeout_seconds: Budget for the download and the bootstrap run
        use_sudo: Allow elevation when install_path is not writable (Unix)
        prefer_brew_on_mac: Try `brew install composer` first on macOS
        runtime: Interpreter that runs the bootstrap script and the phar
        phar_name: File name the bootstrap script writes
        expected_sha384: Optional SHA-384 of the bootstrap script

    Example:
        config = InstallerConfig(install_path=Path('/opt/composer'), use_sudo=True)
    """

    download_url: str = DEFAULT_DOWNLOAD_URL
    install_path: Path = Path("/usr/local/bin")
    use_proxy: bool = False
    proxy_url: Optional[str] = None
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
    use_sudo: bool = False
    prefer_brew_on_mac: bool = True
    runtime: str = DEFAULT_RUNTIME
    phar_name: str = DEFAULT_PHAR_NAME
    expected_sha384: Optional[str] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.download_url:
            raise ValueError("download_url cannot be empty")
        if not self.install_path:
            raise ValueError("install_path cannot be empty")
        if not isinstance(self.install_path, Path):
            object.__setattr__(self, "install_path", Path(self.install_path))
        if self.timeout_seconds <= 0:
            raise ValueError(
                f"timeout_seconds must be positive, got {self.timeout_seconds}"
            )

    @property
    def phar_path(self) -> Path:
        """Full path of the installed phar."""
        return self.install_path / self.phar_name

    def download_config(self) -> DownloadConfig:
        return DownloadConfig(
            use_proxy=self.use_proxy,
            proxy_url=self.proxy_url,
            timeout_seconds=self.timeout_seconds,
        )

    def with_changes(self, **changes) -> "InstallerConfig":
        """Copy of this config with some fields replaced."""
        return replace(self, **changes)


def default_install_path(os_name: Optional[str] = None) -> Path:
    """
    Get the default install directory for an OS.

    Returns:
        %ProgramFiles%\\Composer on Windows, /usr/local/bin elsewhere
    """
    if (os_name or detect_os()) == "windows":
        program_files = os.environ.get("ProgramFiles", r"C:\Program Files")
        return Path(program_files) / "Composer"
    return Path("/usr/local/bin")


def default_config(os_name: Optional[str] = None) -> InstallerConfig:
    """
    Build the default configuration for the running (or given) OS.

    Example:
        >>> default_config("linux").install_path
        PosixPath('/usr/local/bin')
    """
    return InstallerConfig(install_path=default_install_path(os_name))


__all__ = [
    "DEFAULT_DOWNLOAD_URL",
    "DEFAULT_TIMEOUT_SECONDS",
    "InstallerConfig",
    "default_install_path",
    "default_config",
]
