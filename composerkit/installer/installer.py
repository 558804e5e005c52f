"""
Composer installer entry point.

Selects the platform installer for the running OS and runs it.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Type

from composerkit.core.exceptions import UnsupportedPlatformError
from composerkit.core.platform import BSD_FAMILY, detect_os, is_supported_os
from composerkit.installer.base import Downloader, PlatformInstaller
from composerkit.installer.config import InstallerConfig, default_config
from composerkit.installer.linux import LinuxInstaller
from composerkit.installer.macos import MacOSInstaller
from composerkit.installer.unix import UnixInstaller
from composerkit.installer.windows import WindowsInstaller

logger = logging.getLogger(__name__)

_INSTALLERS: Dict[str, Type[PlatformInstaller]] = {
    "windows": WindowsInstaller,
    "darwin": MacOSInstaller,
    "linux": LinuxInstaller,
    **{name: UnixInstaller for name in BSD_FAMILY},
}


def get_platform_installer(
    config: InstallerConfig,
    os_name: Optional[str] = None,
    downloader: Optional[Downloader] = None,
) -> PlatformInstaller:
    """
    Create the installer for an operating system.

    Args:
        config: Installation plan
        os_name: OS identifier (detected if None)
        downloader: Override for the bootstrap downloader

    Raises:
        UnsupportedPlatformError: If no installer handles os_name
    """
    os_name = os_name or detect_os()
    if not is_supported_os(os_name):
        raise UnsupportedPlatformError(os_name)
    return _INSTALLERS[os_name](config, downloader=downloader)


class Installer:
    """
    Install Composer on the running host.

    Example:
        installer = Installer()
        installer.config = installer.config.with_changes(use_sudo=True)
        installer.install()
    """

    def __init__(
        self,
        config: Optional[InstallerConfig] = None,
        os_name: Optional[str] = None,
        downloader: Optional[Downloader] = None,
    ):
        self.os_name = os_name or detect_os()
        self._config = config or default_config(self.os_name)
        self.downloader = downloader

    @property
    def config(self) -> InstallerConfig:
        return self._config

    @config.setter
    def config(self, config: InstallerConfig) -> None:
        self._config = config

    @property
    def executable_path(self) -> Path:
        """Wrapper path install() writes (composer or composer.bat)."""
        return get_platform_installer(self._config, self.os_name).wrapper_path

    def install(self) -> None:
        """
        Install Composer using the platform installer.

        Raises:
            UnsupportedPlatformError: If the OS has no installer
            InsufficientRightsError, DownloadError, InstallationError: From
                the platform installer
        """
        platform_installer = get_platform_installer(
            self._config, self.os_name, downloader=self.downloader
        )
        logger.debug(f"Using {type(platform_installer).__name__}")
        platform_installer.install()


__all__ = ["Installer", "get_platform_installer"]
