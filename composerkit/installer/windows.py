"""
Windows installer.

Writes composer.bat next to composer.phar. Windows has no sudo, so a
non-writable install directory is always an error.
"""

import logging
from pathlib import Path

from composerkit.core.elevation import DirectElevation, Elevation
from composerkit.core.filesystem import check_write_permission
from composerkit.installer.base import PlatformInstaller

logger = logging.getLogger(__name__)


class WindowsInstaller(PlatformInstaller):
    """Install Composer on Windows."""

    name = "windows"
    wrapper_name = "composer.bat"
    wrapper_mode = 0o644

    def wrapper_content(self, phar_path: Path) -> str:
        return f'@{self.config.runtime} "{phar_path}" %*\r\n'

    def select_elevation(self) -> Elevation:
        # use_sudo is ignored here
        check_write_permission(self.config.install_path)
        return DirectElevation()

    def install(self) -> None:
        self.install_from_bootstrap()
        logger.info(
            f"Add {self.config.install_path} to your PATH to use 'composer' "
            "from any directory"
        )


__all__ = ["WindowsInstaller"]
