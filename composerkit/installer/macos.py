"""
macOS installer.

Prefers Homebrew when it is available; any Homebrew failure falls back to
the shared bootstrap sequence.
"""

import logging
import shutil
import subprocess

from composerkit.installer.base import PosixInstaller

logger = logging.getLogger(__name__)


class MacOSInstaller(PosixInstaller):
    """Install Composer on macOS."""

    name = "darwin"

    def install(self) -> None:
        if self.config.prefer_brew_on_mac and self.try_brew_install():
            return
        self.install_from_bootstrap()

    def try_brew_install(self) -> bool:
        """
        Try `brew install composer`.

        Returns:
            True if Homebrew installed Composer, False on any failure
        """
        brew = shutil.which("brew")
        if brew is None:
            logger.info("Homebrew not found, using the Composer installer")
            return False

        logger.info("Installing Composer with Homebrew")
        try:
            result = subprocess.run(
                [brew, "install", "composer"],
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                timeout=self.config.timeout_seconds,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.info(f"Homebrew install failed ({e}), falling back")
            return False

        if result.returncode != 0:
            logger.info(
                f"Homebrew install exited with status {result.returncode}, "
                "falling back"
            )
            return False

        return True


__all__ = ["MacOSInstaller"]
