"""
Platform installer interface and the shared bootstrap algorithm.

Every variant installs Composer the same way:

1. Verify the install directory is writable (or that sudo is allowed)
2. Download the bootstrap script to a temporary file
3. Run the bootstrap script with the PHP runtime to produce composer.phar
4. Write a small wrapper so `composer` is directly executable

Variants only decide the wrapper format and whether elevation is possible.
"""

import logging
import os
import subprocess
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Optional

from composerkit.core.download import download_file
from composerkit.core.elevation import DirectElevation, Elevation, get_elevation
from composerkit.core.exceptions import (
    DownloadError,
    InstallationError,
    InsufficientRightsError,
)
from composerkit.core.filesystem import check_write_permission, remove_file
from composerkit.installer.config import InstallerConfig

logger = logging.getLogger(__name__)

# download_file-compatible callable: (url, destination, config, expected_sha384)
Downloader = Callable[..., Path]


class PlatformInstaller(ABC):
    """
    Abstract base class for per-OS Composer installers.

    Attributes:
        config: Installation plan (immutable)
        downloader: Callable used to fetch the bootstrap script

    Subclasses provide the wrapper file name, content and mode.
    """

    name = "generic"

    def __init__(
        self, config: InstallerConfig, downloader: Optional[Downloader] = None
    ):
        self.config = config
        self.downloader = downloader or download_file

    @property
    @abstractmethod
    def wrapper_name(self) -> str:
        """File name of the wrapper written next to the phar."""
        pass

    @abstractmethod
    def wrapper_content(self, phar_path: Path) -> str:
        """Wrapper script body invoking phar_path through the runtime."""
        pass

    wrapper_mode = 0o755

    @property
    def wrapper_path(self) -> Path:
        return self.config.install_path / self.wrapper_name

    def install(self) -> None:
        """
        Install Composer into config.install_path.

        Raises:
            InsufficientRightsError: If the directory is not writable and
                                     elevation is not permitted
            DownloadError: If the bootstrap script cannot be downloaded
            InstallationError: If the bootstrap run or wrapper write fails
        """
        self.install_from_bootstrap()

    def install_from_bootstrap(self) -> None:
        """Run the shared permission/download/bootstrap/wrapper sequence."""
        install_path = self.config.install_path
        logger.info(f"Installing Composer to {install_path} ({self.name})")

        elevation = self.select_elevation()

        try:
            fd, script_name = tempfile.mkstemp(prefix="composer-setup-", suffix=".php")
            os.close(fd)
        except OSError as e:
            raise InstallationError(
                f"Cannot create temporary installer file: {e}"
            ) from e
        script = Path(script_name)

        try:
            self.download_bootstrap(script)
            self.run_bootstrap(elevation, script)
            self.write_wrapper(elevation)
        finally:
            try:
                remove_file(script)
            except OSError as e:
                logger.warning(f"Failed to remove temporary file {script}: {e}")

        logger.info(f"Composer installed at {self.wrapper_path}")

    def select_elevation(self) -> Elevation:
        """
        Check the install directory and pick the elevation strategy.

        Raises:
            InsufficientRightsError: If not writable and use_sudo is off
        """
        try:
            check_write_permission(self.config.install_path)
            return DirectElevation()
        except InsufficientRightsError:
            if not self.config.use_sudo:
                raise
            logger.info(
                f"{self.config.install_path} is not writable, continuing with sudo"
            )
            return get_elevation(True)

    def download_bootstrap(self, destination: Path) -> None:
        try:
            self.downloader(
                self.config.download_url,
                destination,
                self.config.download_config(),
                expected_sha384=self.config.expected_sha384,
            )
        except DownloadError:
            raise
        except OSError as e:
            raise DownloadError(f"Failed to download installer: {e}") from e

    def run_bootstrap(self, elevation: Elevation, script: Path) -> None:
        """
        Execute the bootstrap script to produce the phar.

        Raises:
            InstallationError: On non-zero exit, timeout, or missing runtime
        """
        cmd = [
            self.config.runtime,
            str(script),
            f"--install-dir={self.config.install_path}",
            f"--filename={self.config.phar_name}",
        ]

        try:
            result = elevation.run(cmd, timeout=self.config.timeout_seconds)
        except subprocess.TimeoutExpired as e:
            output = e.output or b""
            if isinstance(output, bytes):
                output = output.decode("utf-8", errors="replace")
            raise InstallationError(
                f"Composer installer timed out after {self.config.timeout_seconds}s",
                output,
            ) from e
        except OSError as e:
            raise InstallationError(
                f"Failed to run {self.config.runtime}: {e}"
            ) from e

        if result.returncode != 0:
            raise InstallationError(
                f"Composer installer exited with status {result.returncode}",
                result.stdout or "",
            )

        logger.debug(f"Bootstrap output: {(result.stdout or '').strip()}")

    def write_wrapper(self, elevation: Elevation) -> None:
        phar_path = self.config.phar_path
        try:
            elevation.write_file(
                self.wrapper_path, self.wrapper_content(phar_path), self.wrapper_mode
            )
        except OSError as e:
            raise InstallationError(
                f"Failed to write wrapper {self.wrapper_path}: {e}"
            ) from e


class PosixInstaller(PlatformInstaller):
    """Shell-script wrapper shared by Linux, macOS and the BSDs."""

    wrapper_name = "composer"

    def wrapper_content(self, phar_path: Path) -> str:
        return f'#!/bin/sh\n{self.config.runtime} "{phar_path}" "$@"\n'


__all__ = ["Downloader", "PlatformInstaller", "PosixInstaller"]
