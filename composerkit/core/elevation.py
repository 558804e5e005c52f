"""
Privilege elevation strategies.

Installers never branch on "elevated or not" themselves. They hand commands
and file writes to an Elevation strategy, which either performs them as the
current user or routes them through sudo.

Classes:
    Elevation: Abstract strategy
    DirectElevation: Run and write as the current user
    SudoElevation: Run through sudo, write through `sudo tee` + `sudo chmod`
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Union

from composerkit.core.filesystem import create_file_with_content

logger = logging.getLogger(__name__)


class Elevation(ABC):
    """Strategy for running commands and writing files with some privilege."""

    @abstractmethod
    def run(
        self, cmd: List[str], timeout: Optional[float] = None
    ) -> subprocess.CompletedProcess:
        """
        Run a command, capturing stdout and stderr as one text stream.

        Args:
            cmd: Command and arguments
            timeout: Timeout in seconds

        Returns:
            Completed process; stdout holds the combined output

        Raises:
            subprocess.TimeoutExpired: If the command exceeds timeout
            OSError: If the command cannot be started
        """
        pass

    @abstractmethod
    def write_file(
        self, path: Union[str, Path], content: Union[str, bytes], mode: int = 0o644
    ) -> None:
        """
        Create or replace a file with the given content and mode.

        Raises:
            OSError: If the file cannot be written
        """
        pass


def _run_combined(
    cmd: List[str], timeout: Optional[float] = None, input: Optional[bytes] = None
) -> subprocess.CompletedProcess:
    logger.debug(f"Running: {' '.join(cmd)}")
    return subprocess.run(
        cmd,
        input=input,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        timeout=timeout,
        check=False,
    )


def _decoded(result: subprocess.CompletedProcess) -> subprocess.CompletedProcess:
    if isinstance(result.stdout, bytes):
        result.stdout = result.stdout.decode("utf-8", errors="replace")
    return result


class DirectElevation(Elevation):
    """Perform operations as the current user."""

    def run(
        self, cmd: List[str], timeout: Optional[float] = None
    ) -> subprocess.CompletedProcess:
        return _decoded(_run_combined(cmd, timeout=timeout))

    def write_file(
        self, path: Union[str, Path], content: Union[str, bytes], mode: int = 0o644
    ) -> None:
        create_file_with_content(path, content, mode)


class SudoElevation(Elevation):
    """Perform operations through sudo."""

    def __init__(self, sudo: str = "sudo"):
        self.sudo = sudo

    def run(
        self, cmd: List[str], timeout: Optional[float] = None
    ) -> subprocess.CompletedProcess:
        return _decoded(_run_combined([self.sudo, *cmd], timeout=timeout))

    def write_file(
        self, path: Union[str, Path], content: Union[str, bytes], mode: int = 0o644
    ) -> None:
        if isinstance(content, str):
            content = content.encode("utf-8")

        result = _run_combined([self.sudo, "tee", str(path)], input=content)
        if result.returncode != 0:
            raise OSError(f"sudo tee {path} failed with exit status {result.returncode}")

        result = _run_combined([self.sudo, "chmod", format(mode, "o"), str(path)])
        if result.returncode != 0:
            raise OSError(
                f"sudo chmod {path} failed with exit status {result.returncode}"
            )


def get_elevation(use_sudo: bool) -> Elevation:
    """Pick the strategy matching the sudo flag."""
    return SudoElevation() if use_sudo else DirectElevation()


__all__ = ["Elevation", "DirectElevation", "SudoElevation", "get_elevation"]
