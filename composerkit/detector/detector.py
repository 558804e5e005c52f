"""
composerkit/detector/detector.py

Composer executable discovery.

Search order:
1. COMPOSER_PATH environment variable
2. Candidate paths (platform defaults, replaceable by the caller)
3. `which composer` / `where composer`

Nothing is cached: installation can happen while a Detector is alive, so
every detect() call probes the filesystem again.
"""

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Union

from composerkit.core.exceptions import ExecutableNotFoundError
from composerkit.core.filesystem import is_executable
from composerkit.core.platform import detect_os, is_windows
from composerkit.detector.paths import default_possible_paths

logger = logging.getLogger(__name__)

# Environment variable naming an explicit Composer executable
ENV_OVERRIDE = "COMPOSER_PATH"

EXECUTABLE_NAME = "composer"

LOOKUP_TIMEOUT_SECONDS = 10


@dataclass(frozen=True)
class ExecutableLocation:
    """
    A candidate executable location.

    Attributes:
        path: Filesystem path of the candidate
        os_name: OS whose probe semantics apply (detected if None)
    """

    path: Path
    os_name: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        """Whether the path is currently an executable file (probed on access)."""
        return is_executable(self.path, self.os_name)

    def __str__(self) -> str:
        return str(self.path)


class Detector:
    """
    Locate the Composer executable on this host.

    Attributes:
        os_name: OS identifier used for probe semantics and PATH lookup
        env_var: Name of the override environment variable
        executable_name: Bare name passed to which/where

    Example:
        detector = Detector()
        detector.add_possible_path("/opt/php/bin/composer")
        if detector.is_installed():
            print(detector.detect())
    """

    def __init__(
        self,
        possible_paths: Optional[Iterable[Union[str, Path]]] = None,
        os_name: Optional[str] = None,
        env_var: str = ENV_OVERRIDE,
        executable_name: str = EXECUTABLE_NAME,
    ):
        """
        Initialize detector.

        Args:
            possible_paths: Candidate paths in priority order
                            (platform defaults if None)
            os_name: OS identifier (detected if None)
            env_var: Override environment variable name
            executable_name: Name looked up on PATH
        """
        self.os_name = os_name or detect_os()
        self.env_var = env_var
        self.executable_name = executable_name

        if possible_paths is None:
            self._possible_paths = default_possible_paths(self.os_name)
        else:
            self._possible_paths = [Path(p) for p in possible_paths]

    @property
    def possible_paths(self) -> List[Path]:
        """Copy of the current candidate list."""
        return list(self._possible_paths)

    def set_possible_paths(self, paths: Iterable[Union[str, Path]]) -> None:
        """Replace the candidate list."""
        self._possible_paths = [Path(p) for p in paths]

    def add_possible_path(self, path: Union[str, Path]) -> None:
        """Append a candidate with the lowest priority."""
        self._possible_paths.append(Path(path))

    def locations(self) -> List[ExecutableLocation]:
        """Candidate list as ExecutableLocation objects (validity is live)."""
        return [ExecutableLocation(p, self.os_name) for p in self._possible_paths]

    def detect(self) -> Path:
        """
        Find the Composer executable.

        Returns:
            Path to the first executable found

        Raises:
            ExecutableNotFoundError: If no strategy finds an executable
        """
        env_path = os.environ.get(self.env_var)
        if env_path:
            if is_executable(env_path, self.os_name):
                logger.debug(f"Using {self.env_var}={env_path}")
                return Path(env_path)
            logger.debug(f"{self.env_var}={env_path} is not an executable file")

        for location in self.locations():
            if location.is_valid:
                logger.debug(f"Found Composer at candidate path {location}")
                return location.path

        found = self._lookup_in_path()
        if found is not None:
            logger.debug(f"Found Composer in PATH: {found}")
            return found

        raise ExecutableNotFoundError(
            f"Composer executable not found (checked {self.env_var}, "
            f"{len(self._possible_paths)} candidate paths and PATH)"
        )

    def is_installed(self) -> bool:
        """Check whether detect() finds an executable."""
        try:
            self.detect()
            return True
        except ExecutableNotFoundError:
            return False

    def _lookup_in_path(self) -> Optional[Path]:
        """
        Ask the OS shell lookup tool for the executable.

        Returns:
            Path reported by which/where if it is executable, else None
        """
        tool = "where" if is_windows(self.os_name) else "which"

        try:
            result = subprocess.run(
                [tool, self.executable_name],
                capture_output=True,
                text=True,
                timeout=LOOKUP_TIMEOUT_SECONDS,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug(f"{tool} lookup failed: {e}")
            return None

        if result.returncode != 0:
            return None

        # `where` lists every match, one per line
        for line in result.stdout.splitlines():
            candidate = line.strip()
            if candidate:
                return Path(candidate) if is_executable(candidate, self.os_name) else None

        return None


__all__ = [
    "ENV_OVERRIDE",
    "EXECUTABLE_NAME",
    "ExecutableLocation",
    "Detector",
]
