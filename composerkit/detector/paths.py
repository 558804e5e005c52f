"""
Per-platform candidate locations for the Composer executable.

The detector only depends on the PlatformPaths interface; the concrete
implementation is picked at runtime from the OS identifier.
"""

import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Type

from composerkit.core.platform import detect_os

# Paths relative to the current directory, probed last on every platform
LOCAL_PATHS = ("./composer", "./composer.phar")


class PlatformPaths(ABC):
    """Source of likely Composer locations for one operating system."""

    @abstractmethod
    def paths(self) -> List[Path]:
        """
        Get candidate paths in priority order.

        Environment variables are read on every call.
        """
        pass


class UnixPaths(PlatformPaths):
    """Linux and other Unix-like systems."""

    SYSTEM_PATHS = ("/usr/local/bin/composer", "/usr/bin/composer")

    def paths(self) -> List[Path]:
        home = Path.home()
        return [Path(p) for p in self.SYSTEM_PATHS] + [
            home / ".composer" / "vendor" / "bin" / "composer",
            home / "composer.phar",
        ]


class DarwinPaths(UnixPaths):
    """macOS, including the Apple Silicon Homebrew prefix."""

    SYSTEM_PATHS = (
        "/usr/local/bin/composer",
        "/usr/bin/composer",
        "/opt/homebrew/bin/composer",
    )


class WindowsPaths(PlatformPaths):
    """Windows installer and per-user locations."""

    ENV_DIRS = ("APPDATA", "ProgramFiles", "ProgramFiles(x86)")

    def paths(self) -> List[Path]:
        candidates = []
        for var in self.ENV_DIRS:
            base = os.environ.get(var)
            # Skip unset variables instead of probing a relative path
            if base:
                candidates.append(Path(base) / "Composer" / "composer.phar")

        candidates.extend(
            [Path("composer.phar"), Path("composer.bat"), Path("composer")]
        )
        return candidates


_PLATFORM_PATHS: Dict[str, Type[PlatformPaths]] = {
    "windows": WindowsPaths,
    "darwin": DarwinPaths,
}


def get_platform_paths(os_name: Optional[str] = None) -> PlatformPaths:
    """
    Select the PlatformPaths implementation for an OS.

    Args:
        os_name: OS identifier (detected if None); unknown values use UnixPaths
    """
    os_name = os_name or detect_os()
    return _PLATFORM_PATHS.get(os_name, UnixPaths)()


def default_possible_paths(os_name: Optional[str] = None) -> List[Path]:
    """
    Build the default candidate list: platform paths, then local paths.

    Example:
        >>> default_possible_paths("linux")[0]
        PosixPath('/usr/local/bin/composer')
    """
    paths = get_platform_paths(os_name).paths()
    paths.extend(Path(p) for p in LOCAL_PATHS)
    return paths


__all__ = [
    "LOCAL_PATHS",
    "PlatformPaths",
    "UnixPaths",
    "DarwinPaths",
    "WindowsPaths",
    "get_platform_paths",
    "default_possible_paths",
]
