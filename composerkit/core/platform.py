"""
Platform identification for composerkit.

The detector and the installer factory both branch on the running operating
system. They key on the lowercase value of platform.system() ('windows',
'darwin', 'linux', 'freebsd', ...), resolved at call time so tests can
substitute any OS identifier.

Usage:
    from composerkit.core.platform import detect_os, detect_platform

    if detect_os() == "darwin":
        print("Homebrew may be available")

    print(detect_platform().platform_string())  # e.g. 'linux-x64'
"""

import functools
import platform
from dataclasses import dataclass
from typing import Optional

# Operating systems handled by the generic Unix installer
BSD_FAMILY = ("freebsd", "openbsd", "netbsd", "dragonfly")

# All operating systems composerkit can install on
SUPPORTED_OS = ("windows", "darwin", "linux") + BSD_FAMILY


@dataclass
class PlatformInfo:
    """
    Basic platform information.

    Attributes:
        os: Operating system identifier ('windows', 'darwin', 'linux', ...)
        arch: CPU architecture ('x64', 'arm64', 'x86', 'arm')
        os_version: OS release string
    """

    os: str
    arch: str
    os_version: str

    def platform_string(self) -> str:
        """
        Get canonical platform string.

        Example:
            >>> PlatformInfo('linux', 'x64', '6.1').platform_string()
            'linux-x64'
        """
        return f"{self.os}-{self.arch}"

    def __str__(self) -> str:
        return f"{self.os}-{self.arch} v{self.os_version}"


def detect_os() -> str:
    """
    Detect the running operating system.

    Unlike detect_platform() this is never cached.

    Returns:
        Lowercase OS identifier, e.g. 'windows', 'darwin', 'linux', 'freebsd'
    """
    return platform.system().lower()


def is_windows(os_name: Optional[str] = None) -> bool:
    """
    Check whether an OS identifier refers to Windows.

    Args:
        os_name: OS identifier (detected if None)
    """
    return (os_name or detect_os()) == "windows"


def is_supported_os(os_name: Optional[str] = None) -> bool:
    """Check whether composerkit has an installer for the OS."""
    return (os_name or detect_os()) in SUPPORTED_OS


@functools.lru_cache(maxsize=1)
def detect_platform() -> PlatformInfo:
    """
    Detect current platform information.

    This function is cached - it only runs detection once per process.
    """
    return PlatformInfo(
        os=detect_os(), arch=_detect_architecture(), os_version=platform.release()
    )


def _detect_architecture() -> str:
    """
    Detect CPU architecture.

    Returns:
        Normalized architecture: 'x64', 'arm64', 'x86', 'arm'
    """
    machine = platform.machine().lower()

    if machine in ("x86_64", "amd64", "x64"):
        return "x64"
    elif machine in ("aarch64", "arm64"):
        return "arm64"
    elif machine in ("i386", "i686", "x86"):
        return "x86"
    elif machine.startswith("arm"):
        return "arm"
    else:
        return machine


def clear_platform_cache():
    """Clear the platform detection cache."""
    detect_platform.cache_clear()


__all__ = [
    "BSD_FAMILY",
    "SUPPORTED_OS",
    "PlatformInfo",
    "detect_os",
    "is_windows",
    "is_supported_os",
    "detect_platform",
    "clear_platform_cache",
]
