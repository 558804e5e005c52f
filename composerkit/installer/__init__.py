"""
Composer installation.

Installer picks a PlatformInstaller for the running OS; all variants share
the permission-check, download, bootstrap and wrapper sequence.
"""

from .config import InstallerConfig, default_config, default_install_path
from .base import PlatformInstaller, PosixInstaller
from .linux import LinuxInstaller
from .macos import MacOSInstaller
from .unix import UnixInstaller
from .windows import WindowsInstaller
from .installer import Installer, get_platform_installer

__all__ = [
    "InstallerConfig",
    "default_config",
    "default_install_path",
    "PlatformInstaller",
    "PosixInstaller",
    "LinuxInstaller",
    "MacOSInstaller",
    "UnixInstaller",
    "WindowsInstaller",
    "Installer",
    "get_platform_installer",
]
