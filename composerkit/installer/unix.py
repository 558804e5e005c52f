"""Installer for the BSD family and other Unix-like systems."""

from composerkit.installer.base import PosixInstaller


class UnixInstaller(PosixInstaller):
    """Install Composer on FreeBSD, OpenBSD, NetBSD and DragonFly."""

    name = "unix"


__all__ = ["UnixInstaller"]
