"""Linux installer."""

from composerkit.installer.base import PosixInstaller


class LinuxInstaller(PosixInstaller):
    """
    Install Composer on Linux.

    Uses the shared bootstrap sequence, elevating through sudo when the
    install directory is not writable and use_sudo is set.
    """

    name = "linux"


__all__ = ["LinuxInstaller"]
