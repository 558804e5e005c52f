"""
Centralized exception hierarchy for composerkit.

Every failure raised by the detector, the installers and the invocation core
derives from ComposerKitError, so callers can catch the whole family or a
single kind.
"""

from typing import Optional


# ============================================================================
# Base Exceptions
# ============================================================================


class ComposerKitError(Exception):
    """Base exception for all composerkit errors."""

    pass


# ============================================================================
# Detection Exceptions
# ============================================================================


class ExecutableNotFoundError(ComposerKitError):
    """Raised when no Composer executable could be located by any strategy."""

    pass


# ============================================================================
# Installation Exceptions
# ============================================================================


class InstallationError(ComposerKitError):
    """Raised when the bootstrap download or execution fails."""

    def __init__(self, message: str, output: str = ""):
        self.output = output
        if output:
            message = f"{message}: {output.strip()}"
        super().__init__(message)


class InsufficientRightsError(ComposerKitError):
    """Raised when the install directory is not writable and elevation is off."""

    pass


class UnsupportedPlatformError(ComposerKitError):
    """Raised when no installer exists for the running operating system."""

    def __init__(self, os_name: str):
        self.os_name = os_name
        super().__init__(f"Unsupported operating system: {os_name}")


class DownloadError(ComposerKitError):
    """Raised when a download fails (transport, status, proxy or write error)."""

    pass


# ============================================================================
# Invocation Exceptions
# ============================================================================


class CommandExecutionError(ComposerKitError):
    """
    Raised when a Composer subprocess exits non-zero or cannot be started.

    The captured output is kept on the exception so callers can still show
    partial diagnostics.
    """

    def __init__(
        self, command: str, output: str = "", returncode: Optional[int] = None
    ):
        self.command = command
        self.output = output
        self.returncode = returncode

        if returncode is not None:
            message = f"Command '{command}' failed with exit status {returncode}"
        else:
            message = f"Command '{command}' could not be executed"
        if output:
            message += f", output: {output}"
        super().__init__(message)


class ContextError(ComposerKitError):
    """Base exception for cancelled or expired run contexts."""

    pass


class ContextCancelledError(ContextError):
    """Raised when a run context was cancelled."""

    pass


class DeadlineExceededError(ContextError, TimeoutError):
    """Raised when a run context deadline expired."""

    pass


# ============================================================================
# Configuration and Manifest Exceptions
# ============================================================================


class ConfigError(ComposerKitError):
    """Configuration parsing or validation error."""

    pass


class ManifestError(ComposerKitError):
    """Raised when composer.json cannot be read or written."""

    pass
