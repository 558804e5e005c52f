"""
Core functionality for composerkit.

This package contains the foundational modules that the detector, the
installers and the invocation core depend on.
"""

from .context import RunContext

from .platform import (
    PlatformInfo,
    detect_os,
    detect_platform,
    is_windows,
    is_supported_os,
    clear_platform_cache,
)

from .filesystem import (
    is_executable,
    ensure_directory,
    check_write_permission,
    create_file_with_content,
)

from .exceptions import (
    ComposerKitError,
    ExecutableNotFoundError,
    InstallationError,
    InsufficientRightsError,
    UnsupportedPlatformError,
    DownloadError,
    CommandExecutionError,
    ContextError,
    ContextCancelledError,
    DeadlineExceededError,
    ConfigError,
    ManifestError,
)

__all__ = [
    "RunContext",
    "PlatformInfo",
    "detect_os",
    "detect_platform",
    "is_windows",
    "is_supported_os",
    "clear_platform_cache",
    "is_executable",
    "ensure_directory",
    "check_write_permission",
    "create_file_with_content",
    "ComposerKitError",
    "ExecutableNotFoundError",
    "InstallationError",
    "InsufficientRightsError",
    "UnsupportedPlatformError",
    "DownloadError",
    "CommandExecutionError",
    "ContextError",
    "ContextCancelledError",
    "DeadlineExceededError",
    "ConfigError",
    "ManifestError",
]
