"""
composerkit - locate, install and run PHP Composer.

Example:
    from composerkit import Composer, ComposerOptions

    composer = Composer(ComposerOptions(working_dir="/srv/app", auto_install=False))
    composer.require_package("monolog/monolog", "^3.0")
"""

try:
    from importlib.metadata import version

    __version__ = version("composerkit")
except Exception:
    __version__ = "0.1.0"

from composerkit.composer import Composer, ComposerOptions, default_options
from composerkit.core.context import RunContext
from composerkit.core.exceptions import (
    ComposerKitError,
    ExecutableNotFoundError,
    InstallationError,
    InsufficientRightsError,
    UnsupportedPlatformError,
    DownloadError,
    CommandExecutionError,
    ContextCancelledError,
    DeadlineExceededError,
    ConfigError,
    ManifestError,
)
from composerkit.detector import Detector
from composerkit.fixtures import FixtureTable, setup_mock_output, clear_mock_outputs
from composerkit.installer import Installer, InstallerConfig, default_config

__all__ = [
    "__version__",
    "Composer",
    "ComposerOptions",
    "default_options",
    "RunContext",
    "ComposerKitError",
    "ExecutableNotFoundError",
    "InstallationError",
    "InsufficientRightsError",
    "UnsupportedPlatformError",
    "DownloadError",
    "CommandExecutionError",
    "ContextCancelledError",
    "DeadlineExceededError",
    "ConfigError",
    "ManifestError",
    "Detector",
    "FixtureTable",
    "setup_mock_output",
    "clear_mock_outputs",
    "Installer",
    "InstallerConfig",
    "default_config",
]
