"""
Shared utilities for CLI commands.
"""

import logging

from composerkit.config import ComposerKitConfig, load_config

logger = logging.getLogger(__name__)


def load_cli_config(args) -> ComposerKitConfig:
    """
    Load the configuration named by --config, or ./composerkit.yaml if present.

    Raises:
        ConfigError: If the file is invalid, or --config names a missing file
    """
    config_path = getattr(args, "config", None)
    return load_config(config_path, required=config_path is not None)


def safe_print(message: str, file=None):
    """
    Print message, replacing characters the console cannot encode.

    Composer output may contain characters a Windows console code page
    cannot represent.
    """
    try:
        print(message, file=file)
    except UnicodeEncodeError:
        print(message.encode("ascii", errors="replace").decode("ascii"), file=file)
