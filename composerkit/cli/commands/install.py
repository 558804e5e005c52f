"""
Install command implementation.
"""

import logging

from composerkit.cli.utils import load_cli_config, safe_print
from composerkit.installer.installer import Installer

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the install command.

    Settings come from the configuration file; command-line flags override
    them.
    """
    config = load_cli_config(args).installer_config()

    changes = {}
    if args.install_path:
        changes["install_path"] = args.install_path
    if args.sudo:
        changes["use_sudo"] = True
    if args.no_brew:
        changes["prefer_brew_on_mac"] = False
    if changes:
        config = config.with_changes(**changes)

    logger.debug(f"Installer configuration: {config}")
    Installer(config).install()

    safe_print(f"Composer installed to {config.install_path}")
    return 0
