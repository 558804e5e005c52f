"""
Version command implementation.
"""

from composerkit.cli.utils import load_cli_config, safe_print
from composerkit.composer import Composer


def run(args) -> int:
    """Print the version of the resolved Composer."""
    composer = Composer(load_cli_config(args).composer_options())
    safe_print(composer.get_version())
    return 0
