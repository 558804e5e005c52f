"""
Run command implementation.

Runs Composer with the remaining arguments and prints its combined output.
"""

import logging
import sys

from composerkit.cli.utils import load_cli_config, safe_print
from composerkit.composer import Composer
from composerkit.core.exceptions import CommandExecutionError

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the run command.

    Returns:
        0 on success, 1 if Composer failed
    """
    options = load_cli_config(args).composer_options()
    if args.working_dir:
        options.working_dir = args.working_dir

    composer = Composer(options)
    composer_args = list(args.composer_args)
    # argparse.REMAINDER keeps a leading "--" separator
    if composer_args and composer_args[0] == "--":
        composer_args = composer_args[1:]

    try:
        if args.timeout:
            output = composer.run_with_timeout(args.timeout, *composer_args)
        else:
            output = composer.run(*composer_args)
    except CommandExecutionError as e:
        if e.output:
            safe_print(e.output.rstrip(), file=sys.stderr)
        logger.error(
            f"composer {' '.join(composer_args)} failed "
            f"(exit status {e.returncode})"
        )
        return 1

    if output:
        safe_print(output.rstrip())
    return 0
