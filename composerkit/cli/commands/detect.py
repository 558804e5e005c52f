"""
Detect command implementation.

Prints the Composer executable the detector resolves, or the candidate list
with --list.
"""

import logging

from composerkit.cli.utils import safe_print
from composerkit.core.exceptions import ExecutableNotFoundError
from composerkit.core.platform import detect_platform
from composerkit.detector.detector import Detector

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the detect command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 if Composer was found)
    """
    platform = detect_platform()
    logger.debug(f"Platform: {platform}")

    detector = Detector(os_name=platform.os)

    if args.list:
        for location in detector.locations():
            marker = "[OK]" if location.is_valid else "[--]"
            safe_print(f"{marker} {location}")

    try:
        path = detector.detect()
    except ExecutableNotFoundError as e:
        logger.error(str(e))
        return 1

    safe_print(str(path))
    return 0
