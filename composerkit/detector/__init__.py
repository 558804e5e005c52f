"""
Composer executable detection.

Provides the Detector and the per-platform candidate path lists it seeds
itself with.
"""

from .detector import Detector, ExecutableLocation, ENV_OVERRIDE
from .paths import (
    PlatformPaths,
    UnixPaths,
    DarwinPaths,
    WindowsPaths,
    get_platform_paths,
    default_possible_paths,
)

__all__ = [
    "Detector",
    "ExecutableLocation",
    "ENV_OVERRIDE",
    "PlatformPaths",
    "UnixPaths",
    "DarwinPaths",
    "WindowsPaths",
    "get_platform_paths",
    "default_possible_paths",
]
