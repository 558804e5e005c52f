"""
composer.json helpers.

Reads and writes a project's composer.json as a plain dictionary. Updates
run under a file lock next to the manifest so concurrent editors do not lose
each other's changes; the write itself is atomic.
"""

import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union

from filelock import FileLock, Timeout

from composerkit.core.exceptions import ManifestError
from composerkit.core.filesystem import atomic_write

logger = logging.getLogger(__name__)

MANIFEST_NAME = "composer.json"
LOCK_SUFFIX = ".lock"
DEFAULT_LOCK_TIMEOUT = 30


def manifest_path(project_dir: Optional[Union[str, Path]] = None) -> Path:
    """Path of composer.json in project_dir (current directory if empty)."""
    return Path(project_dir or Path.cwd()) / MANIFEST_NAME


def read_manifest(project_dir: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load composer.json.

    Raises:
        ManifestError: If the file is missing, unreadable or not a JSON object
    """
    path = manifest_path(project_dir)
    if not path.exists():
        raise ManifestError(f"composer.json not found in {path.parent}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ManifestError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise ManifestError(f"Cannot read {path}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(f"{path} must contain a JSON object")

    return data


def write_manifest(
    data: Dict[str, Any], project_dir: Optional[Union[str, Path]] = None
) -> Path:
    """
    Write composer.json with Composer's 4-space indentation.

    Raises:
        ManifestError: If the file cannot be written
    """
    path = manifest_path(project_dir)
    content = json.dumps(data, indent=4, ensure_ascii=False) + "\n"
    try:
        atomic_write(path, content)
    except OSError as e:
        raise ManifestError(f"Cannot write {path}: {e}") from e
    logger.debug(f"Wrote {path}")
    return path


@contextmanager
def update_manifest(
    project_dir: Optional[Union[str, Path]] = None,
    lock_timeout: float = DEFAULT_LOCK_TIMEOUT,
) -> Iterator[Dict[str, Any]]:
    """
    Read-modify-write composer.json under a file lock.

    The yielded dictionary is written back when the block exits without an
    exception.

    Example:
        with update_manifest("/srv/app") as manifest:
            manifest["minimum-stability"] = "stable"

    Raises:
        ManifestError: If the lock cannot be acquired or the file is invalid
    """
    path = manifest_path(project_dir)
    lock = FileLock(str(path) + LOCK_SUFFIX, timeout=lock_timeout)

    try:
        with lock:
            data = read_manifest(project_dir)
            yield data
            write_manifest(data, project_dir)
    except Timeout as e:
        raise ManifestError(
            f"Could not lock {path} within {lock_timeout} seconds"
        ) from e


def _section(dev: bool) -> str:
    return "require-dev" if dev else "require"


def add_require(
    package: str,
    version: str,
    dev: bool = False,
    project_dir: Optional[Union[str, Path]] = None,
) -> None:
    """Add or replace a constraint in require (or require-dev)."""
    with update_manifest(project_dir) as manifest:
        manifest.setdefault(_section(dev), {})[package] = version


def remove_require(
    package: str, dev: bool = False, project_dir: Optional[Union[str, Path]] = None
) -> bool:
    """
    Remove a package from require (or require-dev).

    Returns:
        True if the package was listed
    """
    with update_manifest(project_dir) as manifest:
        requirements = manifest.get(_section(dev), {})
        if package not in requirements:
            return False
        del requirements[package]
        return True


__all__ = [
    "MANIFEST_NAME",
    "manifest_path",
    "read_manifest",
    "write_manifest",
    "update_manifest",
    "add_require",
    "remove_require",
]
