"""
Composer environment variables.

Helpers that stage COMPOSER_* variables in the current process environment.
Child processes inherit them unless a Composer instance was given an
explicit environment. Values are passed through uninterpreted.
"""

import logging
import os
import shutil
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from composerkit.core.exceptions import ExecutableNotFoundError

logger = logging.getLogger(__name__)


class EnvironmentVariable(str, Enum):
    """Environment variables understood by Composer."""

    COMPOSER_HOME = "COMPOSER_HOME"
    CACHE_DIR = "COMPOSER_CACHE_DIR"
    PROCESS_TIMEOUT = "COMPOSER_PROCESS_TIMEOUT"
    ALLOW_SUPERUSER = "COMPOSER_ALLOW_SUPERUSER"
    MEMORY_LIMIT = "COMPOSER_MEMORY_LIMIT"
    DISABLE_XDEBUG_WARN = "COMPOSER_DISABLE_XDEBUG_WARN"
    NO_INTERACTION = "COMPOSER_NO_INTERACTION"
    VENDOR_DIR = "COMPOSER_VENDOR_DIR"
    BIN_DIR = "COMPOSER_BIN_DIR"
    CAFILE = "COMPOSER_CAFILE"
    NO_DEV = "COMPOSER_NO_DEV"
    DISCARD_CHANGES = "COMPOSER_DISCARD_CHANGES"
    HTACCESS_PROTECT = "COMPOSER_HTACCESS_PROTECT"
    MIRROR_PATH_REPOS = "COMPOSER_MIRROR_PATH_REPOS"


def _name(variable: Union[EnvironmentVariable, str]) -> str:
    return variable.value if isinstance(variable, EnvironmentVariable) else variable


def set_env_variable(variable: Union[EnvironmentVariable, str], value: str) -> None:
    """Set a Composer variable in os.environ."""
    name = _name(variable)
    logger.debug(f"Setting {name}={value}")
    os.environ[name] = value


def get_env_variable(variable: Union[EnvironmentVariable, str]) -> str:
    """Get a Composer variable from os.environ ('' if unset)."""
    return os.environ.get(_name(variable), "")


def unset_env_variable(variable: Union[EnvironmentVariable, str]) -> None:
    os.environ.pop(_name(variable), None)


def set_process_timeout(seconds: int) -> None:
    set_env_variable(EnvironmentVariable.PROCESS_TIMEOUT, str(seconds))


def enable_superuser() -> None:
    """Allow Composer to run as root."""
    set_env_variable(EnvironmentVariable.ALLOW_SUPERUSER, "1")


def disable_superuser() -> None:
    unset_env_variable(EnvironmentVariable.ALLOW_SUPERUSER)


def set_memory_limit(limit: str) -> None:
    """Set the PHP memory limit Composer runs with (e.g. '2G', '-1')."""
    set_env_variable(EnvironmentVariable.MEMORY_LIMIT, limit)


def disable_interaction() -> None:
    set_env_variable(EnvironmentVariable.NO_INTERACTION, "1")


def enable_interaction() -> None:
    unset_env_variable(EnvironmentVariable.NO_INTERACTION)


def set_vendor_dir(path: Union[str, Path]) -> None:
    set_env_variable(EnvironmentVariable.VENDOR_DIR, str(path))


def set_bin_dir(path: Union[str, Path]) -> None:
    set_env_variable(EnvironmentVariable.BIN_DIR, str(path))


def set_ca_file(path: Union[str, Path]) -> None:
    set_env_variable(EnvironmentVariable.CAFILE, str(path))


def disable_dev() -> None:
    """Skip require-dev packages in install/update."""
    set_env_variable(EnvironmentVariable.NO_DEV, "1")


def enable_dev() -> None:
    unset_env_variable(EnvironmentVariable.NO_DEV)


def set_discard_changes(value: str) -> None:
    """Set how Composer treats modified vendor packages ('true', 'false', 'stash')."""
    set_env_variable(EnvironmentVariable.DISCARD_CHANGES, value)


def get_composer_path(search_path: Optional[str] = None) -> Path:
    """
    Look up `composer`, then `composer.phar`, on PATH.

    Args:
        search_path: PATH string to search (os.environ['PATH'] if None)

    Raises:
        ExecutableNotFoundError: If neither name is on PATH
    """
    for name in ("composer", "composer.phar"):
        found = shutil.which(name, path=search_path)
        if found:
            return Path(found)
    raise ExecutableNotFoundError("Neither composer nor composer.phar is on PATH")


__all__ = [
    "EnvironmentVariable",
    "set_env_variable",
    "get_env_variable",
    "unset_env_variable",
    "set_process_timeout",
    "enable_superuser",
    "disable_superuser",
    "set_memory_limit",
    "disable_interaction",
    "enable_interaction",
    "set_vendor_dir",
    "set_bin_dir",
    "set_ca_file",
    "disable_dev",
    "enable_dev",
    "set_discard_changes",
    "get_composer_path",
]
