"""
File system utilities for composerkit.

This module provides:
- The executable probe used by the detector
- Write-permission verification for install directories
- Atomic file creation with permission bits (used for wrapper scripts)
"""

import os
import stat
import tempfile
from pathlib import Path
from typing import Optional, Union

from composerkit.core.exceptions import InsufficientRightsError
from composerkit.core.platform import is_windows


# ============================================================================
# Executable Probe
# ============================================================================


def is_executable(path: Union[str, Path], os_name: Optional[str] = None) -> bool:
    """
    Check whether a path is a regular, executable file.

    On POSIX at least one execute bit must be set. On Windows a regular file
    is enough, since executables are identified by extension there.

    Args:
        path: Path to probe
        os_name: OS identifier whose semantics apply (detected if None)

    Returns:
        True if the path is an executable file

    Example:
        >>> is_executable('/usr/bin/env')
        True
    """
    if not path:
        return False

    try:
        info = os.stat(path)
    except (OSError, ValueError):
        return False

    if not stat.S_ISREG(info.st_mode):
        return False

    if is_windows(os_name):
        return True

    return bool(info.st_mode & 0o111)


# ============================================================================
# Directory Permissions
# ============================================================================


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists (idempotent).

    Args:
        path: Directory path

    Returns:
        Path object

    Example:
        >>> ensure_directory('/tmp/composer')
        PosixPath('/tmp/composer')
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def check_write_permission(path: Union[str, Path]) -> None:
    """
    Verify that a directory exists and is writable.

    The directory is created if missing, then a probe file is written and
    removed again.

    Args:
        path: Directory path to verify

    Raises:
        InsufficientRightsError: If the directory cannot be created or written
    """
    path = Path(path)

    try:
        ensure_directory(path)
    except OSError as e:
        raise InsufficientRightsError(f"Cannot create directory {path}: {e}") from e

    probe = path / f".write-test-{os.getpid()}"
    try:
        probe.touch()
        probe.unlink()
    except OSError as e:
        raise InsufficientRightsError(f"Directory {path} is not writable: {e}") from e


# ============================================================================
# Safe File Operations
# ============================================================================


def atomic_write(
    file_path: Union[str, Path], content: Union[str, bytes], encoding: str = "utf-8"
) -> None:
    """
    Write file atomically using temp file + rename.

    The file is never left in a partially-written state. If the write fails,
    the original file (if any) remains unchanged.

    Args:
        file_path: Path to write to
        content: Content to write (string or bytes)
        encoding: Text encoding (used only for string content)
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    # Temp file in the same directory keeps the rename on one filesystem
    temp_fd, temp_path_str = tempfile.mkstemp(
        dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
    )
    temp_path = Path(temp_path_str)

    try:
        if isinstance(content, str):
            with open(temp_fd, "w", encoding=encoding) as f:
                f.write(content)
        else:
            with open(temp_fd, "wb") as f:
                f.write(content)

        temp_path.replace(file_path)

    except Exception:
        try:
            temp_path.unlink(missing_ok=True)
        except OSError:
            pass
        raise


def create_file_with_content(
    file_path: Union[str, Path], content: Union[str, bytes], mode: int = 0o644
) -> Path:
    """
    Create or replace a file with the given content and permission bits.

    Parent directories are created as needed.

    Args:
        file_path: File to create
        content: File content
        mode: Permission bits to apply (e.g. 0o755 for scripts)

    Returns:
        Path to the written file

    Example:
        >>> create_file_with_content('/tmp/hello', '#!/bin/sh\\necho hi\\n', 0o755)
    """
    file_path = Path(file_path)
    atomic_write(file_path, content)
    os.chmod(file_path, mode)
    return file_path


def remove_file(path: Union[str, Path]) -> None:
    """Remove a file if it exists."""
    Path(path).unlink(missing_ok=True)


__all__ = [
    "is_executable",
    "ensure_directory",
    "check_write_permission",
    "atomic_write",
    "create_file_with_content",
    "remove_file",
]
