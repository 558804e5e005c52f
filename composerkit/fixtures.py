"""
Pre-programmed command responses.

A FixtureTable maps a command string (the arguments joined with single
spaces) to a recorded output and an optional exception. The invocation core
consults the table before spawning a process, so tests can drive the full
Composer call path without a real Composer.

Lookup order: the exact command string, then the first argument alone, so
`setup_mock_output("require", ...)` answers every `require ...` call.
"""

import logging
import threading
from typing import Dict, Optional, Sequence, Tuple, Union

from composerkit.core.exceptions import ComposerKitError

logger = logging.getLogger(__name__)

FixtureEntry = Tuple[str, Optional[BaseException]]


def command_key(args: Sequence[str]) -> str:
    """Canonical fixture key for an argument vector."""
    return " ".join(args)


class FixtureTable:
    """
    Thread-safe table of recorded command responses.

    Example:
        table = FixtureTable()
        table.set("--version", "Composer version 2.5.0 2023-01-01")
        table.lookup(["--version"])  # ("Composer version 2.5.0 ...", None)
    """

    def __init__(self):
        self._entries: Dict[str, FixtureEntry] = {}
        self._lock = threading.Lock()

    def set(
        self,
        command: str,
        output: str,
        error: Optional[Union[BaseException, str]] = None,
    ) -> None:
        """
        Record the response for a command.

        Args:
            command: Space-joined arguments (or a single first argument)
            output: Output returned on a hit
            error: Exception raised on a hit; a string is wrapped in
                   ComposerKitError
        """
        if isinstance(error, str):
            error = ComposerKitError(error)
        with self._lock:
            self._entries[command] = (output, error)

    def remove(self, command: str) -> None:
        with self._lock:
            self._entries.pop(command, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def lookup(self, args: Sequence[str]) -> Optional[FixtureEntry]:
        """
        Find the recorded response for an argument vector.

        Returns:
            (output, error) tuple, or None when nothing matches
        """
        key = command_key(args)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None and args:
                entry = self._entries.get(args[0])
        if entry is not None:
            logger.debug(f"Fixture hit for '{key}'")
        return entry

    def __contains__(self, command: str) -> bool:
        with self._lock:
            return command in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


# Process-wide table used when a Composer is not given its own
DEFAULT_FIXTURES = FixtureTable()


def setup_mock_output(
    command: str, output: str, error: Optional[Union[BaseException, str]] = None
) -> None:
    """Record a response in the process-wide fixture table."""
    DEFAULT_FIXTURES.set(command, output, error)


def clear_mock_outputs() -> None:
    """Remove every response from the process-wide fixture table."""
    DEFAULT_FIXTURES.clear()


__all__ = [
    "FixtureEntry",
    "FixtureTable",
    "DEFAULT_FIXTURES",
    "command_key",
    "setup_mock_output",
    "clear_mock_outputs",
]
