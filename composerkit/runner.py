"""
Invocation core.

run_command() executes one Composer invocation: fixture lookup first, then a
subprocess with combined stdout/stderr, bounded by a RunContext. The process
is killed and reaped as soon as the context is cancelled or its deadline
passes.
"""

import logging
import os
import signal
import subprocess
from pathlib import Path
from typing import Mapping, Optional, Sequence, Union

from composerkit.core.context import RunContext
from composerkit.core.exceptions import CommandExecutionError
from composerkit.fixtures import DEFAULT_FIXTURES, FixtureTable, command_key

logger = logging.getLogger(__name__)

# Upper bound on how long a cancellation can go unnoticed
POLL_INTERVAL_SECONDS = 0.05

_POSIX = os.name == "posix"


def run_command(
    executable: Union[str, Path],
    args: Sequence[str],
    working_dir: Optional[Union[str, Path]] = None,
    env: Optional[Mapping[str, str]] = None,
    context: Optional[RunContext] = None,
    fixtures: Optional[FixtureTable] = None,
) -> str:
    """
    Run Composer and return its combined output.

    Args:
        executable: Composer executable
        args: Arguments passed to Composer
        working_dir: Working directory (inherited if empty)
        env: Complete child environment (inherited if empty)
        context: Deadline and cancellation (none if None)
        fixtures: Fixture table (process-wide table if None)

    Returns:
        Combined stdout and stderr, decoded as UTF-8

    Raises:
        CommandExecutionError: On non-zero exit or when the process cannot start
        ContextCancelledError: If the context is cancelled
        DeadlineExceededError: If the context deadline passes
        Exception: The recorded error of a matching fixture (wrapped in
                   CommandExecutionError when the fixture also recorded
                   output)

    Example:
        >>> ctx = RunContext(timeout=30)
        >>> run_command("/usr/local/bin/composer", ["--version"], context=ctx)
        'Composer version 2.5.0 2023-01-01 ...'
    """
    args = list(args)
    key = command_key(args)
    fixtures = fixtures if fixtures is not None else DEFAULT_FIXTURES

    entry = fixtures.lookup(args)
    if entry is not None:
        output, error = entry
        if error is not None:
            raise _fixture_error(key, output, error)
        return output

    context = context or RunContext.background()
    error = context.error()
    if error is not None:
        raise error

    cmd = [str(executable), *args]
    logger.debug(f"Running: {' '.join(cmd)}")

    try:
        process = subprocess.Popen(
            cmd,
            cwd=str(working_dir) if working_dir else None,
            env=dict(env) if env else None,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            start_new_session=_POSIX,
        )
    except OSError as e:
        raise CommandExecutionError(key, str(e)) from e

    with process:
        while True:
            try:
                stdout, _ = process.communicate(timeout=_next_wait(context))
                break
            except subprocess.TimeoutExpired:
                error = context.error()
                if error is not None:
                    _kill(process)
                    logger.debug(f"Killed '{key}': {error}")
                    raise error

    output = (stdout or b"").decode("utf-8", errors="replace")

    if process.returncode != 0:
        raise CommandExecutionError(key, output, process.returncode)

    return output


def _fixture_error(key: str, output: str, error: BaseException) -> BaseException:
    """
    Build the exception for a fixture hit that recorded an error.

    Recorded output travels on CommandExecutionError.output, as it does for a
    failed process. The stored instance is shared between lookups, so its
    traceback is reset before every raise.
    """
    if output and not getattr(error, "output", ""):
        if isinstance(error, CommandExecutionError):
            wrapped = CommandExecutionError(error.command, output, error.returncode)
        else:
            wrapped = CommandExecutionError(key, output)
        wrapped.__cause__ = error
        return wrapped
    return error.with_traceback(None)


def _kill(process: subprocess.Popen) -> None:
    """Kill the process and everything it spawned, then reap it."""
    if _POSIX:
        try:
            os.killpg(process.pid, signal.SIGKILL)
        except OSError:
            process.kill()
    else:
        process.kill()
    # Orphaned grandchildren may still hold the pipe open; do not read it
    process.wait()


def _next_wait(context: RunContext) -> float:
    remaining = context.remaining()
    if remaining is None:
        return POLL_INTERVAL_SECONDS
    return max(0.0, min(POLL_INTERVAL_SECONDS, remaining))


__all__ = ["POLL_INTERVAL_SECONDS", "run_command"]
