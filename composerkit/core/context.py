"""
Run contexts for bounding and cancelling Composer invocations.

A RunContext carries an optional deadline and a cancellation flag. The
invocation core polls it while a subprocess is running and kills the process
as soon as the context is cancelled or expires.

Usage:
    from composerkit.core.context import RunContext

    with RunContext(timeout=30) as ctx:
        output = composer.run_with_context(ctx, "install")

    # Cancel from another thread
    ctx = RunContext()
    threading.Timer(5, ctx.cancel).start()
    composer.run_with_context(ctx, "update")
"""

import threading
import time
from typing import Optional

from composerkit.core.exceptions import (
    ContextCancelledError,
    ContextError,
    DeadlineExceededError,
)


class RunContext:
    """
    Deadline and cancellation signal for a single invocation.

    Attributes:
        deadline: Monotonic time after which the context is expired, or None
    """

    def __init__(
        self, timeout: Optional[float] = None, parent: Optional["RunContext"] = None
    ):
        """
        Initialize run context.

        Args:
            timeout: Seconds until the deadline (None for no deadline)
            parent: Optional parent context; its cancellation and deadline
                    also apply to this context
        """
        self._event = threading.Event()
        self._parent = parent

        deadline = None
        if timeout is not None:
            deadline = time.monotonic() + timeout
        if parent is not None and parent.deadline is not None:
            deadline = (
                parent.deadline if deadline is None else min(deadline, parent.deadline)
            )
        self.deadline = deadline

    @classmethod
    def background(cls) -> "RunContext":
        """Context that is never cancelled and has no deadline."""
        return cls()

    def with_timeout(self, timeout: float) -> "RunContext":
        """Create a child context bounded by both this context and timeout."""
        return RunContext(timeout=timeout, parent=self)

    def cancel(self) -> None:
        """Cancel the context. Safe to call from any thread, more than once."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._parent is not None and self._parent.cancelled

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def remaining(self) -> Optional[float]:
        """Seconds left until the deadline (never negative), or None."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def error(self) -> Optional[ContextError]:
        """
        Get the error describing why this context is done.

        Returns:
            ContextCancelledError, DeadlineExceededError, or None if still live
        """
        if self.cancelled:
            return ContextCancelledError("context cancelled")
        if self.expired:
            return DeadlineExceededError("context deadline exceeded")
        return None

    def __enter__(self) -> "RunContext":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.cancel()
        return False

    def __repr__(self) -> str:
        return f"RunContext(remaining={self.remaining()}, cancelled={self.cancelled})"
