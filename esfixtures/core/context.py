"""
Execution context for store calls.

Carries a cancellation flag and an optional deadline down to every remote
call made by the Loader. Contexts derived from a parent observe the parent's
cancellation and never outlive its deadline.
"""
import threading
import time

from .exceptions import StoreCancelledError


class ExecutionContext:
    """Cancellation/deadline carrier passed through every store call."""

    def __init__(self, deadline: float | None = None, parent: "ExecutionContext | None" = None):
        """
        Args:
            deadline: Absolute time.monotonic() value after which calls fail
            parent: Context whose cancellation and deadline also apply
        """
        if parent is not None and parent.deadline is not None:
            deadline = parent.deadline if deadline is None else min(deadline, parent.deadline)

        self.deadline = deadline
        self.parent = parent
        self._cancelled = threading.Event()

    @classmethod
    def background(cls) -> "ExecutionContext":
        """A context that is never cancelled and has no deadline."""
        return cls()

    def with_timeout(self, seconds: float) -> "ExecutionContext":
        """Derive a child context that expires after `seconds`."""
        return ExecutionContext(deadline=time.monotonic() + seconds, parent=self)

    def with_cancel(self) -> "ExecutionContext":
        """Derive a child context that can be cancelled independently."""
        return ExecutionContext(parent=self)

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        if self._cancelled.is_set():
            return True
        return self.parent is not None and self.parent.cancelled

    def remaining(self) -> float | None:
        """Seconds until the deadline, or None without one."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def error(self) -> StoreCancelledError | None:
        """Return the reason this context is done, if it is."""
        if self.cancelled:
            return StoreCancelledError("cancelled")
        if self.deadline is not None and time.monotonic() >= self.deadline:
            return StoreCancelledError("deadline_exceeded")
        return None

    def raise_if_done(self) -> None:
        error = self.error()
        if error is not None:
            raise error

    def timeout(self, default: float | None) -> float | None:
        """Per-request timeout capped at the remaining deadline."""
        remaining = self.remaining()
        if remaining is None:
            return default
        if default is None:
            return remaining
        return min(default, remaining)
