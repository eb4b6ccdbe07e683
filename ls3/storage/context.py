"""Cancellation and deadlines for object-store requests."""

from __future__ import annotations

import threading
import time

from ls3.exceptions import OperationCancelledError, OperationTimeoutError


class RequestContext:
    """Carries a deadline and a cancel flag through store-client calls.

    A context may be shared by the calls of one logical operation and
    cancelled from another thread; the client checks it around every
    request.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout
        self._deadline = time.monotonic() + timeout if timeout is not None else None
        self._cancelled = threading.Event()

    @classmethod
    def background(cls) -> "RequestContext":
        """A context that never expires."""
        return cls()

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None without one."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    def raise_if_done(self, operation: str = "request") -> None:
        if self.cancelled:
            raise OperationCancelledError(f"{operation} was cancelled", {"operation": operation})
        if self.expired:
            raise OperationTimeoutError(
                f"{operation} exceeded its {self.timeout}s deadline",
                {"operation": operation, "timeout": str(self.timeout)},
            )


__all__ = ["RequestContext"]
