"""Cooperative cancellation primitives.

A :class:`CancellationToken` is the abort signal threaded from the caller,
through the router and adapters, down to the transport. The transport polls
it before every read and registers a callback that closes the open HTTP
response, so a cancelled stream stops producing chunks and releases its
connection even while a read is pending.
"""

from __future__ import annotations

from threading import Lock
from typing import Callable, List, Optional


class CancelledError(RuntimeError):
    """Raised when an operation observes a cancelled token.

    Distinguished from other runtime failures so callers can treat a
    deliberate abort differently from a backend error.
    """


class CancellationToken:
    """A cooperative cancellation token.

    Thread-safe for ``cancel`` from one thread while another iterates.
    Callbacks registered with :meth:`on_cancel` run exactly once, either at
    cancel time or immediately if the token is already cancelled.
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._reason: Optional[str] = None
        self._lock = Lock()
        self._callbacks: List[Callable[[], None]] = []

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._cancelled

    @property
    def reason(self) -> Optional[str]:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._reason

    def cancel(self, reason: Optional[str] = None) -> None:
        """Request cancellation and run registered callbacks. Idempotent."""
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            self._reason = reason
            callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()

    def on_cancel(self, callback: Callable[[], None]) -> None:
        """Register ``callback`` to run when the token is cancelled."""
        with self._lock:
            if not self._cancelled:
                self._callbacks.append(callback)
                return
        callback()

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if the token is cancelled."""
        if self._cancelled:
            raise CancelledError(self._reason or "operation cancelled")

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self._cancelled}, reason={self._reason!r})"


__all__ = ["CancellationToken", "CancelledError"]
