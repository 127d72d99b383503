"""Cancellable iterator wrapper returned by ``Router.stream_completion``.

Wraps an adapter's chunk generator without buffering. Chunks are yielded
one by one as the adapter produces them; ``cancel`` and ``close`` stop
production and release the underlying HTTP response.
"""
from __future__ import annotations

from typing import Any, Dict, Iterator, Optional

from ..cancellation import CancellationToken


class CompletionStream:
    """Lazy, single-pass iterator of canonical stream chunks.

    Responsibilities:
      * Iterate over canonical chunk dicts from one adapter generator.
      * Expose ``cancel(reason)`` for cooperative cancellation.
      * Track completion and the last chunk for post-hoc inspection.
    """

    def __init__(
        self,
        chunks: Iterator[Dict[str, Any]],
        token: Optional[CancellationToken] = None,
        *,
        provider: Optional[str] = None,
        model: Optional[str] = None,
    ) -> None:
        self._chunks = chunks
        self._token = token or CancellationToken()
        self._finished = False
        self._closed = False
        self._last_chunk: Optional[Dict[str, Any]] = None
        self.provider = provider
        self.model = model

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        return self

    def __next__(self) -> Dict[str, Any]:
        if self._closed:
            raise StopIteration
        try:
            chunk = next(self._chunks)
        except StopIteration:
            self._finished = True
            self.close()
            raise
        self._last_chunk = chunk
        return chunk

    # API -----------------------------------------------------------------
    def cancel(self, reason: Optional[str] = None) -> None:
        """Request cancellation; safe to invoke multiple times or after completion."""
        self._token.cancel(reason)
        self.close()

    def close(self) -> None:
        """Close the underlying generator, releasing the HTTP response."""
        if self._closed:
            return
        self._closed = True
        close = getattr(self._chunks, "close", None)
        if close is not None:
            close()

    @property
    def token(self) -> CancellationToken:
        return self._token

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short property
        """Whether cancellation was requested."""
        return self._token.cancelled

    @property
    def finished(self) -> bool:  # noqa: D401 - short property
        """Whether the stream ran to its natural end."""
        return self._finished

    @property
    def last_chunk(self) -> Optional[Dict[str, Any]]:  # noqa: D401 - short property
        """Return the most recently yielded chunk, if any."""
        return self._last_chunk

    def __enter__(self) -> "CompletionStream":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


__all__ = ["CompletionStream"]
