"""HTTP transport collaborator.

``HttpTransport`` performs exactly one HTTP call per :meth:`request` and
normalizes every outcome into one of three shapes:

* a parsed JSON value (buffered mode),
* a :class:`ChunkSource` yielding decoded text fragments (stream mode),
* a :class:`~unified_llm.base.errors.ProviderError` subclass:
  ``UpstreamError`` for non-2xx responses (status + parsed error body) and
  ``TransportError`` for failures before any status was obtained.

This is the single place where the representation of a streamed body is
inspected; adapters only ever see a ``ChunkSource``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, Mapping, Optional

import httpx

from ..cancellation import CancellationToken, CancelledError
from ..errors import ProtocolError, TransportError, UpstreamError, classify_exception
from ..logging import get_logger, log_event
from .client import get_httpx_client

_POOL_PURPOSE = "completion"


class ChunkSource:
    """Pull-based source of text fragments over a streaming HTTP response.

    Iterating reads one fragment at a time from the network. The response is
    closed when iteration ends, when :meth:`close` is called, or when the
    attached cancellation token fires.
    """

    def __init__(self, response: httpx.Response, signal: Optional[CancellationToken] = None) -> None:
        self._response = response
        self._signal = signal
        self._closed = False
        if signal is not None:
            signal.on_cancel(self.close)

    @property
    def closed(self) -> bool:
        return self._closed

    def __iter__(self) -> Iterator[str]:
        fragments = self._response.iter_text()
        try:
            while True:
                if self._signal is not None:
                    self._signal.raise_if_cancelled()
                try:
                    fragment = next(fragments)
                except StopIteration:
                    return
                except (httpx.HTTPError, httpx.StreamError) as exc:
                    if self._signal is not None and self._signal.cancelled:
                        raise CancelledError(self._signal.reason or "operation cancelled") from exc
                    raise TransportError(
                        message=f"Stream read failed: {exc}",
                        code=classify_exception(exc),
                        raw=exc,
                    ) from exc
                if fragment:
                    yield fragment
        finally:
            self.close()

    def close(self) -> None:
        """Release the underlying response. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._response.close()

    def __enter__(self) -> "ChunkSource":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class HttpTransport:
    """Issue HTTP calls for adapters through a (pooled) ``httpx.Client``."""

    def __init__(self, client: Optional[httpx.Client] = None) -> None:
        self._client = client
        self._logger = get_logger("transport")

    @property
    def client(self) -> httpx.Client:
        return self._client if self._client is not None else get_httpx_client(None, _POOL_PURPOSE)

    def request(
        self,
        url: str,
        *,
        method: str = "POST",
        headers: Optional[Mapping[str, str]] = None,
        body: Any = None,
        signal: Optional[CancellationToken] = None,
        stream: bool = False,
    ) -> Any:
        """Perform one HTTP call.

        Parameters:
            url: Absolute endpoint URL.
            method: HTTP method.
            headers: Extra headers; ``Content-Type: application/json`` is
                always sent and may be overridden here.
            body: JSON-serializable request body (omitted when ``None``).
            signal: Optional cancellation token; checked before sending and
                attached to the returned chunk source.
            stream: When True return a :class:`ChunkSource` instead of JSON.

        Raises:
            UpstreamError: Non-2xx response.
            TransportError: Network failure before a status was obtained.
            ProtocolError: Buffered 2xx response whose body is not JSON.
            CancelledError: ``signal`` was already cancelled.
        """
        if signal is not None:
            signal.raise_if_cancelled()
        merged: Dict[str, str] = {"Content-Type": "application/json"}
        merged.update(headers or {})
        client = self.client
        try:
            req = client.build_request(method, url, headers=merged, json=body)
            response = client.send(req, stream=stream)
        except httpx.HTTPError as exc:
            log_event(self._logger, "http.error", method=method, url=url, error=str(exc), level=logging.WARNING)
            raise TransportError(
                message=f"Request failed: {exc}",
                code=classify_exception(exc),
                raw=exc,
            ) from exc

        log_event(
            self._logger,
            "http.response",
            method=method,
            url=url,
            status=response.status_code,
            stream=stream,
            level=logging.DEBUG,
        )
        if not response.is_success:
            error_body = _read_error_body(response)
            raise UpstreamError(
                message=f"API request failed with status {response.status_code}",
                status=response.status_code,
                body=error_body,
            )
        if stream:
            return ChunkSource(response, signal)
        try:
            return response.json()
        except ValueError as exc:
            raise ProtocolError(
                message="Response body is not valid JSON",
                status=response.status_code,
                body=response.text,
                raw=exc,
            ) from exc
        finally:
            response.close()


def _read_error_body(response: httpx.Response) -> Any:
    """Read and parse an error body; ``{}`` when it is absent or not JSON."""
    try:
        response.read()
    except (httpx.HTTPError, httpx.StreamError):
        response.close()
        return {}
    try:
        return response.json()
    except ValueError:
        return {}
    finally:
        response.close()


__all__ = ["HttpTransport", "ChunkSource"]
