"""Shared adapter behavior.

Purpose:
- Hold the call flow every backend shares so vendor modules only implement
  translation hooks: build the outgoing body, map a buffered response, map a
  decoded event stream.

Flow:
- ``completion``: build body -> ``HttpTransport.request`` (buffered) ->
  ``_translate_response``; start/end/error events are logged with a
  :class:`LogContext`.
- ``stream_completion``: build body with ``stream: true`` ->
  ``HttpTransport.request`` (stream) -> ``SSEDecoder`` -> ``_stream_chunks``.
  The generator is lazy: no request is sent until the first chunk is pulled.

Errors:
- ``ProviderError`` subclasses are enriched with provider/model and
  re-raised unchanged. Structural surprises in vendor payloads (missing keys,
  wrong types) surface as ``ProtocolError``.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Iterator, Mapping, Optional

from ..config import get_provider_config
from .cancellation import CancellationToken, CancelledError
from .dto.completion import CompletionRequestDTO, coerce_request
from .errors import ProtocolError, ProviderError
from .http import HttpTransport
from .logging import LogContext, get_logger, log_event
from .models import ProviderConfig
from .streaming import SSEDecoder

_PAYLOAD_ERRORS = (KeyError, TypeError, IndexError, AttributeError)


class BaseProvider:
    """Template for chat-completion backends.

    Subclasses set ``name`` and implement ``_endpoint``, ``_build_request``,
    ``_translate_response`` and ``_stream_chunks``; ``_headers`` defaults to
    no extra headers.
    """

    name: str = "base"

    def __init__(self, transport: Optional[HttpTransport] = None) -> None:
        self._transport = transport or HttpTransport()
        self._logger = get_logger(f"providers.{self.name}")

    @property
    def provider_name(self) -> str:
        return self.name

    def supports_model(self, model: str) -> bool:  # noqa: ARG002 - default contract
        """Default: claim nothing."""
        return False

    # Hooks -----------------------------------------------------------------
    def _endpoint(self) -> str:
        raise NotImplementedError

    def _headers(self) -> Dict[str, str]:
        return {}

    def _build_request(self, request: CompletionRequestDTO) -> Dict[str, Any]:
        raise NotImplementedError

    def _translate_response(self, data: Any, request: CompletionRequestDTO) -> Dict[str, Any]:
        raise NotImplementedError

    def _stream_chunks(self, events: Iterator[Any], request: CompletionRequestDTO) -> Iterator[Dict[str, Any]]:
        raise NotImplementedError

    # Public API --------------------------------------------------------------
    def completion(self, request: CompletionRequestDTO | Mapping[str, Any]) -> Dict[str, Any]:
        """Execute a buffered completion and return the canonical response."""
        req = coerce_request(request)
        ctx = LogContext(provider=self.provider_name, model=req.model)
        log_event(self._logger, "completion.start", ctx, message_count=len(req.messages))
        t0 = time.perf_counter()
        try:
            body = self._build_request(req)
            body.pop("stream", None)
            data = self._transport.request(self._endpoint(), headers=self._headers(), body=body)
            try:
                result = self._translate_response(data, req)
            except _PAYLOAD_ERRORS as exc:
                raise ProtocolError(
                    message=f"Unexpected response shape: {exc!r}",
                    body=data,
                    raw=exc,
                ) from exc
        except ProviderError as exc:
            self._fail(exc, ctx, "completion.error")
            raise
        ctx.request_id = result.get("id") if isinstance(result, dict) else None
        log_event(
            self._logger,
            "completion.end",
            ctx,
            latency_ms=round((time.perf_counter() - t0) * 1000.0, 2),
            finish_reason=_finish_reason(result),
        )
        return result

    def stream_completion(
        self,
        request: CompletionRequestDTO | Mapping[str, Any],
        cancellation: Optional[CancellationToken] = None,
    ) -> Iterator[Dict[str, Any]]:
        """Return a lazy generator of canonical stream chunks."""
        req = coerce_request(request)
        return self._run_stream(req, cancellation)

    # Internals -------------------------------------------------------------
    def _run_stream(
        self, req: CompletionRequestDTO, cancellation: Optional[CancellationToken]
    ) -> Iterator[Dict[str, Any]]:
        ctx = LogContext(provider=self.provider_name, model=req.model)
        log_event(self._logger, "stream.start", ctx)
        t0 = time.perf_counter()
        emitted = 0
        try:
            body = self._build_request(req)
            body["stream"] = True
            events = self._iter_events(self._endpoint(), body, cancellation)
            try:
                for chunk in self._stream_chunks(events, req):
                    if emitted == 0:
                        ctx.request_id = chunk.get("id") if isinstance(chunk, dict) else None
                    emitted += 1
                    yield chunk
            finally:
                events.close()
        except CancelledError:
            log_event(self._logger, "stream.cancelled", ctx, emitted=emitted)
            raise
        except ProviderError as exc:
            self._fail(exc, ctx, "stream.error", emitted=emitted)
            raise
        except _PAYLOAD_ERRORS as exc:
            err = ProtocolError(message=f"Unexpected stream event shape: {exc!r}", raw=exc)
            self._fail(err, ctx, "stream.error", emitted=emitted)
            raise err from exc
        log_event(
            self._logger,
            "stream.end",
            ctx,
            emitted=emitted,
            latency_ms=round((time.perf_counter() - t0) * 1000.0, 2),
        )

    def _iter_events(
        self, url: str, body: Dict[str, Any], cancellation: Optional[CancellationToken]
    ) -> Iterator[Any]:
        """Yield decoded JSON events from a streamed response until the sentinel."""
        source = self._transport.request(
            url, headers=self._headers(), body=body, signal=cancellation, stream=True
        )
        decoder = SSEDecoder()
        with source:
            for fragment in source:
                yield from decoder.feed(fragment)
                if decoder.done:
                    return
            yield from decoder.flush()

    def _fail(self, exc: ProviderError, ctx: LogContext, event: str, **fields: Any) -> None:
        if exc.provider is None:
            exc.provider = self.provider_name
        if exc.model is None:
            exc.model = ctx.model
        log_event(
            self._logger,
            event,
            ctx,
            level=logging.WARNING,
            error=exc.message,
            error_code=exc.code.value,
            status=exc.status,
            **fields,
        )


class VendorProvider(BaseProvider):
    """Adapter for a registered vendor backend configured by ``ProviderConfig``.

    The base URL falls back to :func:`get_provider_config` (built-in defaults
    and the optional config file) when the registration omits it. Default
    parameters from both sources are merged under every request.
    """

    def __init__(self, config: ProviderConfig, transport: Optional[HttpTransport] = None) -> None:
        super().__init__(transport)
        self.config = config
        merged = get_provider_config(self.name, {"base_url": config.base_url})
        self.base_url = str(merged.get("base_url") or "").rstrip("/")
        self.default_params: Dict[str, Any] = {
            **(merged.get("default_params") or {}),
            **config.default_params,
        }

    @property
    def api_key(self) -> str:
        return self.config.api_key


def _finish_reason(result: Any) -> Optional[str]:
    try:
        return result["choices"][0].get("finish_reason")
    except (KeyError, IndexError, TypeError, AttributeError):
        return None


__all__ = ["BaseProvider", "VendorProvider"]
