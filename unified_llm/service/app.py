"""
FastAPI surface for the unified router.

Purpose
-------
Expose an OpenAI-compatible endpoint so existing OpenAI clients can talk to
any backend the router resolves.

Routes
------
- ``POST /v1/chat/completions``: JSON response, or ``text/event-stream`` when
  the body sets ``stream: true`` (``data: {chunk}`` lines, then
  ``data: [DONE]``).
- ``GET /health``: liveness plus registered provider/proxy names.

Error mapping
-------------
- ``pydantic.ValidationError`` -> 400
- ``ProviderNotFoundError`` -> 404
- ``UpstreamError`` -> the upstream status, body passed through
- ``ProtocolError`` / ``TransportError`` -> 502

Errors raised after a stream has started are sent as a final
``data: {"error": ...}`` event, since the status line is already committed.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterator, Optional

from fastapi import Body, FastAPI
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import ValidationError

from ..base.cancellation import CancelledError
from ..base.dto.completion import CompletionRequestDTO
from ..base.errors import ProviderError, ProviderNotFoundError, UpstreamError
from ..base.logging import get_logger, log_event
from ..base.models import ProxyConfig
from ..base.routing import Router
from ..config import DEFAULTS, get_config_section
from ..config.defaults import SSE_DATA_PREFIX, SSE_DONE_SENTINEL

_logger = get_logger("service")


def build_router_from_config() -> Router:
    """Create a router from the optional config file.

    Provider sections (``openai``, ``anthropic``, ...) holding an ``api_key``
    are registered; a top-level ``proxies`` list is registered in order.
    """
    router = Router()
    for provider_type in DEFAULTS:
        section = get_config_section(provider_type)
        if isinstance(section, dict) and section.get("api_key"):
            router.register_provider(provider_type, section)
    for entry in get_config_section("proxies") or []:
        router.register_proxy(
            ProxyConfig(
                name=entry.get("name") or entry["url"],
                url=entry["url"],
                headers=dict(entry.get("headers") or {}),
                models=tuple(entry.get("models") or ("*",)),
                proxy_model=entry.get("proxy_model"),
            )
        )
    return router


def _error_payload(exc: ProviderError) -> Dict[str, Any]:
    return {
        "error": {
            "message": exc.message,
            "code": exc.code.value,
            "provider": exc.provider,
            "status": exc.status,
            "body": exc.body,
        }
    }


def _status_for(exc: ProviderError) -> int:
    if isinstance(exc, ProviderNotFoundError):
        return 404
    if isinstance(exc, UpstreamError) and exc.status:
        return exc.status
    return 502


def _sse(data: Any) -> str:
    return f"{SSE_DATA_PREFIX} {json.dumps(data, ensure_ascii=False)}\n\n"


def _sse_events(stream, first: Optional[Dict[str, Any]]) -> Iterator[str]:
    """Render a ``CompletionStream`` as SSE text, closing it when done."""
    with stream:
        try:
            if first is not None:
                yield _sse(first)
            for chunk in stream:
                yield _sse(chunk)
        except ProviderError as exc:
            log_event(_logger, "service.stream_error", level=logging.WARNING, error=exc.message)
            yield _sse(_error_payload(exc))
        except CancelledError:
            return
    yield f"{SSE_DATA_PREFIX} {SSE_DONE_SENTINEL}\n\n"


def create_app(router: Optional[Router] = None) -> FastAPI:
    """Return a FastAPI app serving ``router`` (built from config when omitted)."""
    app = FastAPI(title="Unified LLM Service", version="0.1.0")
    active = router if router is not None else build_router_from_config()
    app.state.router = active

    @app.exception_handler(ValidationError)
    async def _validation_error(_request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"error": {"message": "invalid request", "details": json.loads(exc.json())}},
        )

    @app.exception_handler(ProviderError)
    async def _provider_error(_request, exc: ProviderError) -> JSONResponse:
        return JSONResponse(status_code=_status_for(exc), content=_error_payload(exc))

    @app.get("/health")
    def health() -> Dict[str, Any]:
        """Report liveness and what is registered."""
        return {
            "ok": True,
            "providers": list(active.providers),
            "proxies": [p.name for p in active.proxies],
        }

    @app.post("/v1/chat/completions")
    def chat_completions(body: Dict[str, Any] = Body(...)):
        """OpenAI-compatible chat completion (buffered or streamed)."""
        request = CompletionRequestDTO.model_validate(body)
        if request.stream:
            stream = active.stream_completion(request)
            # Pull the first chunk eagerly so connection and status errors
            # still map to an HTTP status.
            try:
                first = next(stream)
            except StopIteration:
                first = None
            except ProviderError:
                stream.close()
                raise
            return StreamingResponse(_sse_events(stream, first), media_type="text/event-stream")
        return active.completion(request)

    return app


__all__ = ["create_app", "build_router_from_config"]
