"""Pytest configuration for the unified_llm test suite.

Network access is isolated with ``httpx.MockTransport``: tests build an
``HttpTransport`` around a client whose handler records each outgoing
request and returns canned responses.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional

import httpx
import pytest

from unified_llm.base.http import HttpTransport, close_all_clients
from unified_llm.base.logging import BASE_LOGGER_NAME
from unified_llm.config import CONFIG_FILE_ENV, reset_config_cache


def sse_body(events: Iterable[Any], done: bool = True) -> str:
    """Render events as an SSE body (``data: {...}`` lines, optional sentinel)."""
    lines = [f"data: {json.dumps(e)}\n\n" for e in events]
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines)


class Recorder:
    """Mock-transport handler that records requests and replays responses.

    ``responses`` is consumed in order; the last entry is reused once the
    list is exhausted. Entries may be ``httpx.Response`` objects or callables
    taking the request.
    """

    def __init__(self, responses: List[Any]) -> None:
        self._responses = list(responses)
        self.requests: List[httpx.Request] = []
        self.returned: List[httpx.Response] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        response = item(request) if callable(item) else item
        self.returned.append(response)
        return response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.last.content)


@pytest.fixture()
def make_transport() -> Iterator[Callable[..., "tuple[HttpTransport, Recorder]"]]:
    """Factory returning ``(transport, recorder)`` for canned responses."""
    clients: List[httpx.Client] = []

    def _make(*responses: Any) -> "tuple[HttpTransport, Recorder]":
        recorder = Recorder(list(responses) or [httpx.Response(200, json={})])
        client = httpx.Client(transport=httpx.MockTransport(recorder))
        clients.append(client)
        return HttpTransport(client), recorder

    yield _make
    for client in clients:
        client.close()


@pytest.fixture()
def json_response() -> Callable[..., httpx.Response]:
    def _make(payload: Any, status: int = 200) -> httpx.Response:
        return httpx.Response(status, json=payload)

    return _make


@pytest.fixture()
def sse_response() -> Callable[..., httpx.Response]:
    """Build a streamed SSE response; ``fragments`` splits the body into reads."""

    def _make(events: Iterable[Any] = (), done: bool = True, fragments: Optional[List[str]] = None) -> httpx.Response:
        if fragments is None:
            fragments = [sse_body(events, done=done)]
        return httpx.Response(
            200,
            headers={"content-type": "text/event-stream"},
            content=(f.encode("utf-8") for f in fragments),
        )

    return _make


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep the optional config file out of tests unless a test sets it."""
    monkeypatch.delenv(CONFIG_FILE_ENV, raising=False)
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture()
def log_capture() -> Iterator[List[dict]]:
    """Capture structured log events emitted under the package logger."""
    import logging

    events: List[dict] = []

    class _Handler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            try:
                events.append(json.loads(record.getMessage()))
            except ValueError:
                events.append({"message": record.getMessage()})

    handler = _Handler(level=logging.DEBUG)
    base = logging.getLogger(BASE_LOGGER_NAME)
    previous = base.level
    base.addHandler(handler)
    base.setLevel(logging.DEBUG)
    try:
        yield events
    finally:
        base.removeHandler(handler)
        base.setLevel(previous)


@pytest.fixture(scope="session", autouse=True)
def close_pooled_clients() -> Iterator[None]:
    """Close any pooled HTTP clients created during the session."""
    yield
    close_all_clients()
