"""HttpTransport outcome normalization and cancellation of streamed reads."""

from __future__ import annotations

import httpx
import pytest

from unified_llm.base.cancellation import CancellationToken, CancelledError
from unified_llm.base.errors import ErrorCode, ProtocolError, TransportError, UpstreamError
from unified_llm.base.http import ChunkSource, HttpTransport


def test_buffered_json(make_transport):
    transport, recorder = make_transport(httpx.Response(200, json={"ok": True}))
    assert transport.request("https://x.test/a", body={"q": 1}) == {"ok": True}  # nosec B101
    assert recorder.last.method == "POST"  # nosec B101
    assert recorder.last_json() == {"q": 1}  # nosec B101


def test_non_2xx_raises_upstream_error_with_body(make_transport):
    transport, _ = make_transport(httpx.Response(429, json={"error": {"message": "slow down"}}))
    with pytest.raises(UpstreamError) as exc_info:
        transport.request("https://x.test/a", body={})
    err = exc_info.value
    assert err.status == 429  # nosec B101
    assert err.body == {"error": {"message": "slow down"}}  # nosec B101
    assert err.code is ErrorCode.RATE_LIMIT  # nosec B101
    assert err.message == "API request failed with status 429"  # nosec B101


def test_non_json_error_body_becomes_empty_mapping(make_transport):
    transport, _ = make_transport(httpx.Response(500, text="<html>boom</html>"))
    with pytest.raises(UpstreamError) as exc_info:
        transport.request("https://x.test/a", body={}, stream=True)
    assert exc_info.value.body == {}  # nosec B101
    assert exc_info.value.code is ErrorCode.SERVER_ERROR  # nosec B101


def test_non_json_success_body_is_protocol_error(make_transport):
    transport, _ = make_transport(httpx.Response(200, text="not json"))
    with pytest.raises(ProtocolError):
        transport.request("https://x.test/a", body={})


def test_connection_failure_raises_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(TransportError) as exc_info:
            HttpTransport(client).request("https://x.test/a", body={})
    err = exc_info.value
    assert isinstance(err.raw, httpx.ConnectError)  # nosec B101
    assert isinstance(err.__cause__, httpx.ConnectError)  # nosec B101
    assert err.code is ErrorCode.TRANSPORT  # nosec B101


def test_timeout_is_classified():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(TransportError) as exc_info:
            HttpTransport(client).request("https://x.test/a", body={})
    assert exc_info.value.code is ErrorCode.TIMEOUT  # nosec B101


def test_stream_returns_chunk_source(make_transport, sse_response):
    transport, recorder = make_transport(sse_response(fragments=["data: {\"a\"", ": 1}\n\n"]))
    source = transport.request("https://x.test/s", body={}, stream=True)
    assert isinstance(source, ChunkSource)  # nosec B101
    assert "".join(source) == "data: {\"a\": 1}\n\n"  # nosec B101
    assert source.closed  # nosec B101
    assert recorder.returned[-1].is_closed  # nosec B101


def test_precancelled_token_sends_nothing(make_transport):
    transport, recorder = make_transport(httpx.Response(200, json={}))
    token = CancellationToken()
    token.cancel("stop")
    with pytest.raises(CancelledError):
        transport.request("https://x.test/a", body={}, signal=token)
    assert recorder.requests == []  # nosec B101


def test_cancel_closes_response_and_stops_reads(make_transport, sse_response):
    transport, recorder = make_transport(sse_response(fragments=["data: {\"n\": 1}\n\n", "data: {\"n\": 2}\n\n"]))
    token = CancellationToken()
    source = transport.request("https://x.test/s", body={}, signal=token, stream=True)
    reader = iter(source)
    assert next(reader) == "data: {\"n\": 1}\n\n"  # nosec B101
    token.cancel("user abort")
    assert source.closed  # nosec B101
    assert recorder.returned[-1].is_closed  # nosec B101
    with pytest.raises(CancelledError):
        next(reader)
