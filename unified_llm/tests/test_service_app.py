"""OpenAI-compatible HTTP surface over the router."""

from __future__ import annotations

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from unified_llm.base.routing import Router
from unified_llm.config import CONFIG_FILE_ENV, reset_config_cache
from unified_llm.service import build_router_from_config, create_app


def _openai_body(content: str = "hi") -> dict:
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "gpt-4o",
        "choices": [{"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}],
        "usage": {"prompt_tokens": 3, "completion_tokens": 1, "total_tokens": 4},
    }


def _chunk(content: str, finish=None) -> dict:
    return {
        "id": "chatcmpl-2",
        "created": 1,
        "model": "gpt-4o",
        "choices": [{"index": 0, "delta": {"content": content}, "finish_reason": finish}],
    }


def _client(transport) -> TestClient:
    router = Router(transport)
    router.register_provider("openai", {"api_key": "sk"})
    return TestClient(create_app(router))


def _payload(**extra) -> dict:
    return {"model": "gpt-4o", "messages": [{"role": "user", "content": "Hello"}], **extra}


def _sse_data(text: str) -> list:
    return [line[len("data: "):] for line in text.splitlines() if line.startswith("data: ")]


def test_health_lists_registrations(make_transport):
    transport, _ = make_transport()
    router = Router(transport)
    router.register_provider("openai", {"api_key": "sk"})
    router.create_proxy("http://localhost:4000", name="local", models=["llama-3"])
    resp = TestClient(create_app(router)).get("/health")
    assert resp.status_code == 200  # nosec B101
    assert resp.json() == {"ok": True, "providers": ["openai"], "proxies": ["local"]}  # nosec B101


def test_buffered_completion(make_transport, json_response):
    transport, recorder = make_transport(json_response(_openai_body("Hello there")))
    resp = _client(transport).post("/v1/chat/completions", json=_payload())
    assert resp.status_code == 200  # nosec B101
    data = resp.json()
    assert data["object"] == "chat.completion"  # nosec B101
    assert data["choices"][0]["message"]["content"] == "Hello there"  # nosec B101
    assert "stream" not in recorder.last_json()  # nosec B101


def test_streamed_completion_ends_with_done(make_transport, sse_response):
    transport, recorder = make_transport(sse_response([_chunk("Hel"), _chunk("lo", "stop")]))
    resp = _client(transport).post("/v1/chat/completions", json=_payload(stream=True))
    assert resp.status_code == 200  # nosec B101
    assert resp.headers["content-type"].startswith("text/event-stream")  # nosec B101
    data = _sse_data(resp.text)
    assert data[-1] == "[DONE]"  # nosec B101
    chunks = [json.loads(d) for d in data[:-1]]
    assert [c["choices"][0]["delta"].get("content") for c in chunks] == ["Hel", "lo"]  # nosec B101
    assert chunks[-1]["choices"][0]["finish_reason"] == "stop"  # nosec B101
    assert recorder.last_json()["stream"] is True  # nosec B101


def test_unknown_model_is_404(make_transport):
    transport, recorder = make_transport()
    resp = _client(transport).post("/v1/chat/completions", json=_payload(model="mystery-model"))
    assert resp.status_code == 404  # nosec B101
    assert resp.json()["error"]["code"] == "not_found"  # nosec B101
    assert recorder.requests == []  # nosec B101


def test_invalid_request_is_400(make_transport):
    transport, _ = make_transport()
    resp = _client(transport).post("/v1/chat/completions", json={"model": "gpt-4o", "messages": []})
    assert resp.status_code == 400  # nosec B101
    assert resp.json()["error"]["message"] == "invalid request"  # nosec B101


@pytest.mark.parametrize("stream", [False, True])
def test_upstream_status_is_passed_through(make_transport, stream):
    transport, _ = make_transport(httpx.Response(429, json={"error": {"message": "slow down"}}))
    resp = _client(transport).post("/v1/chat/completions", json=_payload(stream=stream))
    assert resp.status_code == 429  # nosec B101
    error = resp.json()["error"]
    assert error["code"] == "rate_limit"  # nosec B101
    assert error["provider"] == "openai"  # nosec B101
    assert error["body"] == {"error": {"message": "slow down"}}  # nosec B101


def test_transport_failure_is_502(make_transport):
    def _refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    transport, _ = make_transport(_refuse)
    resp = _client(transport).post("/v1/chat/completions", json=_payload())
    assert resp.status_code == 502  # nosec B101
    assert resp.json()["error"]["code"] == "transport"  # nosec B101


def test_router_built_from_config_file(tmp_path, monkeypatch):
    path = tmp_path / "unified_llm.json"
    path.write_text(
        json.dumps(
            {
                "openai": {"api_key": "sk"},
                "anthropic": {"base_url": "https://no-key.test"},
                "proxies": [{"name": "local", "url": "http://localhost:4000", "models": ["llama-3"]}],
            }
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv(CONFIG_FILE_ENV, str(path))
    reset_config_cache()
    router = build_router_from_config()
    assert list(router.providers) == ["openai"]  # nosec B101
    assert [p.name for p in router.proxies] == ["local"]  # nosec B101
    assert router.resolve("llama-3").adapter.provider_name == "local"  # nosec B101
