"""Router registration, resolution order and facade delegation."""

from __future__ import annotations

import httpx
import pytest
from pydantic import ValidationError

from unified_llm import create_router
from unified_llm.anthropic import AnthropicProvider
from unified_llm.base.errors import ErrorCode, ProviderNotFoundError, UnknownProviderError
from unified_llm.base.models import ProviderConfig
from unified_llm.base.routing import Router
from unified_llm.openai import OpenAIProvider


def _openai_body(model: str = "gpt-3.5-turbo", content: str = "hi") -> dict:
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 1700000000,
        "model": model,
        "choices": [{"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}],
        "usage": {"prompt_tokens": 3, "completion_tokens": 1, "total_tokens": 4},
    }


def _request(model: str) -> dict:
    return {"model": model, "messages": [{"role": "user", "content": "Hello"}]}


def test_registered_openai_resolves_by_prefix():
    router = Router()
    router.register_provider("openai", {"api_key": "sk-test"})
    resolution = router.resolve("gpt-3.5-turbo")
    assert isinstance(resolution.adapter, OpenAIProvider)  # nosec B101
    assert resolution.model == "gpt-3.5-turbo"  # nosec B101


def test_explicit_provider_hint_wins_over_prefix():
    router = Router()
    router.register_provider("openai", {"api_key": "sk"})
    router.register_provider("anthropic", {"api_key": "ak"})
    resolution = router.resolve("anthropic/gpt-looking-name")
    assert isinstance(resolution.adapter, AnthropicProvider)  # nosec B101
    assert resolution.model == "gpt-looking-name"  # nosec B101


def test_unregistered_provider_hint_falls_through_with_bare_model():
    router = Router()
    router.register_provider("openai", {"api_key": "sk"})
    resolution = router.resolve("mystery/gpt-4")
    assert isinstance(resolution.adapter, OpenAIProvider)  # nosec B101
    assert resolution.model == "gpt-4"  # nosec B101


def test_supports_model_fallback_in_registration_order():
    router = Router()
    router.register_provider("anthropic", {"api_key": "ak"})
    router.register_provider("openai", {"api_key": "sk"})
    # "o3-mini" has no prefix-table entry; only OpenAI claims it.
    resolution = router.resolve("o3-mini")
    assert isinstance(resolution.adapter, OpenAIProvider)  # nosec B101


def test_unresolvable_model_returns_no_adapter():
    router = Router()
    router.register_provider("openai", {"api_key": "sk"})
    resolution = router.resolve("llama-3-70b")
    assert resolution.adapter is None  # nosec B101
    assert not resolution.found  # nosec B101
    assert resolution.model == "llama-3-70b"  # nosec B101


def test_proxy_takes_precedence_over_prefix_provider():
    router = Router()
    router.register_provider("openai", {"api_key": "sk"})
    proxy = router.create_proxy("http://proxy.local/v1", name="corp", models=["gpt-4"])
    resolution = router.resolve("gpt-4")
    assert resolution.adapter is proxy  # nosec B101
    assert resolution.model == "gpt-4"  # nosec B101


def test_proxy_matches_raw_identifier():
    router = Router()
    proxy = router.create_proxy("http://proxy.local", name="p", models=["vendor/special"])
    resolution = router.resolve("vendor/special")
    assert resolution.adapter is proxy  # nosec B101
    assert resolution.model == "special"  # nosec B101


def test_wildcard_proxy_after_specific_proxy():
    router = Router()
    specific = router.create_proxy("http://a.local", name="a", models=["m1"])
    wildcard = router.create_proxy("http://b.local", name="b", models=["*"])
    assert router.resolve("m1").adapter is specific  # nosec B101
    assert router.resolve("anything-else").adapter is wildcard  # nosec B101
    assert [p.name for p in router.proxies] == ["a", "b"]  # nosec B101


def test_proxy_model_substitution_scenario(make_transport):
    transport, recorder = make_transport(httpx.Response(200, json=_openai_body("deepseek-chat")))
    router = Router(transport)
    router.create_proxy(
        "https://api.deepseek.com/v1",
        name="deepseek",
        models=["gpt-4-proxy"],
        proxy_model="deepseek-chat",
        headers={"Authorization": "Bearer ds"},
    )
    resolution = router.resolve("gpt-4-proxy")
    assert resolution.model == "deepseek-chat"  # nosec B101

    router.completion(_request("gpt-4-proxy"))
    assert str(recorder.last.url) == "https://api.deepseek.com/v1/chat/completions"  # nosec B101
    assert recorder.last_json()["model"] == "deepseek-chat"  # nosec B101


def test_completion_delegates_with_substituted_model(make_transport):
    transport, recorder = make_transport(httpx.Response(200, json=_openai_body()))
    router = Router(transport)
    router.register_provider("openai", {"api_key": "sk-test"})
    result = router.completion(_request("openai/gpt-3.5-turbo"))
    assert result["choices"][0]["message"]["content"] == "hi"  # nosec B101
    assert recorder.last_json()["model"] == "gpt-3.5-turbo"  # nosec B101
    assert recorder.last.headers["authorization"] == "Bearer sk-test"  # nosec B101


def test_completion_without_provider_raises_not_found():
    router = create_router()
    with pytest.raises(ProviderNotFoundError) as exc_info:
        router.completion(_request("llama-3"))
    assert exc_info.value.message == "No provider found for model: llama-3"  # nosec B101
    assert exc_info.value.code is ErrorCode.NOT_FOUND  # nosec B101


def test_stream_completion_resolves_eagerly():
    router = Router()
    with pytest.raises(ProviderNotFoundError):
        router.stream_completion(_request("unknown-model"))


def test_invalid_request_raises_validation_error():
    router = Router()
    router.register_provider("openai", {"api_key": "sk"})
    with pytest.raises(ValidationError):
        router.completion({"model": "gpt-4", "messages": []})


def test_unknown_provider_type_rejected():
    router = Router()
    with pytest.raises(UnknownProviderError) as exc_info:
        router.register_provider("cohere", {"api_key": "x"})
    assert "Unsupported provider type: cohere" in exc_info.value.message  # nosec B101


def test_reregistering_replaces_adapter():
    router = Router()
    first = router.register_provider("openai", {"api_key": "one"})
    second = router.register_provider("OpenAI", ProviderConfig(type="openai", api_key="two"))
    assert router.providers["openai"] is second  # nosec B101
    assert first is not second  # nosec B101
    assert list(router.providers) == ["openai"]  # nosec B101


def test_register_provider_accepts_camel_case_options():
    router = Router()
    adapter = router.register_provider("openai", apiKey="sk", baseURL="https://gw.local/v1/")
    assert adapter.base_url == "https://gw.local/v1"  # nosec B101
    assert adapter.api_key == "sk"  # nosec B101


def test_register_adapter_requires_protocol():
    router = Router()
    with pytest.raises(TypeError):
        router.register_adapter("custom", object())


def test_providers_view_is_read_only():
    router = Router()
    router.register_provider("openai", {"api_key": "sk"})
    with pytest.raises(TypeError):
        router.providers["anthropic"] = object()  # type: ignore[index]
