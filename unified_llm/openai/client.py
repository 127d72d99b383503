"""OpenAI provider adapter.

Talks to the Chat Completions endpoint directly through the shared
``HttpTransport``; translation lives in ``helpers.py``. The same adapter
serves any OpenAI-compatible vendor by overriding ``name`` and
``supports_model`` (see ``unified_llm.deepseek``).
"""

from __future__ import annotations

from typing import Any, Dict, Iterator

from ..base.dto.completion import CompletionRequestDTO
from ..base.provider import VendorProvider
from .helpers import OpenAIStreamState, build_chat_body, normalize_chunk, normalize_response

_MODEL_PREFIXES = ("gpt-", "text-", "o1", "o3", "o4")
_MODEL_EXACT = frozenset({"dall-e-3"})


class OpenAIProvider(VendorProvider):
    """Adapter for ``POST {base_url}/chat/completions`` with Bearer auth."""

    name = "openai"

    def supports_model(self, model: str) -> bool:
        return model.startswith(_MODEL_PREFIXES) or model in _MODEL_EXACT

    def _endpoint(self) -> str:
        return f"{self.base_url}/chat/completions"

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    def _build_request(self, request: CompletionRequestDTO) -> Dict[str, Any]:
        return build_chat_body(request, self.default_params)

    def _translate_response(self, data: Any, request: CompletionRequestDTO) -> Dict[str, Any]:
        return normalize_response(data, request.model)

    def _stream_chunks(self, events: Iterator[Any], request: CompletionRequestDTO) -> Iterator[Dict[str, Any]]:
        state = OpenAIStreamState()
        for event in events:
            yield normalize_chunk(event, request.model, state)
