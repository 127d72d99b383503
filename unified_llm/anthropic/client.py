"""AnthropicProvider adapter.

Calls the Messages API (``POST {base_url}/messages``) through the shared
``HttpTransport``. Request/response mapping lives in ``helpers.py`` and the
event-stream mapping in ``stream_helpers.py``.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator

from ..base.dto.completion import CompletionRequestDTO
from ..base.provider import VendorProvider
from ..config.defaults import ANTHROPIC_API_VERSION
from .helpers import build_messages_body, normalize_response
from .stream_helpers import translate_stream_events


class AnthropicProvider(VendorProvider):
    """Adapter for the Anthropic Messages API.

    Authenticates with ``x-api-key`` and pins ``anthropic-version``.
    """

    name = "anthropic"

    def supports_model(self, model: str) -> bool:
        return model.startswith("claude-")

    def _endpoint(self) -> str:
        return f"{self.base_url}/messages"

    def _headers(self) -> Dict[str, str]:
        return {"x-api-key": self.api_key, "anthropic-version": ANTHROPIC_API_VERSION}

    def _build_request(self, request: CompletionRequestDTO) -> Dict[str, Any]:
        return build_messages_body(request, self.default_params)

    def _translate_response(self, data: Any, request: CompletionRequestDTO) -> Dict[str, Any]:
        return normalize_response(data, request.model)

    def _stream_chunks(self, events: Iterator[Any], request: CompletionRequestDTO) -> Iterator[Dict[str, Any]]:
        return translate_stream_events(events, request.model)
