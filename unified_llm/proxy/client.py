"""ProxyProvider: forward canonical requests to an OpenAI-compatible endpoint.

The proxy performs no translation. The canonical request is posted to
``{url}/chat/completions`` (model substituted when the proxy pins one) and
the response body, or each decoded stream event, is returned verbatim.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, Optional

from ..base.dto.completion import CompletionRequestDTO
from ..base.http import HttpTransport
from ..base.logging import log_event
from ..base.models import ProxyConfig
from ..base.provider import BaseProvider
from ..config.defaults import PROXY_COMPLETIONS_PATH


class ProxyProvider(BaseProvider):
    """Backend bound to one :class:`ProxyConfig`."""

    name = "proxy"

    def __init__(self, config: ProxyConfig, transport: Optional[HttpTransport] = None) -> None:
        super().__init__(transport)
        self.config = config
        log_event(
            self._logger,
            "proxy.registered",
            proxy=config.name,
            url=config.url,
            models=list(config.models),
            proxy_model=config.proxy_model,
        )

    @property
    def provider_name(self) -> str:
        return self.config.name

    def supports_model(self, model: str) -> bool:
        return self.config.matches(model, model)

    def _endpoint(self) -> str:
        return f"{self.config.url.rstrip('/')}{PROXY_COMPLETIONS_PATH}"

    def _headers(self) -> Dict[str, str]:
        return dict(self.config.headers)

    def _build_request(self, request: CompletionRequestDTO) -> Dict[str, Any]:
        if self.config.proxy_model:
            request = request.with_model(self.config.proxy_model)
        return request.to_payload()

    def _translate_response(self, data: Any, request: CompletionRequestDTO) -> Any:  # noqa: ARG002
        return data

    def _stream_chunks(self, events: Iterator[Any], request: CompletionRequestDTO) -> Iterator[Any]:  # noqa: ARG002
        return events
