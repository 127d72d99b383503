"""
Provider adapter contract.

Every backend the router can select (vendor adapters and proxies alike)
satisfies :class:`CompletionProvider`. The Protocol is runtime-checkable so
registration code can verify third-party adapters structurally.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, Optional, Protocol, runtime_checkable

from .cancellation import CancellationToken
from .dto.completion import CompletionRequestDTO


@runtime_checkable
class CompletionProvider(Protocol):
    """Minimal interface for chat-completion backends.

    Implementations translate a canonical request into their wire format,
    perform the call through the shared transport and translate the result
    back. They never leak vendor payloads upstream.
    """

    @property
    def provider_name(self) -> str:
        """Identifier used in logs and errors, e.g. ``"openai"``."""
        ...

    def completion(self, request: CompletionRequestDTO) -> Dict[str, Any]:
        """Execute one buffered completion and return a canonical response.

        Raises ``UpstreamError`` on non-2xx responses, ``ProtocolError`` when
        the vendor payload cannot be mapped and ``TransportError`` on network
        failure.
        """
        ...

    def stream_completion(
        self,
        request: CompletionRequestDTO,
        cancellation: Optional[CancellationToken] = None,
    ) -> Iterator[Dict[str, Any]]:
        """Lazily yield canonical stream chunks. Not restartable."""
        ...

    def supports_model(self, model: str) -> bool:
        """Return True if this backend claims ``model``."""
        ...


__all__ = ["CompletionProvider"]
