"""unified_llm package

One chat-completion API over several LLM vendors.

Purpose:
    Resolve a model identifier (``"gpt-4o"``, ``"anthropic/claude-3-haiku"``,
    a proxied name) to a backend and translate requests, responses and
    streams between each vendor's wire format and the OpenAI
    chat-completion schema.

Public API (re-exported):
    - Version: ``__version__``
    - Facade: :class:`Router`, :func:`create_router`
    - Exceptions: :class:`ProviderError` and subclasses, :class:`ErrorCode`
    - Streaming: :class:`CompletionStream`, :class:`CancellationToken`
"""

from typing import Optional

from .base.cancellation import CancellationToken, CancelledError
from .base.dto import CompletionRequestDTO, MessageDTO
from .base.errors import (
    ErrorCode,
    ProtocolError,
    ProviderError,
    ProviderNotFoundError,
    TransportError,
    UnknownProviderError,
    UpstreamError,
)
from .base.http import HttpTransport
from .base.models import ProviderConfig, ProxyConfig
from .base.routing import Router
from .base.streaming import CompletionStream

__version__ = "0.1.0"


def create_router(transport: Optional[HttpTransport] = None) -> Router:
    """Return a new, empty :class:`Router`."""
    return Router(transport)


__all__ = [
    "__version__",
    "create_router",
    "Router",
    "CompletionStream",
    "CancellationToken",
    "CancelledError",
    "CompletionRequestDTO",
    "MessageDTO",
    "ProviderConfig",
    "ProxyConfig",
    "HttpTransport",
    "ErrorCode",
    "ProviderError",
    "ProviderNotFoundError",
    "UpstreamError",
    "ProtocolError",
    "TransportError",
    "UnknownProviderError",
]
