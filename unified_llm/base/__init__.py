"""
Unified LLM Base Package

Exports provider-agnostic contracts, DTOs, the transport and the router for
use by vendor adapters, proxies and the HTTP service.

- Interfaces: the ``CompletionProvider`` adapter boundary
- DTOs / models: validated requests and immutable registration records
- Transport: pooled ``httpx`` clients and SSE decoding
- Routing: model resolution and the ``Router`` facade
"""

from .cancellation import CancellationToken, CancelledError
from .dto import CompletionRequestDTO, MessageDTO
from .errors import (
    ErrorCode,
    ProtocolError,
    ProviderError,
    ProviderNotFoundError,
    TransportError,
    UnknownProviderError,
    UpstreamError,
)
from .factory import ProviderFactory
from .http import ChunkSource, HttpTransport
from .interfaces import CompletionProvider
from .models import ParsedModel, ProviderConfig, ProxyConfig, Resolution
from .provider import BaseProvider, VendorProvider
from .routing import Router, parse_model_identifier
from .streaming import CompletionStream, SSEDecoder, decode_chunk
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    "CancellationToken",
    "CancelledError",
    "CompletionRequestDTO",
    "MessageDTO",
    "ErrorCode",
    "ProviderError",
    "ProviderNotFoundError",
    "UpstreamError",
    "ProtocolError",
    "TransportError",
    "UnknownProviderError",
    "ProviderFactory",
    "HttpTransport",
    "ChunkSource",
    "CompletionProvider",
    "ParsedModel",
    "ProviderConfig",
    "ProxyConfig",
    "Resolution",
    "BaseProvider",
    "VendorProvider",
    "Router",
    "parse_model_identifier",
    "CompletionStream",
    "SSEDecoder",
    "decode_chunk",
    "TimeoutConfig",
    "get_timeout_config",
]
