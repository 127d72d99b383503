"""Unified error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``unified_llm.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.provider_not_found_error import ProviderNotFoundError
from .errors_parts.upstream_error import UpstreamError
from .errors_parts.protocol_error import ProtocolError
from .errors_parts.transport_error import TransportError
from .errors_parts.unknown_provider_error import UnknownProviderError
from .errors_parts.classification import classify_exception, classify_status

__all__ = [
    "ErrorCode",
    "ProviderError",
    "ProviderNotFoundError",
    "UpstreamError",
    "ProtocolError",
    "TransportError",
    "UnknownProviderError",
    "classify_exception",
    "classify_status",
]
