"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `unified_llm.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .provider_not_found_error import ProviderNotFoundError
from .upstream_error import UpstreamError
from .protocol_error import ProtocolError
from .transport_error import TransportError
from .unknown_provider_error import UnknownProviderError
from .classification import classify_exception, classify_status

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
