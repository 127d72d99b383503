"""Network failure before any HTTP status was obtained."""
from __future__ import annotations

from dataclasses import dataclass

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass(eq=False)
class TransportError(ProviderError):
    """Connection, DNS, TLS or read failure. The cause is kept in ``raw``."""

    code: ErrorCode = ErrorCode.TRANSPORT


__all__ = ["TransportError"]
