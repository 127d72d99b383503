"""Raised when no adapter resolves for a requested model identifier."""
from __future__ import annotations

from dataclasses import dataclass

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass(eq=False)
class ProviderNotFoundError(ProviderError):
    """No registered provider or proxy accepts the requested model.

    This is a caller/configuration error and is never retried.
    """

    code: ErrorCode = ErrorCode.NOT_FOUND


__all__ = ["ProviderNotFoundError"]
