"""Raised when registering a provider type that has no adapter."""
from __future__ import annotations

from dataclasses import dataclass

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass(eq=False)
class UnknownProviderError(ProviderError):
    """The provider type is not in the adapter factory mapping, or its
    adapter module could not be imported or constructed."""

    code: ErrorCode = ErrorCode.UNSUPPORTED


__all__ = ["UnknownProviderError"]
