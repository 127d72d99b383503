"""Vendor payload that cannot be mapped onto the canonical schema."""
from __future__ import annotations

from dataclasses import dataclass

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass(eq=False)
class ProtocolError(ProviderError):
    """A vendor request or response could not be translated.

    Usually indicates a vendor contract change. Surfaced, never silently
    recovered.
    """

    code: ErrorCode = ErrorCode.PROTOCOL


__all__ = ["ProtocolError"]
