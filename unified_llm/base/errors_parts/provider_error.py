"""
Structured base exception for the unified LLM layer.

Every failure surfaced by adapters, the transport and the router derives from
`ProviderError` so callers can catch one type and branch on ``code``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .error_code import ErrorCode


@dataclass(eq=False)
class ProviderError(Exception):
    """Represents a structured error with a normalized error code.

    Attributes:
        message: Human-readable error message suitable for logging.
        code: Normalized :class:`ErrorCode` classification for the failure.
        provider: Provider key (or proxy name) where the error originated.
        model: Optional model name associated with the failure.
        status: HTTP status code when one was obtained from the backend.
        body: Parsed error body returned by the backend, if any.
        raw: Optional original exception for diagnostics.
    """

    message: str
    code: ErrorCode = ErrorCode.UNKNOWN
    provider: Optional[str] = None
    model: Optional[str] = None
    status: Optional[int] = None
    body: Any = None
    raw: Optional[BaseException] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        return f"{self.provider or '-'}:{self.model or '-'} {self.code.value}: {self.message}"


__all__ = ["ProviderError"]
