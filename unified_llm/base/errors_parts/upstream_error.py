"""Non-success HTTP response from a backend."""
from __future__ import annotations

from dataclasses import dataclass

from .classification import classify_status
from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass(eq=False)
class UpstreamError(ProviderError):
    """A backend answered with a non-2xx status (or an in-stream error event).

    ``status`` and the parsed error ``body`` are surfaced to the caller
    unchanged. When a status is known the ``code`` is refined from it
    (e.g. 429 -> ``rate_limit``).
    """

    code: ErrorCode = ErrorCode.UPSTREAM

    def __post_init__(self) -> None:
        if self.code is ErrorCode.UPSTREAM and self.status is not None:
            self.code = classify_status(self.status) or ErrorCode.UPSTREAM


__all__ = ["UpstreamError"]
