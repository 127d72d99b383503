"""
Error classification helpers mapping HTTP statuses and exceptions to
normalized ErrorCode values.
"""
from __future__ import annotations

from typing import Dict, Optional

import httpx

from .error_code import ErrorCode


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.UNAVAILABLE,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
    529: ErrorCode.UNAVAILABLE,
}


def classify_status(status: Optional[int]) -> Optional[ErrorCode]:
    """Map an HTTP status to an :class:`ErrorCode`.

    Unlisted 5xx statuses map to ``SERVER_ERROR``; anything else unlisted
    returns ``None`` so the caller keeps its own default.
    """
    if status is None:
        return None
    if status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    if 500 <= status < 600:
        return ErrorCode.SERVER_ERROR
    return None


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify a transport-level exception raised before any HTTP status.

    Precedence:
        1. Timeout exceptions (builtin and httpx).
        2. Any other ``httpx`` error -> ``TRANSPORT``.
        3. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, (TimeoutError, httpx.TimeoutException)):
        return ErrorCode.TIMEOUT
    if isinstance(exc, (httpx.HTTPError, httpx.StreamError)):
        return ErrorCode.TRANSPORT
    return ErrorCode.UNKNOWN


__all__ = [
    "classify_status",
    "classify_exception",
    "_HTTP_STATUS_MAP",
]
