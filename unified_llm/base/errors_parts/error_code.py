"""
Normalized error codes (taxonomy).

Defines the `ErrorCode` enumeration attached to every ``ProviderError``.
Values are lowercase snake_case and are considered a stable public contract
for logging and for callers that branch on failure category.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    UNSUPPORTED = "unsupported"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    UPSTREAM = "upstream"
    PROTOCOL = "protocol"
    TRANSPORT = "transport"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
