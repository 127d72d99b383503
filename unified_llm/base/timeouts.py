"""Transport timeout configuration.

The resolution and translation layer has no timeout logic of its own; the
only timeouts are the ones the HTTP transport applies to each call. They are
collected here so the pooled clients read them from one place.

Supported environment variables (all optional, positive floats):
    UNIFIED_LLM_HTTP_TIMEOUT_SECONDS     read/write/pool timeout
    UNIFIED_LLM_CONNECT_TIMEOUT_SECONDS  connect timeout
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

import httpx


@dataclass(frozen=True)
class TimeoutConfig:
    """Normalized timeout values (seconds).

    Attributes:
        http_timeout_seconds: Per-operation read/write/pool timeout. For
            streams this bounds the wait for the next fragment, not the
            whole stream.
        connect_timeout_seconds: Time allowed to establish a connection.
    """

    http_timeout_seconds: float = 60.0
    connect_timeout_seconds: float = 10.0

    def to_httpx(self) -> httpx.Timeout:
        return httpx.Timeout(self.http_timeout_seconds, connect=self.connect_timeout_seconds)


def _parse_env_float(name: str, default: float) -> float:
    """Read a positive float from the environment, falling back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


_CACHED: Optional[TimeoutConfig] = None
_CACHE_KEY: Optional[str] = None


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`.

    The cache is refreshed when the relevant environment variables change,
    which keeps tests that monkeypatch them deterministic.
    """
    global _CACHED, _CACHE_KEY  # noqa: PLW0603 - documented module cache
    key = "/".join(
        [
            os.getenv("UNIFIED_LLM_HTTP_TIMEOUT_SECONDS", ""),
            os.getenv("UNIFIED_LLM_CONNECT_TIMEOUT_SECONDS", ""),
        ]
    )
    if _CACHED is not None and _CACHE_KEY == key:
        return _CACHED
    _CACHED = TimeoutConfig(
        http_timeout_seconds=_parse_env_float("UNIFIED_LLM_HTTP_TIMEOUT_SECONDS", 60.0),
        connect_timeout_seconds=_parse_env_float("UNIFIED_LLM_CONNECT_TIMEOUT_SECONDS", 10.0),
    )
    _CACHE_KEY = key
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
