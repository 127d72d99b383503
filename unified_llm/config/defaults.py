"""unified_llm.config.defaults
===========================

Central place for small, stable default values used across the package.
Values here can be overridden through the optional config file (see
``unified_llm.config``) or per registration, but provide sensible fallbacks.

This module intentionally imports nothing from the rest of the package to
prevent circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Provider endpoints ----
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com/v1"
DEEPSEEK_DEFAULT_BASE_URL = "https://api.deepseek.com/v1"

# Anthropic Messages API protocol version header value.
ANTHROPIC_API_VERSION = "2023-06-01"

# Vendors that require max_tokens get this when the request omits it.
DEFAULT_MAX_TOKENS = 2048

# ---- Server-sent events ----
SSE_DATA_PREFIX = "data:"
SSE_DONE_SENTINEL = "[DONE]"

# ---- Proxy ----
# Wildcard entry in a proxy's model set matching every identifier.
PROXY_WILDCARD = "*"
PROXY_COMPLETIONS_PATH = "/chat/completions"

# ---- Service / HTTP layer ----
SERVICE_DEFAULT_HOST = "127.0.0.1"
SERVICE_DEFAULT_PORT = 8092


__all__ = [
    "OPENAI_DEFAULT_BASE_URL",
    "ANTHROPIC_DEFAULT_BASE_URL",
    "DEEPSEEK_DEFAULT_BASE_URL",
    "ANTHROPIC_API_VERSION",
    "DEFAULT_MAX_TOKENS",
    "SSE_DATA_PREFIX",
    "SSE_DONE_SENTINEL",
    "PROXY_WILDCARD",
    "PROXY_COMPLETIONS_PATH",
    "SERVICE_DEFAULT_HOST",
    "SERVICE_DEFAULT_PORT",
]
