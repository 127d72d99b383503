"""Configuration layer for provider defaults.

Goals
-----
* Centralize defaults (base URLs, default request parameters).
* Merge sources in a predictable order:
    1. Built-in defaults
    2. Optional external JSON file pointed to by ``UNIFIED_LLM_CONFIG_FILE``
    3. In-code overrides passed to the helper
* Provide a single call site: ``get_provider_config(provider)``.

Credentials are never read from the environment here; callers pass API keys
explicitly at registration time.

External Config File (Optional)
-------------------------------
```
{
  "openai": {"api_key": "sk-...", "base_url": "https://gateway.internal/v1"},
  "anthropic": {"default_params": {"temperature": 0.2}},
  "proxies": [{"name": "local", "url": "http://localhost:4000", "models": ["llama-3"]}]
}
```

Provider ``api_key`` entries and the ``proxies`` list are only consumed by
the HTTP service when it builds its router from this file.
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .defaults import (
    ANTHROPIC_DEFAULT_BASE_URL,
    DEEPSEEK_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_BASE_URL,
)

CONFIG_FILE_ENV = "UNIFIED_LLM_CONFIG_FILE"

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {"base_url": OPENAI_DEFAULT_BASE_URL},
    "anthropic": {"base_url": ANTHROPIC_DEFAULT_BASE_URL},
    "deepseek": {"base_url": DEEPSEEK_DEFAULT_BASE_URL},
}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_FILE_CACHE_PATH: Optional[str] = None


def _load_external_config() -> Dict[str, Any]:
    """Load and cache the JSON config file named by ``UNIFIED_LLM_CONFIG_FILE``.

    A missing variable or file yields an empty mapping. A file that is not a
    JSON object raises ``ValueError`` so misconfiguration is visible early.
    """
    global _FILE_CACHE, _FILE_CACHE_PATH
    path = os.getenv(CONFIG_FILE_ENV) or None
    if _FILE_CACHE is not None and _FILE_CACHE_PATH == path:
        return _FILE_CACHE
    data: Dict[str, Any] = {}
    if path and Path(path).is_file():
        loaded = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(loaded, dict):
            raise ValueError(f"{CONFIG_FILE_ENV} must contain a JSON object: {path}")
        data = loaded
    _FILE_CACHE = data
    _FILE_CACHE_PATH = path
    return data


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider.

    Merge order (later wins): defaults -> external config file -> overrides.
    ``None`` values in ``overrides`` do not clobber earlier sources.
    """
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = dict(DEFAULTS.get(name, {}))

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


def get_config_section(name: str) -> Any:
    """Return a top-level section of the external config file (``None`` if absent)."""
    return _load_external_config().get(name)


def reset_config_cache() -> None:
    """Forget the cached config file contents (used by tests)."""
    global _FILE_CACHE, _FILE_CACHE_PATH
    _FILE_CACHE = None
    _FILE_CACHE_PATH = None


__all__ = [
    "get_provider_config",
    "get_config_section",
    "reset_config_cache",
    "DEFAULTS",
    "CONFIG_FILE_ENV",
]
