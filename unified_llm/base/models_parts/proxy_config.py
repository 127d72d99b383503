"""
Proxy registration record.

A proxy forwards canonical requests verbatim to a user-supplied
OpenAI-compatible endpoint. Proxies are consulted before any vendor provider,
in registration order.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from ...config.defaults import PROXY_WILDCARD


@dataclass(frozen=True)
class ProxyConfig:
    """Immutable configuration for one user-defined proxy.

    Attributes:
        name: Human-readable label used in logs.
        url: Base URL; completions are posted to ``{url}/chat/completions``.
        headers: Extra headers sent with every request.
        models: Model names (or raw identifiers) this proxy serves. ``"*"``
            matches everything.
        proxy_model: Optional model name substituted into forwarded requests.
    """

    name: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    models: Tuple[str, ...] = ()
    proxy_model: Optional[str] = None

    def matches(self, model: str, identifier: str) -> bool:
        """Return True if this proxy serves ``model`` or the raw ``identifier``."""
        return model in self.models or identifier in self.models or PROXY_WILDCARD in self.models


__all__ = ["ProxyConfig"]
