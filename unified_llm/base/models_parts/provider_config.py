"""
Provider registration record.

``ProviderConfig`` captures what a caller supplies when registering a vendor
backend: the provider type key, credentials, an optional base URL override and
default request parameters merged under every outgoing request.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class ProviderConfig:
    """Immutable configuration for one registered vendor provider.

    Attributes:
        type: Provider type key (``"openai"``, ``"anthropic"``, ...).
        api_key: Vendor credential. Never logged.
        base_url: Optional API base URL; the adapter falls back to the
            configured default when omitted.
        default_params: Request parameters applied before the canonical
            payload, so per-request values win.
    """

    type: str
    api_key: str
    base_url: Optional[str] = None
    default_params: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, provider_type: str, data: Mapping[str, Any]) -> "ProviderConfig":
        """Build a config from a loose mapping (``apiKey`` / ``api_key`` accepted)."""
        api_key = data.get("api_key", data.get("apiKey"))
        base_url = data.get("base_url", data.get("baseURL", data.get("baseUrl")))
        params = data.get("default_params", data.get("defaultParams")) or {}
        return cls(
            type=provider_type.lower(),
            api_key=api_key or "",
            base_url=base_url,
            default_params=dict(params),
        )

    def __repr__(self) -> str:
        return f"ProviderConfig(type={self.type!r}, base_url={self.base_url!r}, api_key=***)"


__all__ = ["ProviderConfig"]
