"""
Stable import surface for provider-agnostic data records.

The concrete classes live in ``models_parts`` (one per module); import them
from here.
"""
from __future__ import annotations

from .models_parts import ParsedModel, ProviderConfig, ProxyConfig, Resolution

__all__ = ["ParsedModel", "ProviderConfig", "ProxyConfig", "Resolution"]
