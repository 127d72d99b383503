"""Provider Factory utilities.

Purpose
-------
Create vendor adapters from a provider type key. Adapter modules are imported
lazily with ``importlib`` so registering one vendor never imports the others.

Scope
-----
Supported provider types: ``openai``, ``anthropic``, ``deepseek``.
"""

from __future__ import annotations

from importlib import import_module
from typing import Dict, Optional, Type

from .errors import UnknownProviderError
from .http import HttpTransport
from .models import ProviderConfig


class ProviderFactory:
    """Create provider adapters based on a canonical type (e.g., ``"openai"``).

    Raises :class:`UnknownProviderError` for unknown types, import failures
    and missing adapter classes.
    """

    # Map canonical provider types to import paths and class names
    _PROVIDERS: Dict[str, Dict[str, str]] = {
        "openai": {"module": "unified_llm.openai.client", "class": "OpenAIProvider"},
        "anthropic": {"module": "unified_llm.anthropic.client", "class": "AnthropicProvider"},
        "deepseek": {"module": "unified_llm.deepseek.client", "class": "DeepseekProvider"},
    }

    @classmethod
    def create(cls, config: ProviderConfig, transport: Optional[HttpTransport] = None):
        """Create the adapter for ``config.type``.

        Parameters
        ----------
        config:
            Registration record; ``config.type`` selects the adapter.
        transport:
            Optional shared transport (a pooled one is used when omitted).

        Raises
        ------
        UnknownProviderError
            If the type is unknown or its adapter cannot be loaded.
        """
        name = (config.type or "").lower().strip()
        entry = cls._PROVIDERS.get(name)
        if not entry:
            raise UnknownProviderError(
                message=f"Unsupported provider type: {config.type}",
                provider=config.type,
                status=400,
            )

        module_path, class_name = entry["module"], entry["class"]
        try:
            mod = import_module(module_path)
        except ImportError as exc:  # pragma: no cover - packaging failure path
            raise UnknownProviderError(
                message=f"Failed to import module '{module_path}' for provider '{name}': {exc}",
                provider=name,
                raw=exc,
            ) from exc
        try:
            klass: Type = getattr(mod, class_name)
        except AttributeError as exc:  # pragma: no cover - packaging failure path
            raise UnknownProviderError(
                message=f"Adapter class '{class_name}' not found in '{module_path}'",
                provider=name,
                raw=exc,
            ) from exc
        return klass(config, transport)


__all__ = ["ProviderFactory"]
