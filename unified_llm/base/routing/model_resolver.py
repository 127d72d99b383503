"""Pure helpers for interpreting model identifiers.

No registry state lives here; ``Router.resolve`` combines these helpers with
the registered providers and proxies.
"""

from __future__ import annotations

from typing import Any, Optional, Tuple

from ..models import ParsedModel

# Ordered: the first matching prefix wins.
MODEL_PREFIXES: Tuple[Tuple[str, str], ...] = (
    ("gpt", "openai"),
    ("claude", "anthropic"),
    ("azure", "azure"),
    ("gemini", "google"),
    ("palm", "google"),
    ("command", "cohere"),
    ("deepseek", "deepseek"),
)


def parse_model_identifier(identifier: Any) -> ParsedModel:
    """Split ``provider/model`` into its parts.

    Exactly two non-empty ``/``-separated segments yield a lowercased provider
    hint and the model name; anything else (including non-strings) is
    returned as a bare model with no provider. Never raises.
    """
    if not identifier or not isinstance(identifier, str):
        return ParsedModel(provider=None, model=identifier)
    parts = identifier.split("/")
    if len(parts) == 2 and parts[0] and parts[1]:
        return ParsedModel(provider=parts[0].lower(), model=parts[1])
    return ParsedModel(provider=None, model=identifier)


def provider_type_for_model(model: str) -> Optional[str]:
    """Return the provider type implied by ``model``'s prefix, if any."""
    for prefix, provider_type in MODEL_PREFIXES:
        if model.startswith(prefix):
            return provider_type
    return None


__all__ = ["MODEL_PREFIXES", "parse_model_identifier", "provider_type_for_model"]
