"""Model resolution and the routing facade."""

from .model_resolver import MODEL_PREFIXES, parse_model_identifier, provider_type_for_model
from .router import Router

__all__ = ["MODEL_PREFIXES", "parse_model_identifier", "provider_type_for_model", "Router"]
