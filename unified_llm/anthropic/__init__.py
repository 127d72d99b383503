"""Anthropic provider package."""

from .client import AnthropicProvider

__all__ = ["AnthropicProvider"]
