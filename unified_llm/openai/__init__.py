"""
OpenAI provider package.

Exports:
- OpenAIProvider: Chat Completions adapter (also the base for compatible vendors)
"""

from .client import OpenAIProvider

__all__ = ["OpenAIProvider"]
