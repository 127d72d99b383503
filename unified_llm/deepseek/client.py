"""DeepseekProvider adapter using the OpenAI-compatible Chat Completions API.

Reuses ``OpenAIProvider`` for request/response translation and streaming,
keeping only the DeepSeek-specific pieces: provider name, default base URL
(via ``unified_llm.config``) and model claim.
"""

from __future__ import annotations

from ..openai.client import OpenAIProvider


class DeepseekProvider(OpenAIProvider):
    """Deepseek provider built on the OpenAI adapter."""

    name = "deepseek"

    def supports_model(self, model: str) -> bool:
        return model.startswith("deepseek-")
