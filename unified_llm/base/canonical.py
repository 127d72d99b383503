"""
Builders for the canonical (OpenAI chat-completion shaped) payloads.

Responses and stream chunks travel through the package as plain dicts so they
serialize to the exact wire shape without conversion. Adapters build them
through these helpers so every vendor produces identical envelopes.
"""
from __future__ import annotations

import time
import uuid
from typing import Any, Dict, Optional

FINISH_REASONS = frozenset({"stop", "length", "function_call"})

RESPONSE_OBJECT = "chat.completion"
CHUNK_OBJECT = "chat.completion.chunk"


def new_completion_id() -> str:
    """Return a fresh ``chatcmpl-<hex>`` identifier."""
    return f"chatcmpl-{uuid.uuid4().hex}"


def build_usage(prompt_tokens: Optional[int] = None, completion_tokens: Optional[int] = None) -> Dict[str, int]:
    """Return a usage block; missing counts become 0 and total is their sum."""
    prompt = int(prompt_tokens or 0)
    completion = int(completion_tokens or 0)
    return {
        "prompt_tokens": prompt,
        "completion_tokens": completion,
        "total_tokens": prompt + completion,
    }


def build_response(
    *,
    model: str,
    content: Optional[str],
    finish_reason: Optional[str],
    usage: Optional[Dict[str, int]] = None,
    function_call: Optional[Dict[str, str]] = None,
    response_id: Optional[str] = None,
    created: Optional[int] = None,
) -> Dict[str, Any]:
    """Assemble a single-choice ``chat.completion`` response."""
    message: Dict[str, Any] = {"role": "assistant", "content": content}
    if function_call is not None:
        message["function_call"] = function_call
    return {
        "id": response_id or new_completion_id(),
        "object": RESPONSE_OBJECT,
        "created": created if created is not None else int(time.time()),
        "model": model,
        "choices": [{"index": 0, "message": message, "finish_reason": finish_reason}],
        "usage": usage if usage is not None else build_usage(),
    }


def build_chunk(
    *,
    response_id: str,
    model: str,
    delta: Optional[Dict[str, Any]] = None,
    finish_reason: Optional[str] = None,
    created: Optional[int] = None,
    usage: Optional[Dict[str, int]] = None,
) -> Dict[str, Any]:
    """Assemble a single-choice ``chat.completion.chunk``."""
    chunk: Dict[str, Any] = {
        "id": response_id,
        "object": CHUNK_OBJECT,
        "created": created if created is not None else int(time.time()),
        "model": model,
        "choices": [{"index": 0, "delta": dict(delta or {}), "finish_reason": finish_reason}],
    }
    if usage is not None:
        chunk["usage"] = usage
    return chunk


__all__ = [
    "FINISH_REASONS",
    "RESPONSE_OBJECT",
    "CHUNK_OBJECT",
    "new_completion_id",
    "build_usage",
    "build_response",
    "build_chunk",
]
