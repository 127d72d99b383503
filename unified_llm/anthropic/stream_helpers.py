"""Anthropic streaming helpers.

Purpose:
- Translate the Messages API event stream into canonical chunks. The id
  and model announced by ``message_start`` are reused for every following
  chunk; ``message_stop`` ends the stream.
"""

from __future__ import annotations

import time
from typing import Any, Dict, Iterator, Optional

from ..base.canonical import build_chunk, build_usage, new_completion_id
from ..base.errors import ProtocolError, UpstreamError
from .helpers import map_stop_reason


class _StreamState:
    """Identity and usage captured from ``message_start``."""

    def __init__(self, model: str) -> None:
        self.response_id = new_completion_id()
        self.model = model
        self.created = int(time.time())
        self.input_tokens: Optional[int] = None

    def chunk(self, delta: Dict[str, Any], finish_reason: Optional[str] = None, usage=None) -> Dict[str, Any]:
        return build_chunk(
            response_id=self.response_id,
            model=self.model,
            delta=delta,
            finish_reason=finish_reason,
            created=self.created,
            usage=usage,
        )


def _block_delta(delta: Dict[str, Any]) -> Dict[str, Any]:
    kind = delta.get("type")
    if kind == "text_delta":
        return {"content": delta.get("text", "")}
    if kind == "input_json_delta":
        return {"function_call": {"arguments": delta.get("partial_json", "")}}
    return {}


def translate_stream_events(events: Iterator[Any], model: str) -> Iterator[Dict[str, Any]]:
    """Yield canonical chunks for decoded Anthropic stream events.

    Raises:
        UpstreamError: The stream carried an ``error`` event.
        ProtocolError: An event is not a JSON object.
    """
    state = _StreamState(model)
    for event in events:
        if not isinstance(event, dict):
            raise ProtocolError(message="Anthropic stream event is not an object", body=event)
        kind = event.get("type")
        if kind == "message_stop":
            return
        if kind == "error":
            error = event.get("error") or {}
            raise UpstreamError(message=error.get("message") or "Anthropic stream error", body=event)
        if kind == "message_start":
            message = event.get("message") or {}
            state.response_id = message.get("id") or state.response_id
            state.model = message.get("model") or state.model
            state.input_tokens = (message.get("usage") or {}).get("input_tokens")
            yield state.chunk({"role": "assistant"})
        elif kind == "content_block_start":
            block = event.get("content_block") or {}
            if block.get("type") == "tool_use":
                yield state.chunk({"function_call": {"name": block.get("name") or "", "arguments": ""}})
        elif kind == "content_block_delta":
            yield state.chunk(_block_delta(event.get("delta") or {}))
        elif kind == "message_delta":
            delta = event.get("delta") or {}
            reason = delta.get("stop_reason")
            usage = event.get("usage")
            yield state.chunk(
                {},
                finish_reason=map_stop_reason(reason) if reason else None,
                usage=build_usage(state.input_tokens, usage.get("output_tokens")) if usage else None,
            )
        else:
            yield state.chunk({})


__all__ = ["translate_stream_events"]
