"""Anthropic Messages API translation helpers.

Purpose:
- Build the ``/messages`` request body from a canonical request: hoist
  system messages, express function calls and their results as
  ``tool_use`` / ``tool_result`` content blocks, merge adjacent same-role
  turns and convert tool declarations.
- Normalize a buffered Messages response to the canonical schema.

Streaming event mapping lives in ``stream_helpers.py``.
"""

from __future__ import annotations

import json
from collections import defaultdict, deque
from typing import Any, Deque, Dict, List, Mapping, Optional, Tuple

from ..base.canonical import build_response, build_usage
from ..base.dto.completion import CompletionRequestDTO, MessageDTO
from ..base.errors import ProtocolError
from ..config.defaults import DEFAULT_MAX_TOKENS

_STOP_REASON_MAP = {
    "end_turn": "stop",
    "stop_sequence": "stop",
    "max_tokens": "length",
    "tool_use": "function_call",
}

_EMPTY_SCHEMA: Dict[str, Any] = {"type": "object", "properties": {}}


def map_stop_reason(reason: Optional[str]) -> Optional[str]:
    """Map an Anthropic ``stop_reason`` to a canonical finish reason.

    Unknown reasons become ``stop``; a missing reason stays ``None``.
    """
    if reason is None:
        return None
    return _STOP_REASON_MAP.get(reason, "stop")


def split_system(messages: List[MessageDTO]) -> Tuple[Optional[str], List[MessageDTO]]:
    """Return ``(system_text, remaining_messages)``.

    All system messages are joined with a blank line; ``None`` when there
    are none.
    """
    system_parts = [m.content or "" for m in messages if m.role == "system"]
    rest = [m for m in messages if m.role != "system"]
    return ("\n\n".join(system_parts) if system_parts else None), rest


def _parse_arguments(name: str, arguments: str) -> Dict[str, Any]:
    if not arguments or not arguments.strip():
        return {}
    try:
        parsed = json.loads(arguments)
    except json.JSONDecodeError as exc:
        raise ProtocolError(message=f"function_call arguments for '{name}' are not valid JSON", raw=exc) from exc
    if not isinstance(parsed, dict):
        raise ProtocolError(message=f"function_call arguments for '{name}' must be a JSON object")
    return parsed


def _result_text(content: Any) -> str:
    if isinstance(content, str):
        return content
    return json.dumps(content)


def _append_turn(turns: List[Dict[str, Any]], role: str, blocks: List[Dict[str, Any]]) -> None:
    if not blocks:
        return
    if turns and turns[-1]["role"] == role:
        turns[-1]["content"].extend(blocks)
        return
    turns.append({"role": role, "content": list(blocks)})


def to_anthropic_messages(messages: List[MessageDTO]) -> List[Dict[str, Any]]:
    """Translate non-system canonical messages into alternating Anthropic turns.

    Tool-use ids are synthesized as ``toolu_<n>``; each result is paired with
    the oldest unanswered call of the same name. A turn holding a single
    text block is sent with plain string content.
    """
    turns: List[Dict[str, Any]] = []
    pending: Dict[str, Deque[str]] = defaultdict(deque)
    counter = 0
    for msg in messages:
        call = msg.function_call
        result = msg.function_call_result
        if call is not None:
            counter += 1
            tool_id = f"toolu_{counter}"
            pending[call.name].append(tool_id)
            blocks: List[Dict[str, Any]] = []
            if msg.content:
                blocks.append({"type": "text", "text": msg.content})
            blocks.append(
                {
                    "type": "tool_use",
                    "id": tool_id,
                    "name": call.name,
                    "input": _parse_arguments(call.name, call.arguments),
                }
            )
            _append_turn(turns, "assistant", blocks)
        elif result is not None:
            queue = pending.get(result.name)
            if queue:
                tool_id = queue.popleft()
            else:
                counter += 1
                tool_id = msg.extras.get("tool_call_id") or f"toolu_{counter}"
            _append_turn(
                turns,
                "user",
                [{"type": "tool_result", "tool_use_id": tool_id, "content": _result_text(result.content)}],
            )
        elif msg.content:
            role = "assistant" if msg.role == "assistant" else "user"
            _append_turn(turns, role, [{"type": "text", "text": msg.content}])
    for turn in turns:
        blocks = turn["content"]
        if len(blocks) == 1 and blocks[0]["type"] == "text":
            turn["content"] = blocks[0]["text"]
    return turns


def _to_tool(fn: Mapping[str, Any]) -> Dict[str, Any]:
    tool: Dict[str, Any] = {"name": fn.get("name") or ""}
    if fn.get("description"):
        tool["description"] = fn["description"]
    tool["input_schema"] = fn.get("parameters") or dict(_EMPTY_SCHEMA)
    return tool


def to_anthropic_tools(request: CompletionRequestDTO) -> List[Dict[str, Any]]:
    """Convert OpenAI ``tools`` / ``functions`` declarations into Anthropic tools."""
    tools = [_to_tool(t.get("function") or t) for t in request.tools or []]
    tools.extend(_to_tool(f) for f in request.functions or [])
    return tools


def build_messages_body(request: CompletionRequestDTO, default_params: Mapping[str, Any]) -> Dict[str, Any]:
    """Return the ``/messages`` body; ``additional_params`` is merged last."""
    system, rest = split_system(request.messages)
    body: Dict[str, Any] = dict(default_params)
    body["model"] = request.model
    body["messages"] = to_anthropic_messages(rest)
    if system is not None:
        body["system"] = system
    body["max_tokens"] = request.max_tokens or body.get("max_tokens") or DEFAULT_MAX_TOKENS
    if request.temperature is not None:
        body["temperature"] = request.temperature
    tools = to_anthropic_tools(request)
    if tools:
        body["tools"] = tools
    if request.stream:
        body["stream"] = True
    body.update(request.additional_params or {})
    return body


def normalize_response(data: Any, model: str) -> Dict[str, Any]:
    """Map an Anthropic Messages response onto a canonical response."""
    if not isinstance(data, dict):
        raise ProtocolError(message="Anthropic response is not an object", body=data)
    content = data.get("content")
    if not isinstance(content, list):
        raise ProtocolError(message="Anthropic response content is not a list", body=data)
    text = next((b.get("text") for b in content if b.get("type") == "text"), None)
    tool_uses = [b for b in content if b.get("type") == "tool_use"]
    function_call = None
    if tool_uses:
        last = tool_uses[-1]
        function_call = {"name": last.get("name") or "", "arguments": json.dumps(last.get("input") or {})}
    usage = data.get("usage") or {}
    return build_response(
        model=data.get("model") or model,
        content=None if function_call else text,
        finish_reason=map_stop_reason(data.get("stop_reason")),
        usage=build_usage(usage.get("input_tokens"), usage.get("output_tokens")),
        function_call=function_call,
        response_id=data.get("id"),
    )


__all__ = [
    "map_stop_reason",
    "split_system",
    "to_anthropic_messages",
    "to_anthropic_tools",
    "build_messages_body",
    "normalize_response",
]
