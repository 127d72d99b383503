"""OpenAI chat-completions translation helpers.

Purpose:
- Map canonical messages onto the OpenAI wire format, choosing between the
  legacy ``functions`` shape and the ``tools`` shape depending on what the
  request declares.
- Normalize responses and stream chunks back to the canonical schema, where
  a tool invocation is always expressed as a single ``function_call``.

No network access here; the adapter in ``client.py`` owns the transport.
"""

from __future__ import annotations

import json
import time
from collections import defaultdict, deque
from typing import Any, Deque, Dict, List, Mapping, Optional

from ..base.canonical import build_chunk, build_response, build_usage, new_completion_id
from ..base.dto.completion import CompletionRequestDTO, MessageDTO
from ..base.errors import ProtocolError

_FINISH_MAP = {
    "stop": "stop",
    "length": "length",
    "function_call": "function_call",
    "tool_calls": "function_call",
    "content_filter": "stop",
}


def map_finish_reason(reason: Optional[str]) -> Optional[str]:
    """Map an OpenAI finish reason into the canonical set (unknown -> ``stop``)."""
    if reason is None:
        return None
    return _FINISH_MAP.get(reason, "stop")


def _result_text(content: Any) -> str:
    if isinstance(content, str):
        return content
    return json.dumps(content)


def to_openai_messages(messages: List[MessageDTO], use_tools: bool) -> List[Dict[str, Any]]:
    """Translate canonical messages for the OpenAI endpoint.

    With ``use_tools`` the assistant's ``function_call`` becomes a
    ``tool_calls`` entry and each ``function_call_result`` becomes a ``tool``
    message referencing it. Call ids are synthesized as ``call_<n>`` and
    results are paired with the oldest unanswered call of the same name.
    Without ``use_tools`` results become legacy ``function`` messages.
    """
    out: List[Dict[str, Any]] = []
    pending: Dict[str, Deque[str]] = defaultdict(deque)
    counter = 0
    for msg in messages:
        if msg.function_call is not None and use_tools:
            counter += 1
            call_id = f"call_{counter}"
            pending[msg.function_call.name].append(call_id)
            out.append(
                {
                    "role": "assistant",
                    "content": msg.content,
                    "tool_calls": [
                        {
                            "id": call_id,
                            "type": "function",
                            "function": {
                                "name": msg.function_call.name,
                                "arguments": msg.function_call.arguments,
                            },
                        }
                    ],
                }
            )
            continue
        result = msg.function_call_result
        if result is not None:
            if use_tools:
                queue = pending.get(result.name)
                if queue:
                    call_id = queue.popleft()
                else:
                    counter += 1
                    call_id = msg.extras.get("tool_call_id") or f"call_{counter}"
                out.append({"role": "tool", "tool_call_id": call_id, "content": _result_text(result.content)})
            else:
                out.append({"role": "function", "name": result.name, "content": _result_text(result.content)})
            continue
        out.append(msg.to_payload())
    return out


def build_chat_body(request: CompletionRequestDTO, default_params: Mapping[str, Any]) -> Dict[str, Any]:
    """Return the request body: defaults < canonical payload < ``additional_params``."""
    body: Dict[str, Any] = dict(default_params)
    payload = request.to_payload()
    payload["messages"] = to_openai_messages(request.messages, use_tools=bool(request.tools))
    body.update(payload)
    return body


def _collapse_tool_calls(tool_calls: Any) -> Optional[Dict[str, str]]:
    """Return the last tool call as a ``function_call`` mapping."""
    if not tool_calls:
        return None
    fn = tool_calls[-1].get("function") or {}
    return {"name": fn.get("name") or "", "arguments": fn.get("arguments") or ""}


def normalize_response(data: Any, model: str) -> Dict[str, Any]:
    """Map an OpenAI completion body onto a canonical response."""
    if not isinstance(data, dict) or not data.get("choices"):
        raise ProtocolError(message="OpenAI response has no choices", body=data)
    choice = data["choices"][0]
    message = choice.get("message") or {}
    function_call = _collapse_tool_calls(message.get("tool_calls")) or message.get("function_call")
    content = None if function_call else message.get("content")
    usage = data.get("usage") or {}
    return build_response(
        model=data.get("model") or model,
        content=content,
        finish_reason=map_finish_reason(choice.get("finish_reason")),
        usage=build_usage(usage.get("prompt_tokens"), usage.get("completion_tokens")),
        function_call=function_call,
        response_id=data.get("id"),
        created=data.get("created"),
    )


class OpenAIStreamState:
    """Per-stream state for chunk normalization.

    ``response_id`` and ``created`` fill in for events that omit them, so all
    chunks of one stream share them.
    ``tool_index`` is the highest ``tool_calls`` index seen so far; fragments
    of lower-indexed calls are dropped so the stream, like a buffered
    response, carries only the latest call. A new call announces itself with
    a ``name`` fragment, after which consumers restart argument accumulation.
    """

    def __init__(self) -> None:
        self.response_id = new_completion_id()
        self.created = int(time.time())
        self.tool_index = -1

    def select_tool_fragment(self, tool_calls: List[Any]) -> Optional[Dict[str, Any]]:
        """Return the function fragment of the latest call in ``tool_calls``, if any."""
        best: Optional[Dict[str, Any]] = None
        best_index = self.tool_index
        for position, call in enumerate(tool_calls):
            index = call.get("index", position)
            if index >= best_index:
                best, best_index = call, index
        if best is None:
            return None
        self.tool_index = best_index
        return best.get("function") or {}


def _normalize_delta(delta: Mapping[str, Any], state: OpenAIStreamState) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    if delta.get("role"):
        out["role"] = delta["role"]
    if "content" in delta and delta["content"] is not None:
        out["content"] = delta["content"]
    tool_calls = delta.get("tool_calls")
    if tool_calls:
        fn = state.select_tool_fragment(tool_calls)
        if fn is not None:
            out["function_call"] = {k: v for k, v in fn.items() if k in ("name", "arguments") and v is not None}
    elif delta.get("function_call"):
        out["function_call"] = dict(delta["function_call"])
    return out


def normalize_chunk(event: Any, model: str, state: Optional[OpenAIStreamState] = None) -> Dict[str, Any]:
    """Map one OpenAI stream event onto a canonical chunk.

    Usage-only events (empty ``choices``) become an empty delta carrying the
    usage block. Pass the same ``state`` for every event of one stream.
    """
    state = state or OpenAIStreamState()
    if not isinstance(event, dict):
        raise ProtocolError(message="OpenAI stream event is not an object", body=event)
    choices = event.get("choices") or []
    choice = choices[0] if choices else {}
    usage = event.get("usage")
    return build_chunk(
        response_id=event.get("id") or state.response_id,
        model=event.get("model") or model,
        delta=_normalize_delta(choice.get("delta") or {}, state),
        finish_reason=map_finish_reason(choice.get("finish_reason")),
        created=event.get("created") or state.created,
        usage=build_usage(usage.get("prompt_tokens"), usage.get("completion_tokens")) if usage else None,
    )


__all__ = [
    "map_finish_reason",
    "to_openai_messages",
    "build_chat_body",
    "normalize_response",
    "normalize_chunk",
    "OpenAIStreamState",
]
