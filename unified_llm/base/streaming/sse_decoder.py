"""Server-sent-event decoding for streamed completion bodies.

Two entry points are provided:

``decode_chunk``
    Stateless decode of a single text fragment. Lines that do not start with
    ``data:`` are ignored, the ``[DONE]`` sentinel stops decoding, blank
    payloads are skipped and malformed JSON lines are logged and skipped.

``SSEDecoder``
    Stateful per-stream decoder. Network fragments may split a line in two;
    the decoder holds the trailing partial line until the next fragment (or
    :meth:`SSEDecoder.flush`) completes it, so an event straddling two reads
    is decoded exactly once.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, List, Tuple

from ...config.defaults import SSE_DATA_PREFIX, SSE_DONE_SENTINEL
from ..logging import get_logger, log_event

_logger = get_logger("streaming.sse")

# SSE line terminators only; U+2028, U+0085 and the like stay inside payloads.
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def _decode_lines(lines: List[str]) -> Tuple[List[Any], bool]:
    """Decode complete lines; return ``(events, saw_sentinel)``."""
    events: List[Any] = []
    for raw_line in lines:
        line = raw_line.strip()
        if not line.startswith(SSE_DATA_PREFIX):
            continue
        payload = line[len(SSE_DATA_PREFIX):].strip()
        if payload == SSE_DONE_SENTINEL:
            return events, True
        if not payload:
            continue
        try:
            events.append(json.loads(payload))
        except json.JSONDecodeError as exc:
            log_event(
                _logger,
                "sse.malformed_line",
                level=logging.WARNING,
                line=payload[:200],
                error=str(exc),
            )
    return events, False


def decode_chunk(fragment: str) -> List[Any]:
    """Decode one text fragment into the list of JSON events it contains.

    Events after the ``[DONE]`` sentinel are not returned. Never raises on
    malformed input.
    """
    if not fragment:
        return []
    events, _ = _decode_lines(_LINE_BREAK.split(fragment))
    return events


class SSEDecoder:
    """Incremental decoder that buffers partial lines across fragments."""

    def __init__(self) -> None:
        self._buffer = ""
        self._done = False

    @property
    def done(self) -> bool:  # noqa: D401 - short property
        """Whether the ``[DONE]`` sentinel has been seen."""
        return self._done

    def feed(self, fragment: str) -> List[Any]:
        """Feed the next fragment; return the events completed by it."""
        if self._done or not fragment:
            return []
        lines = _LINE_BREAK.split(self._buffer + fragment)
        # The last piece is an unterminated line (empty when the text ends in a break).
        self._buffer = lines.pop()
        events, self._done = _decode_lines(lines)
        if self._done:
            self._buffer = ""
        return events

    def flush(self) -> List[Any]:
        """Decode whatever remains buffered at end of input."""
        if self._done or not self._buffer:
            self._buffer = ""
            return []
        pending = self._buffer
        self._buffer = ""
        events, self._done = _decode_lines([pending])
        return events


__all__ = ["decode_chunk", "SSEDecoder"]
