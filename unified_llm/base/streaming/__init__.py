"""Streaming primitives: SSE decoding and the cancellable chunk stream."""

from .completion_stream import CompletionStream
from .sse_decoder import SSEDecoder, decode_chunk

__all__ = ["CompletionStream", "SSEDecoder", "decode_chunk"]
