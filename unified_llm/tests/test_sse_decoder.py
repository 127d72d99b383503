"""Chunk decoder tests: sentinel handling, malformed lines and buffering."""

from __future__ import annotations

import json

from unified_llm.base.streaming import SSEDecoder, decode_chunk


def _line(obj) -> str:
    return f"data: {json.dumps(obj)}\n"


def test_stops_at_sentinel_even_if_more_lines_follow():
    body = "".join(_line({"n": i}) for i in range(4)) + "data: [DONE]\n" + _line({"n": 99})
    events = decode_chunk(body)
    assert [e["n"] for e in events] == [0, 1, 2, 3]  # nosec B101


def test_malformed_line_is_skipped_in_order(log_capture):
    body = (
        _line({"n": 1})
        + _line({"n": 2})
        + _line({"n": 3})
        + "data: {not json\n"
        + _line({"n": 4})
        + _line({"n": 5})
    )
    events = decode_chunk(body)
    assert [e["n"] for e in events] == [1, 2, 3, 4, 5]  # nosec B101
    assert any(e.get("event") == "sse.malformed_line" for e in log_capture)  # nosec B101


def test_ignores_non_data_lines_and_blank_payloads():
    body = ": keep-alive\nevent: message_start\ndata:\n  data: {\"a\": 1}\r\nid: 7\n"
    assert decode_chunk(body) == [{"a": 1}]  # nosec B101


def test_marker_without_space_is_accepted():
    assert decode_chunk('data:{"a": 2}\n') == [{"a": 2}]  # nosec B101


def test_empty_fragment():
    assert decode_chunk("") == []  # nosec B101


def test_decoder_buffers_split_line_across_fragments():
    decoder = SSEDecoder()
    first = decoder.feed('data: {"id": 1}\ndata: {"te')
    second = decoder.feed('xt": "hi"}\n\n')
    assert first == [{"id": 1}]  # nosec B101
    assert second == [{"text": "hi"}]  # nosec B101
    assert decoder.flush() == []  # nosec B101


def test_decoder_flush_decodes_unterminated_last_line():
    decoder = SSEDecoder()
    assert decoder.feed('data: {"a": 1}') == []  # nosec B101
    assert decoder.flush() == [{"a": 1}]  # nosec B101


def test_decoder_ignores_input_after_sentinel():
    decoder = SSEDecoder()
    events = decoder.feed('data: {"a": 1}\ndata: [DONE]\ndata: {"a": 2}\n')
    assert events == [{"a": 1}]  # nosec B101
    assert decoder.done  # nosec B101
    assert decoder.feed('data: {"a": 3}\n') == []  # nosec B101
    assert decoder.flush() == []  # nosec B101


def test_unicode_line_separators_inside_json_strings_are_kept(log_capture):
    body = 'data: {"choices": [{"delta": {"content": "a\u2028b\u2029c\u0085d"}}]}\n\n'
    expected = [{"choices": [{"delta": {"content": "a\u2028b\u2029c\u0085d"}}]}]
    assert decode_chunk(body) == expected  # nosec B101
    decoder = SSEDecoder()
    assert decoder.feed(body[:30]) == []  # nosec B101
    assert decoder.feed(body[30:]) == expected  # nosec B101
    assert decoder.flush() == []  # nosec B101
    assert not [e for e in log_capture if e.get("event") == "sse.malformed_line"]  # nosec B101


def test_crlf_and_cr_terminate_lines():
    decoder = SSEDecoder()
    assert decoder.feed('data: {"a": 1}\r\ndata: {"a": 2}\r') == [{"a": 1}, {"a": 2}]  # nosec B101
    assert decoder.feed('\ndata: {"a": 3}\r\n') == [{"a": 3}]  # nosec B101
