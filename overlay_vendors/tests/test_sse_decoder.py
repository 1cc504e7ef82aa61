from __future__ import annotations

from overlay_vendors.base.streaming import SSEDecoder, iter_sse_events, parse_event_block


def test_events_split_across_arbitrary_chunk_boundaries():
    body = 'data: {"a": 1}\n\nevent: ping\ndata: {"b": 2}\n\ndata: [DONE]\n\n'
    pieces = [body[i : i + 3] for i in range(0, len(body), 3)]
    events = list(iter_sse_events(pieces))
    assert [e.json() for e in events[:2]] == [{"a": 1}, {"b": 2}]
    assert events[1].event == "ping"
    assert events[2].is_done
    assert events[2].json() is None


def test_crlf_delimiters_are_accepted():
    decoder = SSEDecoder()
    events = decoder.feed('data: {"x": "y"}\r\n\r\n')
    assert [e.json() for e in events] == [{"x": "y"}]


def test_flush_returns_trailing_event_without_blank_line():
    decoder = SSEDecoder()
    assert decoder.feed('data: {"tail": true}') == []
    events = decoder.flush()
    assert len(events) == 1
    assert events[0].json() == {"tail": True}
    assert decoder.flush() == []


def test_comments_and_empty_data_lines_are_skipped():
    assert parse_event_block(": keep-alive") is None
    assert parse_event_block("data:\nevent: noop") is None
    ev = parse_event_block(': comment\ndata: {"ok": 1}')
    assert ev is not None and ev.json() == {"ok": 1}


def test_multiline_data_joins_or_splits_into_documents():
    joined = parse_event_block('data: {"a":\ndata: 1}')
    assert joined.payloads() == [{"a": 1}]

    packed = parse_event_block('data: {"a": 1}\ndata: {"b": 2}')
    assert packed.json() is None
    assert packed.payloads() == [{"a": 1}, {"b": 2}]


def test_invalid_json_yields_no_payloads():
    ev = parse_event_block("data: not json")
    assert ev.json() is None
    assert ev.payloads() == []
