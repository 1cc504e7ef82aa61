from __future__ import annotations

from overlay_vendors.base.models import StreamCallbacks
from overlay_vendors.base.streaming import CallbackDispatcher, FrameResult, StreamOutcome


def test_dispatcher_forwards_chunks_in_order_and_drops_empty(recorder):
    d = CallbackDispatcher(recorder.callbacks)
    for piece in ("a", "", "b", "c"):
        d.chunk(piece)
    assert recorder.chunks == ["a", "b", "c"]
    assert d.text == "abc"
    assert d.emitted


def test_terminal_callback_fires_exactly_once(recorder):
    d = CallbackDispatcher(recorder.callbacks)
    d.complete()
    d.complete()
    d.fail(RuntimeError("late"))
    assert recorder.completed == 1
    assert recorder.errors == []
    assert d.terminated


def test_error_wins_when_first(recorder):
    d = CallbackDispatcher(recorder.callbacks)
    err = RuntimeError("boom")
    d.fail(err)
    d.complete()
    assert recorder.errors == [err]
    assert recorder.completed == 0


def test_dispatcher_without_callbacks_still_accumulates():
    d = CallbackDispatcher(StreamCallbacks())
    d.chunk("x")
    d.complete()
    assert d.text == "x"
    assert not CallbackDispatcher().emitted


def test_stream_outcome_absorbs_frames():
    outcome = StreamOutcome()
    outcome.absorb(FrameResult(text="  "))
    assert not outcome.has_text
    outcome.absorb(FrameResult(text="hi", finish_reason="length"))
    outcome.absorb(FrameResult(done=True))
    assert outcome.text == "  hi"
    assert outcome.has_text
    assert outcome.saw_done
    assert outcome.finish_reason == "length"
    assert outcome.frames == 3
