"""Streaming primitives: SSE decoding, frame results and callback dispatch."""

from .sse import DONE_SENTINEL, SSEDecoder, SSEEvent, iter_sse_events, parse_event_block
from .frames import EMPTY_FRAME, FrameResult, NonStreamResult, StreamOutcome
from .dispatcher import CallbackDispatcher

__all__ = [
    "DONE_SENTINEL",
    "SSEDecoder",
    "SSEEvent",
    "iter_sse_events",
    "parse_event_block",
    "EMPTY_FRAME",
    "FrameResult",
    "NonStreamResult",
    "StreamOutcome",
    "CallbackDispatcher",
]
