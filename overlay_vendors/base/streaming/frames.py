"""Per-frame and per-attempt streaming results.

Vendor protocol modules translate each SSE event into a :class:`FrameResult`;
the provider folds those into a :class:`StreamOutcome` for the attempt and
decides whether the non-streaming fallback must run.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class FrameResult:
    """What one SSE event contributed.

    Attributes:
        text: Decoded text delta (empty when the frame carries none).
        done: The frame signals the end of the stream.
        finish_reason: Vendor finish reason reported by the frame, if any.
        error: Vendor error payload carried inside the stream, if any.
    """

    text: str = ""
    done: bool = False
    finish_reason: Optional[str] = None
    error: Optional[Any] = None


EMPTY_FRAME = FrameResult()


@dataclass
class StreamOutcome:
    """Accumulated state of one streaming attempt.

    Attributes:
        text: Concatenated text emitted during this attempt.
        saw_done: A terminal frame (``[DONE]``, ``message_stop``) arrived.
        finish_reason: Last finish reason reported by the vendor.
        frames: Number of SSE events received.
    """

    text: str = ""
    saw_done: bool = False
    finish_reason: Optional[str] = None
    frames: int = 0

    def absorb(self, frame: FrameResult) -> None:
        """Fold one frame into the outcome."""
        self.frames += 1
        if frame.text:
            self.text += frame.text
        if frame.finish_reason:
            self.finish_reason = frame.finish_reason
        if frame.done:
            self.saw_done = True

    @property
    def has_text(self) -> bool:
        return bool(self.text.strip())


@dataclass(frozen=True)
class NonStreamResult:
    """Text and finish reason extracted from a synchronous JSON body."""

    text: str = ""
    finish_reason: Optional[str] = None


__all__ = ["FrameResult", "EMPTY_FRAME", "StreamOutcome", "NonStreamResult"]
