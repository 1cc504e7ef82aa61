"""Callback dispatch with ordering and exactly-once terminal guarantees.

A :class:`CallbackDispatcher` wraps the caller's :class:`StreamCallbacks` for
the lifetime of one request:

- ``chunk`` forwards non-empty deltas in call order and records them, so the
  request's return value is always the concatenation of emitted chunks,
  across retries and fallbacks alike.
- ``complete`` and ``fail`` are terminal; whichever runs first wins and any
  later terminal call is ignored.
"""

from __future__ import annotations

import threading
from typing import List, Optional

from ..models import StreamCallbacks


class CallbackDispatcher:
    """Per-request wrapper around optional stream callbacks."""

    def __init__(self, callbacks: Optional[StreamCallbacks] = None) -> None:
        self._callbacks = callbacks or StreamCallbacks()
        self._parts: List[str] = []
        self._terminated = False
        self._lock = threading.Lock()

    @property
    def text(self) -> str:
        """Concatenation of every chunk emitted so far."""
        return "".join(self._parts)

    @property
    def emitted(self) -> bool:
        """True once at least one chunk was delivered."""
        return bool(self._parts)

    @property
    def terminated(self) -> bool:
        return self._terminated

    def chunk(self, text: str) -> None:
        """Record ``text`` and forward it to ``on_chunk`` (empty text is dropped)."""
        if not text:
            return
        self._parts.append(text)
        if self._callbacks.on_chunk is not None:
            self._callbacks.on_chunk(text)

    def _claim_terminal(self) -> bool:
        with self._lock:
            if self._terminated:
                return False
            self._terminated = True
            return True

    def complete(self) -> None:
        """Fire ``on_complete`` unless a terminal callback already ran."""
        if self._claim_terminal() and self._callbacks.on_complete is not None:
            self._callbacks.on_complete()

    def fail(self, error: Exception) -> None:
        """Fire ``on_error`` unless a terminal callback already ran."""
        if self._claim_terminal() and self._callbacks.on_error is not None:
            self._callbacks.on_error(error)


__all__ = ["CallbackDispatcher"]
