"""Cooperative cancellation token.

The host hands a ``CancellationToken`` to ``stream_*`` calls and cancels it
from another thread (e.g. when the user closes the overlay). The streaming
loop polls the token between SSE events, closes the response and raises
:class:`~overlay_vendors.base.errors.CancelledError`.

A session-wide token can hand out per-request children with :meth:`child`;
cancelling the parent stops every request started from it.
"""

from __future__ import annotations

import threading
from typing import List, Optional

from ..errors import CancelledError


class CancellationToken:
    """Thread-safe cancel flag with a reason and cascading children."""

    def __init__(self, *, parent: Optional["CancellationToken"] = None) -> None:
        self._event = threading.Event()
        self._reason: Optional[str] = None
        self._lock = threading.Lock()
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent._adopt(self)

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        """Reason given to the first :meth:`cancel` call."""
        return self._reason

    def cancel(self, reason: Optional[str] = None) -> None:
        """Request cancellation; later calls keep the first reason."""
        with self._lock:
            if self._event.is_set():
                return
            self._reason = reason
            self._event.set()
            children, self._children = self._children, []
        for child in children:
            child.cancel(reason)

    def _adopt(self, token: "CancellationToken") -> None:
        with self._lock:
            if not self._event.is_set():
                self._children.append(token)
                return
        token.cancel(self._reason)

    def child(self) -> "CancellationToken":
        """Return a new token cancelled together with this one."""
        return CancellationToken(parent=self)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until cancelled or ``timeout`` elapses; True when cancelled."""
        return self._event.wait(timeout)

    def raise_if_cancelled(self, provider: str = "-") -> None:
        """Raise ``CancelledError`` (carrying the reason) once cancelled."""
        if self._event.is_set():
            raise CancelledError(self._reason or "operation cancelled", provider=provider)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self.cancelled}, reason={self._reason!r})"


__all__ = ["CancellationToken"]
