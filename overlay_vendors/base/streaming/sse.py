"""Server-sent events decoding.

Vendors deliver streaming responses as SSE: events separated by a blank line,
each made of ``event:`` and ``data:`` lines. :class:`SSEDecoder` is fed raw
text as it arrives (chunk boundaries are arbitrary) and yields complete
events; :meth:`SSEDecoder.flush` parses whatever remains once the body ends.

The decoder is pure (no I/O) and tolerant: comment lines, blank data lines
and event blocks without data are skipped.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List, Optional, Tuple

DONE_SENTINEL = "[DONE]"

_EVENT_BOUNDARY = re.compile(r"\r?\n\r?\n")
_LINE_BREAK = re.compile(r"\r?\n")


@dataclass(frozen=True)
class SSEEvent:
    """One decoded SSE event.

    Attributes:
        data_lines: Non-empty ``data:`` payloads in arrival order.
        event: Value of the ``event:`` field, if present.
    """

    data_lines: Tuple[str, ...]
    event: Optional[str] = None

    @property
    def data(self) -> str:
        """Data lines joined with newlines, as the SSE format prescribes."""
        return "\n".join(self.data_lines)

    @property
    def is_done(self) -> bool:
        """True when any data line is the ``[DONE]`` sentinel."""
        return any(line == DONE_SENTINEL for line in self.data_lines)

    def json(self) -> Optional[Any]:
        """Parse :attr:`data` as JSON, ignoring the ``[DONE]`` sentinel.

        Returns ``None`` when the payload is not valid JSON.
        """
        lines = [line for line in self.data_lines if line != DONE_SENTINEL]
        if not lines:
            return None
        try:
            return json.loads("\n".join(lines))
        except ValueError:
            return None

    def json_lines(self) -> List[Any]:
        """Parse each data line as its own JSON document.

        Used for servers that put several JSON frames in one event block.
        Lines that do not parse are skipped.
        """
        out: List[Any] = []
        for line in self.data_lines:
            if line == DONE_SENTINEL:
                continue
            try:
                out.append(json.loads(line))
            except ValueError:
                continue
        return out

    def payloads(self) -> List[Any]:
        """JSON documents carried by the event.

        The joined data is tried as one document first; when that fails each
        line is parsed on its own.
        """
        whole = self.json()
        if whole is not None:
            return [whole]
        return self.json_lines()


def parse_event_block(block: str) -> Optional[SSEEvent]:
    """Parse one blank-line-delimited block into an :class:`SSEEvent`.

    Returns ``None`` for blocks that carry no data.
    """
    data_lines: List[str] = []
    event: Optional[str] = None
    for line in _LINE_BREAK.split(block):
        stripped = line.strip()
        if not stripped or stripped.startswith(":"):
            continue
        if stripped.startswith("data:"):
            payload = stripped[5:].strip()
            if payload:
                data_lines.append(payload)
        elif stripped.startswith("event:"):
            event = stripped[6:].strip() or None
    if not data_lines:
        return None
    return SSEEvent(data_lines=tuple(data_lines), event=event)


class SSEDecoder:
    """Incremental SSE decoder.

    Example:
        >>> decoder = SSEDecoder()
        >>> decoder.feed('data: {"a": 1}\\n')
        []
        >>> [e.json() for e in decoder.feed("\\n")]
        [{'a': 1}]
    """

    def __init__(self) -> None:
        self._buffer = ""

    def feed(self, text: str) -> List[SSEEvent]:
        """Append ``text`` and return every event completed by it."""
        if not text:
            return []
        self._buffer += text
        blocks = _EVENT_BOUNDARY.split(self._buffer)
        self._buffer = blocks.pop()
        return [ev for ev in map(parse_event_block, blocks) if ev is not None]

    def flush(self) -> List[SSEEvent]:
        """Parse the trailing partial block left when the body ended."""
        rest, self._buffer = self._buffer, ""
        event = parse_event_block(rest) if rest.strip() else None
        return [event] if event is not None else []


def iter_sse_events(chunks: Iterable[str]) -> Iterator[SSEEvent]:
    """Yield events from an iterable of text chunks (e.g. ``iter_text()``)."""
    decoder = SSEDecoder()
    for chunk in chunks:
        yield from decoder.feed(chunk)
    yield from decoder.flush()


__all__ = ["DONE_SENTINEL", "SSEEvent", "SSEDecoder", "parse_event_block", "iter_sse_events"]
