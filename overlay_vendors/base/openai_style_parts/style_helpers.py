"""
Helper utilities for OpenAI-compatible Chat Completions vendors.

Purpose:
- Centralize the payload and frame handling shared by OpenAI and Perplexity,
  whose ``/chat/completions`` endpoints speak the same wire format.
- Translate our DTOs into request bodies and interpret streaming frames and
  synchronous bodies.

External dependencies:
- None beyond our own DTOs and streaming primitives; no network I/O happens
  here, callers own the HTTP exchange.
"""

from __future__ import annotations

import typing as _t

from ..models import VendorMessage
from ..streaming import EMPTY_FRAME, FrameResult, NonStreamResult, SSEEvent


def bearer_headers(api_key: str, *, stream: bool = True) -> dict:
    """Return ``Authorization``/``Content-Type`` headers for a bearer-key vendor."""
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }
    if stream:
        headers["Accept"] = "text/event-stream"
    return headers


def plain_messages(messages: _t.Sequence[VendorMessage]) -> list[dict]:
    """Return messages in the ``[{"role", "content"}]`` shape."""
    return [m.to_dict() for m in messages]


def chat_payload(
    model: str,
    messages: list[dict],
    *,
    stream: bool,
    max_tokens: int | None = None,
    temperature: float | None = None,
) -> dict:
    """Build a Chat Completions body; ``None`` knobs are omitted."""
    body: dict = {"model": model, "messages": messages, "stream": stream}
    if max_tokens is not None:
        body["max_tokens"] = max_tokens
    if temperature is not None:
        body["temperature"] = temperature
    return body


def _first_choice(payload: _t.Any) -> dict:
    if not isinstance(payload, dict):
        return {}
    choices = payload.get("choices")
    if isinstance(choices, list) and choices and isinstance(choices[0], dict):
        return choices[0]
    return {}


def content_to_text(content: _t.Any) -> str:
    """Flatten a ``content`` value that may be a string, a part list or ``{"text"}``."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "".join(content_to_text(part) for part in content)
    if isinstance(content, dict):
        text = content.get("text")
        if isinstance(text, str):
            return text
        if "content" in content:
            return content_to_text(content["content"])
    return ""


def delta_text(payload: _t.Any) -> str:
    """Return ``choices[0].delta.content`` as text (empty when absent)."""
    delta = _first_choice(payload).get("delta")
    if not isinstance(delta, dict):
        return ""
    return content_to_text(delta.get("content"))


def message_text(payload: _t.Any) -> str:
    """Return ``choices[0].message.content`` from a synchronous body."""
    message = _first_choice(payload).get("message")
    if not isinstance(message, dict):
        return ""
    return content_to_text(message.get("content"))


def finish_reason(payload: _t.Any) -> str | None:
    reason = _first_choice(payload).get("finish_reason")
    return reason if isinstance(reason, str) else None


def parse_chat_event(
    event: SSEEvent, extract: _t.Callable[[_t.Any], str] = delta_text
) -> FrameResult:
    """Translate one Chat Completions SSE event into a :class:`FrameResult`.

    Every JSON document carried by the event is inspected (some gateways pack
    several ``data:`` lines into one block). ``[DONE]`` marks the end of the
    stream; an ``{"error": ...}`` document is reported as a frame error.
    """
    payloads = event.payloads()
    if not payloads and not event.is_done:
        return EMPTY_FRAME
    text = ""
    reason: str | None = None
    for payload in payloads:
        if isinstance(payload, dict) and payload.get("error"):
            return FrameResult(text=text, error=payload["error"])
        text += extract(payload)
        reason = finish_reason(payload) or reason
    return FrameResult(text=text, done=event.is_done, finish_reason=reason)


def extract_nonstream(payload: _t.Any) -> NonStreamResult:
    """Read the assistant text of a synchronous Chat Completions body."""
    return NonStreamResult(text=message_text(payload), finish_reason=finish_reason(payload))


__all__ = [
    "bearer_headers",
    "plain_messages",
    "chat_payload",
    "content_to_text",
    "delta_text",
    "message_text",
    "finish_reason",
    "parse_chat_event",
    "extract_nonstream",
]
