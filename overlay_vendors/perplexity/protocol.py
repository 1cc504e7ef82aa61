"""Perplexity Chat Completions wire format.

OpenAI-compatible: ``POST {base}/chat/completions`` with a bearer key and
``max_tokens`` capped at 1000 for latency. Images are embedded as
``image_url`` parts, and only when the conversation ends on a user turn.

Stream deltas may arrive as a string, a part list or an object with
``text``; synchronous bodies are read from ``choices[0].message.content``
and then ``output_text``.
"""

from __future__ import annotations

import json
from typing import Any, List, Sequence

from ..base.errors import ApiError
from ..base.models import VendorMessage
from ..base.openai_style_parts import chat_payload, content_to_text, message_text, parse_chat_event, plain_messages
from ..base.openai_style_parts import finish_reason as _finish_reason
from ..base.streaming import FrameResult, NonStreamResult, SSEEvent
from ..base.utils.images import to_data_uri
from ..base.utils.messages import final_user_index
from ..config.defaults import PERPLEXITY_MAX_TOKENS, PERPLEXITY_TEMPERATURE

INVALID_MODEL_SIGNATURE = "invalid_model"


def chat_url(base_url: str) -> str:
    return f"{base_url}/chat/completions"


def build_messages(messages: Sequence[VendorMessage], images: Sequence[str] = ()) -> List[dict]:
    out = plain_messages(messages)
    idx = final_user_index(messages)
    if not images or idx is None:
        return out
    content = messages[idx].content
    parts: List[dict] = [{"type": "text", "text": content}] if content.strip() else []
    parts.extend({"type": "image_url", "image_url": {"url": to_data_uri(img)}} for img in images)
    out[idx]["content"] = parts
    return out


def build_payload(model: str, messages: Sequence[VendorMessage], images: Sequence[str] = ()) -> dict:
    return chat_payload(
        model,
        build_messages(messages, images),
        stream=True,
        max_tokens=PERPLEXITY_MAX_TOKENS,
        temperature=PERPLEXITY_TEMPERATURE,
    )


def build_fallback_payload(model: str, messages: Sequence[VendorMessage], images: Sequence[str] = ()) -> dict:
    return chat_payload(model, build_messages(messages, images), stream=False)


def delta_text(payload: Any) -> str:
    """Text of ``choices[0].delta`` (``delta.content`` or the delta itself)."""
    choices = payload.get("choices") if isinstance(payload, dict) else None
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return ""
    delta = choices[0].get("delta")
    if isinstance(delta, dict) and delta.get("content") is not None:
        return content_to_text(delta["content"])
    return content_to_text(delta)


def parse_event(event: SSEEvent) -> FrameResult:
    return parse_chat_event(event, extract=delta_text)


def extract_nonstream(payload: Any) -> NonStreamResult:
    text = message_text(payload)
    if not text and isinstance(payload, dict):
        text = content_to_text(payload.get("output_text"))
    return NonStreamResult(text=text, finish_reason=_finish_reason(payload))


def is_invalid_model_error(error: ApiError) -> bool:
    """HTTP 400 with ``invalid_model`` in the body or an ``invalid*`` error code."""
    if error.status != 400:
        return False
    body = error.details or ""
    if INVALID_MODEL_SIGNATURE in body.lower():
        return True
    try:
        parsed = json.loads(body)
    except ValueError:
        return False
    if not isinstance(parsed, dict):
        return False
    err = parsed.get("error")
    codes = [parsed.get("code")]
    if isinstance(err, dict):
        codes.extend([err.get("type"), err.get("code")])
    return any(isinstance(c, str) and "invalid" in c.lower() for c in codes)


__all__ = [
    "chat_url",
    "build_messages",
    "build_payload",
    "build_fallback_payload",
    "delta_text",
    "parse_event",
    "extract_nonstream",
    "is_invalid_model_error",
]
