"""Anthropic Messages API wire format.

Request: ``POST {base}/messages`` with ``x-api-key``,
``anthropic-version`` and ``Accept: text/event-stream``; body
``{model, max_tokens, system?, messages, stream}``. System messages join
into the top-level ``system`` string.

Stream events are typed: ``content_block_delta`` carries ``delta.text``,
``message_delta`` carries the stop reason, ``message_stop`` ends the stream
and ``error`` reports a vendor failure mid-stream.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from ..base.errors import ApiError
from ..base.models import VendorMessage
from ..base.streaming import EMPTY_FRAME, FrameResult, NonStreamResult, SSEEvent
from ..base.utils.images import normalize_inline_image
from ..base.utils.messages import last_user_index, split_system
from ..config.defaults import ANTHROPIC_API_VERSION

INVALID_MODEL_SIGNATURE = "not_found"

QUESTION_IMAGE_SUFFIX = "Please answer the question above using every image provided."
NO_QUESTION_IMAGE_TEXT = "Please analyze every image provided in this message."


def messages_url(base_url: str) -> str:
    return f"{base_url}/messages"


def auth_headers(api_key: str) -> Dict[str, str]:
    return {
        "x-api-key": api_key,
        "anthropic-version": ANTHROPIC_API_VERSION,
        "Content-Type": "application/json",
    }


def stream_headers(api_key: str) -> Dict[str, str]:
    return {**auth_headers(api_key), "Accept": "text/event-stream"}


def _image_blocks(images: Sequence[str]) -> List[Dict[str, Any]]:
    blocks = []
    for image in images:
        inline = normalize_inline_image(image)
        if inline is None:
            continue
        blocks.append(
            {"type": "image", "source": {"type": "base64", "media_type": inline.mime_type, "data": inline.data}}
        )
    return blocks


def build_messages(messages: Sequence[VendorMessage], images: Sequence[str] = ()) -> List[Dict[str, Any]]:
    """Return wire messages; images go to the last user turn.

    Blank messages are dropped unless they are the last user turn and
    images are attached, in which case the turn carries the images and a
    request to analyze them. Without any user turn the images are sent in a
    new trailing user message.
    """
    conversation = [m for m in messages if m.role != "system"]
    blocks = _image_blocks(images)
    target = last_user_index(conversation) if blocks else None
    out: List[Dict[str, Any]] = []
    for idx, m in enumerate(conversation):
        text = m.content.strip()
        if idx == target:
            if text:
                content = [{"type": "text", "text": text}, *blocks, {"type": "text", "text": QUESTION_IMAGE_SUFFIX}]
            else:
                content = [*blocks, {"type": "text", "text": NO_QUESTION_IMAGE_TEXT}]
            out.append({"role": m.role, "content": content})
        elif text:
            out.append({"role": m.role, "content": [{"type": "text", "text": text}]})
    if blocks and target is None:
        out.append({"role": "user", "content": [*blocks, {"type": "text", "text": NO_QUESTION_IMAGE_TEXT}]})
    return out


def build_payload(
    model: str,
    messages: Sequence[VendorMessage],
    images: Sequence[str] = (),
    *,
    max_tokens: int,
    stream: bool = True,
) -> Dict[str, Any]:
    system, _ = split_system(messages)
    payload: Dict[str, Any] = {"model": model, "max_tokens": max_tokens}
    if system:
        payload["system"] = system
    payload["messages"] = build_messages(messages, images)
    payload["stream"] = stream
    return payload


def parse_event(event: SSEEvent) -> FrameResult:
    payload = event.json()
    if not isinstance(payload, dict):
        return EMPTY_FRAME
    kind = payload.get("type") or event.event
    if kind == "content_block_delta":
        delta = payload.get("delta") or {}
        text = delta.get("text") if isinstance(delta, dict) else None
        return FrameResult(text=text if isinstance(text, str) else "")
    if kind == "message_delta":
        delta = payload.get("delta") or {}
        reason = delta.get("stop_reason") if isinstance(delta, dict) else None
        return FrameResult(finish_reason=reason if isinstance(reason, str) else None)
    if kind == "message_stop":
        return FrameResult(done=True)
    if kind == "error":
        return FrameResult(error=payload.get("error") or payload)
    return EMPTY_FRAME


def extract_nonstream(payload: Any) -> NonStreamResult:
    if not isinstance(payload, dict):
        return NonStreamResult()
    blocks = payload.get("content")
    text = ""
    if isinstance(blocks, list):
        text = "".join(
            b["text"] for b in blocks if isinstance(b, dict) and b.get("type") == "text" and isinstance(b.get("text"), str)
        )
    reason: Optional[str] = payload.get("stop_reason") if isinstance(payload.get("stop_reason"), str) else None
    return NonStreamResult(text=text, finish_reason=reason)


def is_invalid_model_error(error: ApiError) -> bool:
    """``not_found`` anywhere in the vendor body."""
    return INVALID_MODEL_SIGNATURE in (error.details or "")


__all__ = [
    "messages_url",
    "auth_headers",
    "stream_headers",
    "build_messages",
    "build_payload",
    "parse_event",
    "extract_nonstream",
    "is_invalid_model_error",
]
