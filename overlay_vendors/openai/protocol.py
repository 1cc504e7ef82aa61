"""OpenAI Chat Completions wire format.

Request: ``POST {base}/chat/completions`` with ``Authorization: Bearer``;
body ``{model, messages, stream, max_tokens, temperature}``. Stream frames
are ``data: {...}`` SSE events ending with ``data: [DONE]``; the delta text
lives at ``choices[0].delta.content``.

Multimodal requests turn the last user message into a part list: the text
part followed by one ``image_url`` part per image (``detail: "high"``).
"""

from __future__ import annotations

from typing import Any, List, Sequence

from ..base.errors import ApiError
from ..base.models import VendorMessage
from ..base.openai_style_parts import chat_payload, parse_chat_event, plain_messages
from ..base.openai_style_parts import extract_nonstream as _extract_chat_nonstream
from ..base.streaming import FrameResult, NonStreamResult, SSEEvent
from ..base.utils.images import to_data_uri
from ..base.utils.messages import last_user_index
from ..config.defaults import OPENAI_MAX_TOKENS, OPENAI_TEMPERATURE

INVALID_MODEL_SIGNATURE = "model_not_found"


def chat_url(base_url: str) -> str:
    return f"{base_url}/chat/completions"


def image_parts(images: Sequence[str]) -> List[dict]:
    return [{"type": "image_url", "image_url": {"url": to_data_uri(img), "detail": "high"}} for img in images]


def build_messages(messages: Sequence[VendorMessage], images: Sequence[str] = ()) -> List[dict]:
    """Return wire messages with ``images`` attached to the last user turn.

    When the conversation has no user message the images travel in a new
    trailing user message.
    """
    out = plain_messages(messages)
    if not images:
        return out
    idx = last_user_index(messages)
    if idx is None:
        out.append({"role": "user", "content": image_parts(images)})
        return out
    out[idx]["content"] = [{"type": "text", "text": messages[idx].content}, *image_parts(images)]
    return out


def build_payload(
    model: str, messages: Sequence[VendorMessage], images: Sequence[str] = (), *, stream: bool = True
) -> dict:
    return chat_payload(
        model,
        build_messages(messages, images),
        stream=stream,
        max_tokens=OPENAI_MAX_TOKENS,
        temperature=OPENAI_TEMPERATURE,
    )


def parse_event(event: SSEEvent) -> FrameResult:
    return parse_chat_event(event)


def extract_nonstream(payload: Any) -> NonStreamResult:
    return _extract_chat_nonstream(payload)


def is_invalid_model_error(error: ApiError) -> bool:
    """``model_not_found`` in the body, or a bare 404."""
    return error.status == 404 or INVALID_MODEL_SIGNATURE in (error.details or "")


__all__ = [
    "chat_url",
    "build_messages",
    "build_payload",
    "parse_event",
    "extract_nonstream",
    "is_invalid_model_error",
]
