"""Gemini ``generateContent`` wire format.

Request: ``POST {base}/models/<id>:streamGenerateContent?alt=sse&key=<key>``
(non-streaming: ``:generateContent?key=<key>``). System messages collapse
into ``systemInstruction``; assistant turns use the ``model`` role.

Images attach only when the conversation ends on a user turn: one
``inlineData`` part per image, followed by the question and a steering
sentence asking the model to use every image.

Text extraction
---------------
Gemini's streamed JSON shape varies between API versions and gateways, so
text is looked up through an explicit ordered list of strategies: every
candidate location in :data:`CANDIDATE_PATHS` is combined with every parts
location in :data:`PART_PATHS`, and the first non-empty join of part texts
wins.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from ..base.errors import ApiError
from ..base.models import VendorMessage
from ..base.streaming import EMPTY_FRAME, FrameResult, NonStreamResult, SSEEvent
from ..base.utils.images import normalize_inline_image
from ..base.utils.messages import final_user_index, join_system_text
from ..config.defaults import GEMINI_TEMPERATURE, GEMINI_TOP_K, GEMINI_TOP_P

MODEL_PREFIX = "models/"
MAX_TOKENS_FINISH = "MAX_TOKENS"
INVALID_MODEL_SIGNATURE = "NOT_FOUND"

MULTI_IMAGE_SYSTEM_NOTE = "Consider every user-provided image together before answering."
QUESTION_IMAGE_SUFFIX = "Please use every image above when responding."
NO_QUESTION_IMAGE_TEXT = "Please analyze all of the images above when responding."

PathStep = Union[str, int]

CANDIDATE_PATHS: Tuple[Tuple[PathStep, ...], ...] = (
    ("candidates", 0),
    ("result", "candidates", 0),
    ("serverContent", "candidates", 0),
    ("completion", "candidates", 0),
    ("modelOutput", 0, "content"),
    ("modelOutput", 0),
)
PART_PATHS: Tuple[Tuple[PathStep, ...], ...] = (
    ("delta", "content", "parts"),
    ("delta", "parts"),
    ("delta", 0, "parts"),
    ("content", "parts"),
    ("content", 0, "parts"),
    ("output", 0, "content", "parts"),
)


def model_path(model: str) -> str:
    """Return ``model`` with the mandatory ``models/`` prefix."""
    return model if model.startswith(MODEL_PREFIX) else f"{MODEL_PREFIX}{model}"


def strip_model_prefix(model: str) -> str:
    return model[len(MODEL_PREFIX):] if model.startswith(MODEL_PREFIX) else model


def stream_url(base_url: str, model: str) -> str:
    return f"{base_url}/{model_path(model)}:streamGenerateContent"


def generate_url(base_url: str, model: str) -> str:
    return f"{base_url}/{model_path(model)}:generateContent"


def build_payload(
    messages: Sequence[VendorMessage], images: Sequence[str] = (), *, max_output_tokens: int
) -> Dict[str, Any]:
    inline = [img for img in (normalize_inline_image(i) for i in images) if img is not None]
    notes = [MULTI_IMAGE_SYSTEM_NOTE] if len(inline) > 1 else []
    system = join_system_text(messages, notes)

    # Blank user turns stay candidates for the images; other blank turns are dropped.
    turns = [m for m in messages if m.role != "system" and (m.content.strip() or m.role == "user")]
    target = final_user_index(turns) if inline else None
    contents: List[Dict[str, Any]] = [
        {"role": "model" if m.role == "assistant" else "user", "parts": [{"text": m.content}]}
        for idx, m in enumerate(turns)
        if m.content.strip() or idx == target
    ]
    if target is not None:
        question = turns[target].content.strip()
        steer = f"{question}\n\n{QUESTION_IMAGE_SUFFIX}" if question else NO_QUESTION_IMAGE_TEXT
        contents[-1]["parts"] = [
            *({"inlineData": {"data": img.data, "mimeType": img.mime_type}} for img in inline),
            {"text": steer},
        ]

    payload: Dict[str, Any] = {
        "contents": contents,
        "generationConfig": {
            "temperature": GEMINI_TEMPERATURE,
            "maxOutputTokens": max_output_tokens,
            "topP": GEMINI_TOP_P,
            "topK": GEMINI_TOP_K,
        },
    }
    if system:
        payload["systemInstruction"] = {"role": "system", "parts": [{"text": system}]}
    return payload


def _dig(obj: Any, path: Sequence[PathStep]) -> Any:
    for step in path:
        if isinstance(step, int):
            if not isinstance(obj, list) or len(obj) <= step:
                return None
        elif not isinstance(obj, dict):
            return None
        obj = obj[step] if isinstance(step, int) else obj.get(step)
        if obj is None:
            return None
    return obj


def _join_parts(parts: Any) -> str:
    if not isinstance(parts, list):
        return ""
    out = []
    for part in parts:
        if isinstance(part, str):
            out.append(part)
        elif isinstance(part, dict) and isinstance(part.get("text"), str):
            out.append(part["text"])
    return "".join(out)


def extract_text(payload: Any) -> str:
    """Return the first non-empty text found by the ordered strategies."""
    for candidate_path in CANDIDATE_PATHS:
        candidate = _dig(payload, candidate_path)
        if candidate is None:
            continue
        for parts_path in PART_PATHS:
            text = _join_parts(_dig(candidate, parts_path))
            if text:
                return text
    return ""


def finish_reason(payload: Any) -> Optional[str]:
    reason = _dig(payload, ("candidates", 0, "finishReason"))
    return reason if isinstance(reason, str) else None


def parse_event(event: SSEEvent) -> FrameResult:
    payloads = event.payloads()
    if not payloads:
        return EMPTY_FRAME
    text = ""
    reason: Optional[str] = None
    for payload in payloads:
        if isinstance(payload, dict) and payload.get("error"):
            return FrameResult(text=text, error=payload["error"])
        text += extract_text(payload)
        reason = finish_reason(payload) or reason
    return FrameResult(text=text, finish_reason=reason)


def extract_nonstream(payload: Any) -> NonStreamResult:
    return NonStreamResult(text=extract_text(payload), finish_reason=finish_reason(payload))


def is_invalid_model_error(error: ApiError) -> bool:
    """``NOT_FOUND`` status in the body or message, or a bare 404."""
    if error.status == 404:
        return True
    return INVALID_MODEL_SIGNATURE in (error.details or "") or INVALID_MODEL_SIGNATURE in error.message


__all__ = [
    "CANDIDATE_PATHS",
    "PART_PATHS",
    "model_path",
    "strip_model_prefix",
    "stream_url",
    "generate_url",
    "build_payload",
    "extract_text",
    "finish_reason",
    "parse_event",
    "extract_nonstream",
    "is_invalid_model_error",
]
