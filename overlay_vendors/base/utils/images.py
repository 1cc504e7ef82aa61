"""Image normalization helpers.

Callers hand images as base64 strings, optionally wrapped in a data URI
(``data:image/jpeg;base64,...``). Vendors want either the bare payload plus a
MIME type (Gemini, Anthropic) or a data URI (OpenAI-compatible APIs).

When no data-URI header is present the MIME type is inferred from the base64
magic prefix: ``iVBORw0KGgo`` png, ``/9j/`` jpeg, ``R0lGOD`` gif, ``UklGR``
webp, png otherwise.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_IMAGE_MIME = "image/png"

_MAGIC_PREFIXES = (
    ("iVBORw0KGgo", "image/png"),
    ("/9j/", "image/jpeg"),
    ("R0lGOD", "image/gif"),
    ("UklGR", "image/webp"),
)


@dataclass(frozen=True)
class InlineImage:
    """Bare base64 payload with its MIME type."""

    data: str
    mime_type: str


def infer_image_mime_type(b64: str) -> str:
    """Infer a MIME type from the base64 magic prefix (png by default)."""
    trimmed = (b64 or "").strip()
    for prefix, mime in _MAGIC_PREFIXES:
        if trimmed.startswith(prefix):
            return mime
    return DEFAULT_IMAGE_MIME


def normalize_inline_image(image: str) -> Optional[InlineImage]:
    """Split ``image`` into payload and MIME type.

    Returns ``None`` for empty input or a malformed data URI (no comma), so
    callers simply skip the image.
    """
    if not image:
        return None
    if image.startswith("data:"):
        comma = image.find(",")
        if comma == -1:
            return None
        header = image[5:comma]
        mime = header.split(";")[0] or DEFAULT_IMAGE_MIME
        data = image[comma + 1 :]
        return InlineImage(data=data, mime_type=mime) if data else None
    return InlineImage(data=image, mime_type=infer_image_mime_type(image))


def to_data_uri(image: str) -> str:
    """Return ``image`` as a data URI; bare payloads are labelled png."""
    if image.startswith("data:"):
        return image
    return f"data:{DEFAULT_IMAGE_MIME};base64,{image}"


__all__ = [
    "DEFAULT_IMAGE_MIME",
    "InlineImage",
    "infer_image_mime_type",
    "normalize_inline_image",
    "to_data_uri",
]
