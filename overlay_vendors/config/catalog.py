"""Vendor metadata catalog.

Static, read-only description of the four supported vendors: labels shown in
settings, capability toggles and default models. Perplexity carries a static
model catalog because its API offers no reliable model introspection.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

from ..base.models import ModelCapabilities, VendorMetadata, VendorModelInfo
from .defaults import (
    ANTHROPIC_DEFAULT_MODEL,
    GEMINI_DEFAULT_MODEL,
    OPENAI_DEFAULT_MODEL,
    PERPLEXITY_DEFAULT_MODEL,
)

VENDOR_IDS: Tuple[str, ...] = ("openai", "gemini", "anthropic", "perplexity")


def _sonar(name: str, label: str, tier: str, *, streaming: bool, images: bool, max_tokens: int) -> VendorModelInfo:
    return VendorModelInfo(
        name=name,
        label=label,
        tier=tier,  # type: ignore[arg-type]
        capabilities=ModelCapabilities(
            text=True, streaming=streaming, images=images, audio=False, max_output_tokens=max_tokens
        ),
    )


PERPLEXITY_MODEL_CATALOG: Tuple[VendorModelInfo, ...] = (
    _sonar("sonar-pro", "Sonar Pro", "paid", streaming=True, images=True, max_tokens=8000),
    _sonar("sonar", "Sonar", "free", streaming=True, images=True, max_tokens=6000),
    _sonar("sonar-reasoning-pro", "Sonar Reasoning Pro", "paid", streaming=True, images=True, max_tokens=8000),
    _sonar("sonar-reasoning", "Sonar Reasoning", "paid", streaming=True, images=False, max_tokens=4000),
    _sonar("sonar-deep-research", "Sonar Deep Research", "paid", streaming=False, images=False, max_tokens=20000),
)

VENDOR_METADATA: Mapping[str, VendorMetadata] = MappingProxyType(
    {
        "openai": VendorMetadata(
            id="openai",
            label="OpenAI (ChatGPT)",
            description="OpenAI GPT models with multimodal support. Fastest with GPT-4o-mini.",
            supports_images=True,
            supports_meetings_audio=True,
            supports_audio_recorder=True,
            supports_audio_summary=True,
            default_model=OPENAI_DEFAULT_MODEL,
        ),
        "gemini": VendorMetadata(
            id="gemini",
            label="Google Gemini",
            description="Google Gemini multimodal models with high-quality reasoning.",
            supports_images=True,
            supports_meetings_audio=False,
            supports_audio_recorder=False,
            supports_audio_summary=True,
            default_model=GEMINI_DEFAULT_MODEL,
        ),
        "anthropic": VendorMetadata(
            id="anthropic",
            label="Claude (Anthropic)",
            description="Claude 3 family with fast and reliable text generation.",
            supports_images=True,
            supports_meetings_audio=False,
            supports_audio_recorder=False,
            supports_audio_summary=True,
            default_model=ANTHROPIC_DEFAULT_MODEL,
        ),
        "perplexity": VendorMetadata(
            id="perplexity",
            label="Perplexity",
            description="Perplexity conversational search with web-grounded answers.",
            supports_images=True,
            supports_meetings_audio=False,
            supports_audio_recorder=False,
            supports_audio_summary=False,
            default_model=PERPLEXITY_DEFAULT_MODEL,
            model_catalog=PERPLEXITY_MODEL_CATALOG,
        ),
    }
)


def get_vendor_metadata(vendor_id: str) -> VendorMetadata:
    """Return the metadata for ``vendor_id``.

    Raises:
        KeyError: ``vendor_id`` is not one of :data:`VENDOR_IDS`.
    """
    try:
        return VENDOR_METADATA[(vendor_id or "").lower().strip()]
    except KeyError:
        raise KeyError(f"Unknown vendor '{vendor_id}'") from None


__all__ = ["VENDOR_IDS", "VENDOR_METADATA", "PERPLEXITY_MODEL_CATALOG", "get_vendor_metadata"]
