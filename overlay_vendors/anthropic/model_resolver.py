"""Anthropic model resolver.

Discovery lists ``GET {base}/models``. Capability flags come from the
reported input modalities when present (image input is assumed otherwise).
Ranking prefers newer and larger families, then image and audio support and
a larger output ceiling.
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from ..base.model_resolver import BaseModelResolver
from ..base.models import ModelCapabilities, ResolveOptions, VendorModelInfo
from ..base.repositories.model_cache import ModelCache, get_default_model_cache
from ..config.defaults import ANTHROPIC_DEFAULT_BASE_URL, ANTHROPIC_MODEL_CACHE_KEY
from .protocol import auth_headers

# Checked in order; the first substring found wins.
_FAMILY_SCORES: Tuple[Tuple[str, float], ...] = (
    ("sonnet-4", 12.0),
    ("3-7-sonnet", 11.0),
    ("3-5-sonnet", 10.0),
    ("3-sonnet", 8.0),
    ("3-5-haiku", 6.0),
    ("3-haiku", 5.0),
)


def family_score(model: str) -> float:
    for marker, score in _FAMILY_SCORES:
        if marker in model:
            return score
    return 1.0


def _capabilities(entry: dict) -> ModelCapabilities:
    modalities = entry.get("input_modalities")
    if isinstance(modalities, list):
        images = "image" in modalities
        audio = "audio" in modalities
    else:
        images, audio = True, False
    limit = entry.get("max_output_tokens") or entry.get("maxOutputTokens")
    return ModelCapabilities(
        text=True,
        streaming=True,
        images=images,
        audio=audio,
        max_output_tokens=limit if isinstance(limit, int) else None,
    )


class AnthropicModelResolver(BaseModelResolver):
    vendor_id = "anthropic"
    cache_key = ANTHROPIC_MODEL_CACHE_KEY
    fallback_models = (
        "claude-3-5-sonnet-latest",
        "claude-3-sonnet-20240229",
        "claude-3-haiku-20240307",
        "claude-3-5-sonnet-20240620",
    )

    def default_base_url(self) -> str:
        return ANTHROPIC_DEFAULT_BASE_URL

    def discover(self, api_key: str) -> List[VendorModelInfo]:
        payload = self.get_json(f"{self.base_url}/models", headers=auth_headers(api_key))
        entries: Any = None
        if isinstance(payload, dict):
            entries = payload.get("data") or payload.get("models")
        out: List[VendorModelInfo] = []
        for entry in entries or []:
            model_id = entry.get("id") if isinstance(entry, dict) else None
            if not isinstance(model_id, str):
                continue
            out.append(
                VendorModelInfo(
                    name=model_id,
                    label=entry.get("display_name") or model_id,
                    tier="free" if "haiku" in model_id else "paid",
                    capabilities=_capabilities(entry),
                )
            )
        return out

    def score(self, model: VendorModelInfo, options: ResolveOptions) -> Any:
        caps = model.capabilities
        return (
            family_score(model.name)
            + (2.0 if caps.images else 0.0)
            + (1.0 if caps.audio else 0.0)
            + (caps.max_output_tokens or 0) / 1000
        )


def invalidate_anthropic_model_cache(cache: Optional[ModelCache] = None) -> None:
    """Drop the cached Anthropic model so the next resolution re-discovers."""
    (cache or get_default_model_cache()).invalidate(ANTHROPIC_MODEL_CACHE_KEY)


__all__ = ["AnthropicModelResolver", "invalidate_anthropic_model_cache", "family_score"]
