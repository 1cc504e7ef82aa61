"""OpenAI model resolver.

Discovery lists ``GET {base}/models`` and keeps chat-capable GPT models.
Ranking prefers newer families (gpt-5 > gpt-4.1 > gpt-4o > gpt-4-turbo >
gpt-4 > gpt-3.5) and, within a family, the full model over ``-mini`` and
``-nano`` variants. Ties keep listing order.
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from ..base.model_resolver import BaseModelResolver
from ..base.models import ModelCapabilities, ResolveOptions, VendorModelInfo
from ..base.openai_style_parts import bearer_headers
from ..base.repositories.model_cache import ModelCache, get_default_model_cache
from ..config.defaults import OPENAI_DEFAULT_BASE_URL, OPENAI_MODEL_CACHE_KEY

# Checked in order; the first matching prefix wins.
_FAMILY_RANK: Tuple[Tuple[str, int], ...] = (
    ("gpt-5", 6),
    ("gpt-4.1", 5),
    ("gpt-4o", 4),
    ("gpt-4-turbo", 3),
    ("gpt-4", 2),
    ("gpt-3.5", 1),
)
_VISION_FAMILIES = ("gpt-5", "gpt-4.1", "gpt-4o", "gpt-4-turbo")
_NON_CHAT_MARKERS = ("instruct", "audio", "realtime", "transcribe", "tts", "search", "image")


def _family_rank(model_id: str) -> int:
    for prefix, rank in _FAMILY_RANK:
        if model_id.startswith(prefix):
            return rank
    return 0


def _size_rank(model_id: str) -> int:
    if "-nano" in model_id:
        return -2
    if "-mini" in model_id:
        return -1
    return 0


def is_chat_model(model_id: str) -> bool:
    return model_id.startswith("gpt-") and not any(marker in model_id for marker in _NON_CHAT_MARKERS)


class OpenAIModelResolver(BaseModelResolver):
    vendor_id = "openai"
    cache_key = OPENAI_MODEL_CACHE_KEY
    fallback_models = ("gpt-4o-mini", "gpt-4o", "gpt-4-turbo", "gpt-3.5-turbo")

    def default_base_url(self) -> str:
        return OPENAI_DEFAULT_BASE_URL

    def discover(self, api_key: str) -> List[VendorModelInfo]:
        payload = self.get_json(f"{self.base_url}/models", headers=bearer_headers(api_key, stream=False))
        entries = payload.get("data") if isinstance(payload, dict) else None
        out: List[VendorModelInfo] = []
        for entry in entries or []:
            model_id = entry.get("id") if isinstance(entry, dict) else None
            if not isinstance(model_id, str) or not is_chat_model(model_id):
                continue
            out.append(
                VendorModelInfo(
                    name=model_id,
                    label=model_id,
                    tier="free" if _size_rank(model_id) < 0 else "paid",
                    capabilities=ModelCapabilities(
                        text=True,
                        streaming=True,
                        images=model_id.startswith(_VISION_FAMILIES),
                        audio=False,
                    ),
                )
            )
        return out

    def score(self, model: VendorModelInfo, options: ResolveOptions) -> Any:
        return (_family_rank(model.name), _size_rank(model.name))


def invalidate_openai_model_cache(cache: Optional[ModelCache] = None) -> None:
    """Drop the cached OpenAI model so the next resolution re-discovers."""
    (cache or get_default_model_cache()).invalidate(OPENAI_MODEL_CACHE_KEY)


__all__ = ["OpenAIModelResolver", "invalidate_openai_model_cache", "is_chat_model"]
