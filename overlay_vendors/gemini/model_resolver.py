"""Gemini model resolver.

Discovery lists ``GET {base}/models?key=<key>`` and keeps models that
support ``generateContent`` or ``streamGenerateContent``. Ranking follows
version and tier: 2.5-pro > 2.5-flash > 2.0-pro > 2.0-flash > 1.5-pro >
1.5-flash > 1.0-pro > other flash models. Identifiers are returned with the
``models/`` prefix; exclusions match with or without it.
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from ..base.model_resolver import BaseModelResolver
from ..base.models import ModelCapabilities, ResolveOptions, VendorModelInfo
from ..base.repositories.model_cache import ModelCache, get_default_model_cache
from ..config.defaults import GEMINI_DEFAULT_BASE_URL, GEMINI_MODEL_CACHE_KEY
from .protocol import model_path, strip_model_prefix

_GENERATION_METHODS = ("generateContent", "streamGenerateContent")

# Checked in order; the first substring found wins.
_VERSION_SCORES: Tuple[Tuple[str, float], ...] = (
    ("2.5-pro", 5.0),
    ("2.5-flash", 4.0),
    ("2.0-pro", 3.5),
    ("2.0-flash", 3.0),
    ("1.5-pro", 2.0),
    ("1.5-flash", 1.5),
    ("1.0-pro", 1.0),
    ("flash", 0.5),
)


def version_score(model: str) -> float:
    for marker, score in _VERSION_SCORES:
        if marker in model:
            return score
    return 0.0


class GeminiModelResolver(BaseModelResolver):
    vendor_id = "gemini"
    cache_key = GEMINI_MODEL_CACHE_KEY
    fallback_models = (
        "models/gemini-2.5-flash",
        "models/gemini-2.0-flash",
        "models/gemini-flash-latest",
        "models/gemini-1.5-flash-latest",
    )

    def default_base_url(self) -> str:
        return GEMINI_DEFAULT_BASE_URL

    def normalize_model_id(self, model: str) -> str:
        return strip_model_prefix(model)

    def present_model_id(self, model: str) -> str:
        return model_path(model)

    def discover(self, api_key: str) -> List[VendorModelInfo]:
        payload = self.get_json(f"{self.base_url}/models", params={"key": api_key})
        entries = payload.get("models") if isinstance(payload, dict) else None
        out: List[VendorModelInfo] = []
        for entry in entries or []:
            if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
                continue
            methods = entry.get("supportedGenerationMethods") or []
            if not any(m in methods for m in _GENERATION_METHODS):
                continue
            name = model_path(entry["name"])
            limit = entry.get("outputTokenLimit")
            out.append(
                VendorModelInfo(
                    name=name,
                    label=entry.get("displayName") or strip_model_prefix(name),
                    tier="free" if "flash" in name else "paid",
                    capabilities=ModelCapabilities(
                        text=True,
                        streaming=True,
                        images=True,
                        audio=False,
                        max_output_tokens=limit if isinstance(limit, int) else None,
                    ),
                )
            )
        return out

    def score(self, model: VendorModelInfo, options: ResolveOptions) -> Any:
        return version_score(strip_model_prefix(model.name))


def invalidate_gemini_model_cache(cache: Optional[ModelCache] = None) -> None:
    """Drop the cached Gemini model so the next resolution re-discovers."""
    (cache or get_default_model_cache()).invalidate(GEMINI_MODEL_CACHE_KEY)


__all__ = ["GeminiModelResolver", "invalidate_gemini_model_cache", "version_score"]
