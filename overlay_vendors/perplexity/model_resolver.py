"""Perplexity model resolver.

Perplexity offers no reliable model listing, so "discovery" reads the static
catalog from the vendor metadata. Ranking: a tier score (3 for the preferred
tier, 1 otherwise; paid 2 / free 1 without a preference) plus a capability
score (streaming 2, images 1, audio 1, ``max_output_tokens / 10000``).
"""

from __future__ import annotations

from typing import Any, List, Optional

from ..base.model_resolver import BaseModelResolver
from ..base.models import ResolveOptions, VendorModelInfo
from ..base.repositories.model_cache import ModelCache, get_default_model_cache
from ..config.catalog import PERPLEXITY_MODEL_CATALOG
from ..config.defaults import PERPLEXITY_DEFAULT_BASE_URL, PERPLEXITY_MODEL_CACHE_KEY


def tier_score(model: VendorModelInfo, preferred_tier: Optional[str]) -> float:
    if preferred_tier:
        return 3.0 if model.tier == preferred_tier else 1.0
    return 2.0 if model.tier == "paid" else 1.0


def capability_score(model: VendorModelInfo) -> float:
    caps = model.capabilities
    return (
        (2.0 if caps.streaming else 0.0)
        + (1.0 if caps.images else 0.0)
        + (1.0 if caps.audio else 0.0)
        + (caps.max_output_tokens or 0) / 10000
    )


class PerplexityModelResolver(BaseModelResolver):
    vendor_id = "perplexity"
    cache_key = PERPLEXITY_MODEL_CACHE_KEY
    fallback_models = ("sonar", "sonar-pro", "sonar-reasoning", "sonar-reasoning-pro")

    def default_base_url(self) -> str:
        return PERPLEXITY_DEFAULT_BASE_URL

    def discover(self, api_key: str) -> List[VendorModelInfo]:
        return list(PERPLEXITY_MODEL_CATALOG)

    def score(self, model: VendorModelInfo, options: ResolveOptions) -> Any:
        return tier_score(model, options.preferred_tier) + capability_score(model)


def invalidate_perplexity_model_cache(cache: Optional[ModelCache] = None) -> None:
    """Drop the cached Perplexity model so the next resolution re-ranks."""
    (cache or get_default_model_cache()).invalidate(PERPLEXITY_MODEL_CACHE_KEY)


__all__ = [
    "PerplexityModelResolver",
    "invalidate_perplexity_model_cache",
    "tier_score",
    "capability_score",
]
