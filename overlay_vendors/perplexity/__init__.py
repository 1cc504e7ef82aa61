"""Perplexity vendor: Sonar streaming provider and catalog-based resolver."""

from .client import PerplexityProvider
from .model_resolver import PerplexityModelResolver, invalidate_perplexity_model_cache

__all__ = ["PerplexityProvider", "PerplexityModelResolver", "invalidate_perplexity_model_cache"]
