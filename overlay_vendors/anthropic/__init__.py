"""Anthropic vendor: Messages API provider and model resolver."""

from .client import AnthropicProvider
from .model_resolver import AnthropicModelResolver, invalidate_anthropic_model_cache

__all__ = ["AnthropicProvider", "AnthropicModelResolver", "invalidate_anthropic_model_cache"]
