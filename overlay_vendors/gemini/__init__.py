"""Gemini vendor: streaming provider, wire protocol and model resolver."""

from .client import GeminiProvider
from .model_resolver import GeminiModelResolver, invalidate_gemini_model_cache

__all__ = ["GeminiProvider", "GeminiModelResolver", "invalidate_gemini_model_cache"]
