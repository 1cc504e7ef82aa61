"""OpenAI vendor: Chat Completions streaming provider and model resolver."""

from .client import OpenAIProvider
from .model_resolver import OpenAIModelResolver, invalidate_openai_model_cache

__all__ = ["OpenAIProvider", "OpenAIModelResolver", "invalidate_openai_model_cache"]
