"""Output token budgets for multimodal requests.

Image answers run longer and vendors truncate silently at the output limit,
so Gemini and Anthropic raise ``max_output_tokens`` with the image count:

    N = 0  ->  DEFAULT_MAX_OUTPUT_TOKENS
    N > 0  ->  min(ceiling, IMAGE_BASE_OUTPUT_TOKENS + (N - 1) * IMAGE_PER_IMAGE_BONUS)

The constants are configuration (see ``overlay_vendors.config.defaults``).
"""
from __future__ import annotations

from ...config.defaults import (
    DEFAULT_MAX_OUTPUT_TOKENS,
    IMAGE_BASE_OUTPUT_TOKENS,
    IMAGE_PER_IMAGE_BONUS,
    MAX_OUTPUT_TOKEN_CEILING,
)


def output_token_budget(
    image_count: int,
    *,
    default: int = DEFAULT_MAX_OUTPUT_TOKENS,
    image_base: int = IMAGE_BASE_OUTPUT_TOKENS,
    per_image_bonus: int = IMAGE_PER_IMAGE_BONUS,
    ceiling: int = MAX_OUTPUT_TOKEN_CEILING,
) -> int:
    """Return the output token budget for a request carrying ``image_count`` images."""
    if image_count <= 0:
        return default
    return min(ceiling, image_base + max(0, image_count - 1) * per_image_bonus)


def escalated_budget(base: int, *, ceiling: int = MAX_OUTPUT_TOKEN_CEILING) -> int:
    """Budget for the one-shot retry after a truncated empty answer."""
    return min(ceiling, base * 2)


__all__ = ["output_token_budget", "escalated_budget"]
