"""overlay_vendors.config.env
===========================

Environment variable mapping for vendor credentials.

- ``ENV_MAP`` maps each vendor id to its canonical API key variable.
- ``ENV_ALIASES`` lists accepted alternates (canonical name first).
- Placeholder values (``changeme``, ``placeholder``, ``example``, ``test_``
  prefix) are treated as unset so sample ``.env`` files never reach a vendor.

Helpers never raise for unknown vendors or unset variables; callers decide
how to proceed.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

ENV_MAP: Dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "gemini": "GEMINI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "perplexity": "PERPLEXITY_API_KEY",
}

# Gemini keys are also commonly exported as GOOGLE_API_KEY.
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "gemini": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if ``val`` looks like a placeholder or test value.

    The check is case-insensitive and ignores surrounding whitespace.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or "example" in v or v.startswith("test_")


def get_env_var_candidates(vendor: str) -> Iterable[str]:
    """Yield acceptable API key variable names for ``vendor``, canonical first."""
    v = (vendor or "").lower()
    canonical = ENV_MAP.get(v)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(v, ()):
        if alias != canonical:
            yield alias


def resolve_vendor_key(vendor: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve an API key for ``vendor`` from the process environment.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        ``(value, env_var_used)`` for the first non-placeholder value found,
        ``(None, None)`` when nothing usable is set.
    """
    for name in get_env_var_candidates(vendor):
        val = os.environ.get(name)
        if val and not is_placeholder(val):
            return val, name
    return None, None


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "is_placeholder",
    "get_env_var_candidates",
    "resolve_vendor_key",
]
