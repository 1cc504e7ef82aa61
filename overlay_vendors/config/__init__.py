"""Unified configuration layer for vendor providers.

Goals
-----
* Centralize defaults (models, base URLs) in :mod:`.defaults`.
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) named by
       ``OVERLAY_VENDORS_CONFIG_FILE``
    3. Environment variables (``<VENDOR>_MODEL``, ``<VENDOR>_API_KEY``,
       ``<VENDOR>_BASE_URL``)
    4. Explicit overrides passed by the caller (constructor arguments)
* Single call site: ``get_provider_config(vendor)``.
* YAML is loaded only when PyYAML is installed (``pip install overlay-vendors[yaml]``).

External Config File
--------------------
JSON is tried first, then YAML. Structure example::

    gemini:
      model: gemini-2.5-pro
    perplexity:
      preferred_tier: free

Public API
----------
* get_provider_config(vendor: str, overrides: dict | None = None) -> dict
* get_model(vendor: str) -> str | None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .catalog import VENDOR_IDS, VENDOR_METADATA, get_vendor_metadata
from .defaults import (
    ANTHROPIC_DEFAULT_BASE_URL,
    GEMINI_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_BASE_URL,
    PERPLEXITY_DEFAULT_BASE_URL,
)
from .env import is_placeholder, resolve_vendor_key

try:  # Optional YAML support
    import yaml  # type: ignore
except ImportError:  # pragma: no cover
    yaml = None  # type: ignore

CONFIG_FILE_ENV = "OVERLAY_VENDORS_CONFIG_FILE"

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {"base_url": OPENAI_DEFAULT_BASE_URL},
    "gemini": {"base_url": GEMINI_DEFAULT_BASE_URL},
    "anthropic": {"base_url": ANTHROPIC_DEFAULT_BASE_URL},
    "perplexity": {"base_url": PERPLEXITY_DEFAULT_BASE_URL},
}

ENV_FIELD_MAP = {
    "model": "MODEL",
    "base_url": "BASE_URL",
}

_FILE_CACHE: Optional[Dict[str, Any]] = None


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE  # noqa: PLW0603 - module cache, reset via reset_config_cache
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv(CONFIG_FILE_ENV)
    if not path or not Path(path).is_file():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).read_text(encoding="utf-8")
    data: Any
    try:
        data = json.loads(text)
    except ValueError:
        data = yaml.safe_load(text) if yaml is not None else {}
    _FILE_CACHE = data if isinstance(data, dict) else {}
    return _FILE_CACHE


def reset_config_cache() -> None:
    """Forget the parsed config file so the next lookup re-reads it."""
    global _FILE_CACHE  # noqa: PLW0603
    _FILE_CACHE = None


def _env_overrides(vendor: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = vendor.upper()
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val and not is_placeholder(val):
            out[field] = val
    key, _ = resolve_vendor_key(vendor)
    if key:
        out["api_key"] = key
    return out


def get_provider_config(vendor: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a vendor.

    Merge order (later wins): defaults -> external config -> env vars -> overrides.
    ``None`` values in ``overrides`` never clobber lower layers.
    """
    name = (vendor or "").lower().strip()
    cfg: Dict[str, Any] = dict(DEFAULTS.get(name, {}))

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg

    cfg |= _env_overrides(name)

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


def get_model(vendor: str) -> Optional[str]:
    """Return the configured model override for ``vendor``, if any."""
    return get_provider_config(vendor).get("model")


__all__ = [
    "get_provider_config",
    "get_model",
    "reset_config_cache",
    "DEFAULTS",
    "VENDOR_IDS",
    "VENDOR_METADATA",
    "get_vendor_metadata",
]
