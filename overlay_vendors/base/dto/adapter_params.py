"""Typed parameter object for vendor provider construction.

Purpose
-------
Capture the constructor parameters shared by all four vendor providers so the
registry (and host code holding settings) can pass one validated object
instead of loose keyword arguments.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and ``.model_dump()``.

Notes
-----
- Pure data container; no I/O.
- ``http_client`` and ``model_cache`` are live objects and therefore accepted
  as arbitrary types.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class AdapterParams(BaseModel):
    """Common vendor provider construction parameters.

    Attributes
    ----------
    vendor:
        Vendor id (optional; the registry receives it separately).
    api_key:
        Bearer API key for the vendor.
    model:
        Explicitly requested model; bypasses discovery unless it fails.
    base_url:
        Override for the vendor API base URL (proxies, gateways).
    preferred_tier:
        ``"free"`` or ``"paid"`` ranking preference (Perplexity).
    http_client:
        Pre-built ``httpx.Client`` (tests inject a ``MockTransport`` client).
    model_cache:
        ``ModelCache`` instance to use instead of the process default.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    vendor: Optional[str] = None
    api_key: Optional[str] = None
    model: Optional[str] = None
    base_url: Optional[str] = None
    preferred_tier: Optional[str] = None
    http_client: Optional[Any] = None
    model_cache: Optional[Any] = None


__all__ = ["AdapterParams"]
