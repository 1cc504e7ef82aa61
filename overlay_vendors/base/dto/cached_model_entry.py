"""Cached model entry document.

The model cache stores one JSON document per vendor key:
``{"model": "<id>", "timestamp": <epoch-ms>}``. This model validates the
document on read so a corrupted or foreign value is treated as absent.
"""
from __future__ import annotations

from pydantic import BaseModel, Field


class CachedModelEntry(BaseModel):
    """A persisted preferred-model choice.

    Attributes
    ----------
    model:
        Vendor model identifier.
    timestamp:
        Write time in epoch milliseconds.
    """

    model: str = Field(min_length=1)
    timestamp: int = Field(gt=0)

    def is_expired(self, now_ms: int, ttl_ms: int) -> bool:
        """Return True when the entry is older than ``ttl_ms`` at ``now_ms``."""
        return now_ms - self.timestamp > ttl_ms


__all__ = ["CachedModelEntry"]
