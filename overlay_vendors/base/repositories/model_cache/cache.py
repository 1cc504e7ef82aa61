"""Preferred-model cache with time-to-live.

Each vendor resolver persists its chosen model under a fixed key as a
``{"model", "timestamp"}`` JSON document. Entries older than the TTL (12 hours
by default) are treated as absent and removed when read. Concurrent writers
follow last-write-wins; a stale entry only costs an extra discovery call.
"""
from __future__ import annotations

import time
from typing import Callable, Optional

from pydantic import ValidationError

from ...dto.cached_model_entry import CachedModelEntry
from ....config.defaults import MODEL_CACHE_TTL_MS
from .store import KeyValueStore


def _now_ms() -> int:
    return int(time.time() * 1000)


class ModelCache:
    """TTL-checked model choices on top of a :class:`KeyValueStore`.

    Parameters:
        store: Backing key/value store.
        ttl_ms: Entry lifetime in milliseconds.
        clock: Returns the current time in epoch milliseconds (injectable
            for tests).
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        ttl_ms: int = MODEL_CACHE_TTL_MS,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        self._store = store
        self._ttl_ms = ttl_ms
        self._clock = clock

    @property
    def store(self) -> KeyValueStore:
        return self._store

    def get(self, key: str) -> Optional[str]:
        """Return the live model stored under ``key``, else ``None``.

        Expired or malformed entries are deleted.
        """
        raw = self._store.get(key)
        if not raw:
            return None
        try:
            entry = CachedModelEntry.model_validate_json(raw)
        except ValidationError:
            self._store.delete(key)
            return None
        if entry.is_expired(self._clock(), self._ttl_ms):
            self._store.delete(key)
            return None
        return entry.model

    def put(self, key: str, model: str) -> None:
        """Record ``model`` under ``key`` stamped with the current time."""
        entry = CachedModelEntry(model=model, timestamp=self._clock())
        self._store.set(key, entry.model_dump_json())

    def invalidate(self, key: str) -> None:
        """Forget the entry under ``key`` regardless of its age."""
        self._store.delete(key)


__all__ = ["ModelCache"]
