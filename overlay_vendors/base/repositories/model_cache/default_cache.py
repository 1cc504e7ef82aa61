"""Process-wide default model cache.

Resolvers that are not handed an explicit :class:`ModelCache` share this one,
giving the cache a clear process-wide lifecycle. The backend is chosen once
from ``OVERLAY_VENDORS_MODEL_CACHE``:

- ``sqlite`` (default): file at ``OVERLAY_VENDORS_CACHE_PATH``
  (``~/.overlay_vendors/model_cache.sqlite3`` when unset).
- ``memory``: process-local dictionary.
"""
from __future__ import annotations

import os
import threading
from typing import Optional

from ....config.defaults import MODEL_CACHE_BACKEND_DEFAULT, MODEL_CACHE_DEFAULT_PATH
from .cache import ModelCache
from .store import InMemoryKeyValueStore, KeyValueStore

BACKEND_ENV = "OVERLAY_VENDORS_MODEL_CACHE"
PATH_ENV = "OVERLAY_VENDORS_CACHE_PATH"

_DEFAULT: Optional[ModelCache] = None
_LOCK = threading.Lock()


def _build_store() -> KeyValueStore:
    backend = (os.getenv(BACKEND_ENV) or MODEL_CACHE_BACKEND_DEFAULT).strip().lower()
    if backend == "memory":
        return InMemoryKeyValueStore()
    if backend != "sqlite":
        raise ValueError(f"unknown model cache backend {backend!r} (expected 'sqlite' or 'memory')")
    # Local import keeps sqlite out of the import graph for memory-only hosts.
    from ....persistence.sqlite.kv_store import SqliteKeyValueStore

    return SqliteKeyValueStore(os.getenv(PATH_ENV) or MODEL_CACHE_DEFAULT_PATH)


def get_default_model_cache() -> ModelCache:
    """Return the shared :class:`ModelCache`, creating it on first use."""
    global _DEFAULT  # noqa: PLW0603 - documented process-wide singleton
    if _DEFAULT is not None:
        return _DEFAULT
    with _LOCK:
        if _DEFAULT is None:
            _DEFAULT = ModelCache(_build_store())
        return _DEFAULT


def set_default_model_cache(cache: Optional[ModelCache]) -> None:
    """Replace (or with ``None``, reset) the shared cache."""
    global _DEFAULT  # noqa: PLW0603 - documented process-wide singleton
    with _LOCK:
        previous, _DEFAULT = _DEFAULT, cache
    close = getattr(previous.store, "close", None) if previous is not None else None
    if callable(close) and previous is not cache:
        close()


__all__ = ["get_default_model_cache", "set_default_model_cache", "BACKEND_ENV", "PATH_ENV"]
