"""Key/value store abstraction backing the model cache.

The model cache only needs string get/set/delete. ``InMemoryKeyValueStore``
serves tests and ephemeral sessions; the SQLite implementation in
``overlay_vendors.persistence.sqlite`` survives process restarts.
"""
from __future__ import annotations

import threading
from typing import Dict, Optional, Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """Minimal string key/value store contract.

    Implementations must be safe for concurrent use from several threads and
    must not raise for missing keys.
    """

    def get(self, key: str) -> Optional[str]:
        """Return the stored value or ``None``."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key`` (last write wins)."""
        ...

    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""
        ...


class InMemoryKeyValueStore:
    """Process-local dictionary store guarded by a lock."""

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


__all__ = ["KeyValueStore", "InMemoryKeyValueStore"]
