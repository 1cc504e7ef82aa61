"""SQLite-backed key/value store.

Plays the role of browser local storage for the model cache: one row per key,
values stored verbatim. Storage failures are logged and treated as a missing
entry so model resolution never fails because of the cache.
"""

from __future__ import annotations

import sqlite3
import threading
from typing import Optional

from ...base.logging import get_logger, log_event
from .engine import create_connection, init_schema

_logger = get_logger("overlay_vendors.persistence")


class SqliteKeyValueStore:
    """Durable :class:`~overlay_vendors.base.repositories.model_cache.KeyValueStore`.

    Parameters
    ----------
    db_path:
        Database file path (``~`` expanded) or ``":memory:"``.
    """

    def __init__(self, db_path: str) -> None:
        self._conn = create_connection(db_path)
        self._lock = threading.Lock()
        init_schema(self._conn)

    def get(self, key: str) -> Optional[str]:
        try:
            with self._lock:
                row = self._conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as exc:
            log_event(_logger, "kv_store.read_failed", key=key, error=str(exc))
            return None
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        try:
            with self._lock:
                self._conn.execute(
                    "INSERT INTO kv_store(key, value, updated_at) VALUES(?, ?, CURRENT_TIMESTAMP) "
                    "ON CONFLICT(key) DO UPDATE SET value=excluded.value, updated_at=CURRENT_TIMESTAMP",
                    (key, value),
                )
                self._conn.commit()
        except sqlite3.Error as exc:
            log_event(_logger, "kv_store.write_failed", key=key, error=str(exc))

    def delete(self, key: str) -> None:
        try:
            with self._lock:
                self._conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
                self._conn.commit()
        except sqlite3.Error as exc:
            log_event(_logger, "kv_store.delete_failed", key=key, error=str(exc))

    def close(self) -> None:
        """Close the underlying connection."""
        with self._lock:
            self._conn.close()


__all__ = ["SqliteKeyValueStore"]
