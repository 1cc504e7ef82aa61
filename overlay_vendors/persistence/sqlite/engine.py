"""SQLite engine helpers for the persistence layer.

Purpose
-------
Open SQLite connections with consistent PRAGMA settings and make sure the
``kv_store`` table exists. Used by the durable model cache store.

Timeout and reliability strategy
--------------------------------
- Applies ``busy_timeout`` from ``overlay_vendors.config.defaults`` to
  mitigate lock contention between concurrent writers.
- Enables WAL journaling and NORMAL synchronous mode.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path

from ...config.defaults import (
    SQLITE_BUSY_TIMEOUT_MS,
    SQLITE_JOURNAL_MODE,
    SQLITE_SYNCHRONOUS,
)


def get_db_path(db_path: str) -> Path:
    """Return a concrete database file path (``~`` expanded)."""
    return Path(db_path).expanduser()


def create_connection(db_path: str) -> sqlite3.Connection:
    """Open a SQLite connection and apply PRAGMA settings.

    The parent directory is created when missing. The connection may be
    shared across threads; callers serialize access with their own lock.

    Parameters
    ----------
    db_path:
        Path to the database file, or ``":memory:"``.

    Returns
    -------
    sqlite3.Connection
        An open connection.
    """
    if db_path != ":memory:":
        path = get_db_path(db_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        db_path = str(path)
    conn = sqlite3.connect(db_path, check_same_thread=False)
    conn.execute(f"PRAGMA journal_mode={SQLITE_JOURNAL_MODE};")
    conn.execute(f"PRAGMA synchronous={SQLITE_SYNCHRONOUS};")
    conn.execute(f"PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT_MS};")
    return conn


def init_schema(conn: sqlite3.Connection) -> None:
    """Create the ``kv_store`` table if it does not exist, then commit."""
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS kv_store (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
        );
        """
    )
    conn.commit()


__all__ = ["create_connection", "init_schema", "get_db_path"]
