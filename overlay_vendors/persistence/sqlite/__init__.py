"""SQLite persistence for the vendor layer."""

from .kv_store import SqliteKeyValueStore

__all__ = ["SqliteKeyValueStore"]
