"""Preferred-model cache: store protocol, TTL cache and process default."""

from .store import InMemoryKeyValueStore, KeyValueStore
from .cache import ModelCache
from .default_cache import get_default_model_cache, set_default_model_cache

__all__ = [
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "ModelCache",
    "get_default_model_cache",
    "set_default_model_cache",
]
