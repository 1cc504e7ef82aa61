"""Shared HTTP client pool for vendor adapters.

Purpose:
    Provide a thread-safe pool of reusable ``httpx.Client`` instances so
    concurrent requests (a summary stream and a question-extraction stream,
    say) share connection pools instead of allocating a client per call.

Timeout strategy:
    Pooled clients carry the non-streaming timeout from
    :func:`get_timeout_config`. Streaming calls pass their own
    ``httpx.Timeout`` per request.

Lifecycle & cleanup:
    - Clients are cached by ``(base_url, purpose)``; the purpose is usually the
      vendor id.
    - All clients are closed at interpreter exit via ``atexit``. Tests call
      :func:`close_all_clients` explicitly.
"""

from __future__ import annotations

import atexit
import contextlib
import threading
from typing import Dict, Optional, Tuple

import httpx

from ..timeouts import get_timeout_config

_CLIENTS: Dict[Tuple[Optional[str], str], httpx.Client] = {}
_LOCK = threading.RLock()


def get_httpx_client(base_url: Optional[str], purpose: str) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given base URL and purpose.

    Parameters:
        base_url: Optional API base URL set on the client so relative
            requests can be used. ``None`` groups clients under a shared key.
        purpose: Short discriminator for separate pools (e.g. ``"gemini"``).

    Returns:
        A reusable ``httpx.Client`` instance.
    """
    key = (base_url, purpose)
    client = _CLIENTS.get(key)
    if client is not None:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None:
            return client
        timeout = get_timeout_config().for_request()
        client = httpx.Client(base_url=base_url, timeout=timeout) if base_url else httpx.Client(timeout=timeout)
        _CLIENTS[key] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            # Teardown failures during shutdown are not actionable.
            with contextlib.suppress(Exception):
                c.close()
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients"]
