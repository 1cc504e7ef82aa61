"""Unified timeout configuration for vendor HTTP calls.

All timeout values used by adapters and resolvers come from
:func:`get_timeout_config`; no module hard-codes its own numbers. Expiry is
surfaced by httpx as ``httpx.TimeoutException`` and mapped to
``NetworkError`` at the adapter boundary.

Environment overrides (all optional, seconds, positive floats):
    OVERLAY_VENDORS_CONNECT_TIMEOUT   connection establishment (default 30)
    OVERLAY_VENDORS_READ_TIMEOUT      idle gap between stream chunks (default 60)
    OVERLAY_VENDORS_HTTP_TIMEOUT      non-streaming calls end to end (default 60)

The parsed configuration is cached and refreshed only when one of the
variables above changes, so hot paths never re-parse the environment.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

import httpx

_ENV_CONNECT = "OVERLAY_VENDORS_CONNECT_TIMEOUT"
_ENV_READ = "OVERLAY_VENDORS_READ_TIMEOUT"
_ENV_HTTP = "OVERLAY_VENDORS_HTTP_TIMEOUT"


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        connect_timeout_seconds: Time allowed to open a connection.
        stream_read_timeout_seconds: Idle timeout while waiting for the next
            chunk of a streaming response.
        http_timeout_seconds: Baseline timeout for non-streaming calls
            (fallback completions, model listings).
    """

    connect_timeout_seconds: float = 30.0
    stream_read_timeout_seconds: float = 60.0
    http_timeout_seconds: float = 60.0

    def for_stream(self) -> httpx.Timeout:
        """Return the ``httpx.Timeout`` applied to streaming requests."""
        return httpx.Timeout(
            self.http_timeout_seconds,
            connect=self.connect_timeout_seconds,
            read=self.stream_read_timeout_seconds,
        )

    def for_request(self) -> httpx.Timeout:
        """Return the ``httpx.Timeout`` applied to non-streaming requests."""
        return httpx.Timeout(self.http_timeout_seconds, connect=self.connect_timeout_seconds)


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Read ``name`` as a positive float, falling back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(name, "") for name in (_ENV_CONNECT, _ENV_READ, _ENV_HTTP))
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    _CACHED = TimeoutConfig(
        connect_timeout_seconds=_parse_env_float(_ENV_CONNECT, 30.0),
        stream_read_timeout_seconds=_parse_env_float(_ENV_READ, 60.0),
        http_timeout_seconds=_parse_env_float(_ENV_HTTP, 60.0),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
