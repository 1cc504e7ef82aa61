"""Pytest configuration for the vendor layer test suite.

Every test runs with the in-memory model cache, a fresh HTTP client pool, a
re-read config file and no vendor credentials from the developer's shell.
Network access is never needed: providers receive an ``httpx.Client`` built
on ``httpx.MockTransport``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, List

import httpx
import pytest

from overlay_vendors.base.http import close_all_clients
from overlay_vendors.base.models import StreamCallbacks
from overlay_vendors.base.repositories.model_cache import (
    InMemoryKeyValueStore,
    ModelCache,
    set_default_model_cache,
)
from overlay_vendors.config import VENDOR_IDS, reset_config_cache
from overlay_vendors.config.env import get_env_var_candidates

_EXTRA_ENV = (
    "OVERLAY_VENDORS_CONFIG_FILE",
    "OVERLAY_VENDORS_CACHE_PATH",
    "OVERLAY_VENDORS_CONNECT_TIMEOUT",
    "OVERLAY_VENDORS_READ_TIMEOUT",
    "OVERLAY_VENDORS_HTTP_TIMEOUT",
)


@pytest.fixture(autouse=True)
def isolated_vendor_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Strip vendor env vars and reset process-wide caches around each test."""
    monkeypatch.setenv("OVERLAY_VENDORS_MODEL_CACHE", "memory")
    for vendor in VENDOR_IDS:
        for name in get_env_var_candidates(vendor):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv(f"{vendor.upper()}_MODEL", raising=False)
        monkeypatch.delenv(f"{vendor.upper()}_BASE_URL", raising=False)
    for name in _EXTRA_ENV:
        monkeypatch.delenv(name, raising=False)
    set_default_model_cache(None)
    reset_config_cache()
    close_all_clients()
    yield
    set_default_model_cache(None)
    reset_config_cache()
    close_all_clients()


@pytest.fixture()
def memory_cache() -> ModelCache:
    return ModelCache(InMemoryKeyValueStore())


@dataclass
class CallbackRecorder:
    """Collects everything a provider reports through its callbacks."""

    chunks: List[str] = field(default_factory=list)
    completed: int = 0
    errors: List[Exception] = field(default_factory=list)

    def _complete(self) -> None:
        self.completed += 1

    @property
    def callbacks(self) -> StreamCallbacks:
        return StreamCallbacks(on_chunk=self.chunks.append, on_complete=self._complete, on_error=self.errors.append)


@pytest.fixture()
def recorder() -> CallbackRecorder:
    return CallbackRecorder()


@dataclass
class MockHttp:
    """``httpx.Client`` on a mock transport plus the requests it received."""

    client: httpx.Client
    requests: List[httpx.Request]

    def bodies(self, method: str = "POST") -> List[Any]:
        return [json.loads(r.content) for r in self.requests if r.method == method]


@pytest.fixture()
def mock_http() -> Iterator[Callable[[Callable[[httpx.Request], httpx.Response]], MockHttp]]:
    """Factory: wrap a request handler into a recording mock client."""
    made: List[httpx.Client] = []

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> MockHttp:
        seen: List[httpx.Request] = []

        def _recording(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        client = httpx.Client(transport=httpx.MockTransport(_recording))
        made.append(client)
        return MockHttp(client=client, requests=seen)

    yield _make
    for client in made:
        client.close()


def sse_frames(*payloads: Any) -> str:
    """Render SSE ``data:`` events; strings are sent verbatim, others as JSON."""
    out = []
    for payload in payloads:
        data = payload if isinstance(payload, str) else json.dumps(payload)
        out.append(f"data: {data}\n\n")
    return "".join(out)


@pytest.fixture()
def sse() -> Callable[..., str]:
    return sse_frames


def sse_response(body: str) -> httpx.Response:
    return httpx.Response(200, text=body, headers={"content-type": "text/event-stream"})


@pytest.fixture()
def stream_response() -> Callable[[str], httpx.Response]:
    return sse_response
