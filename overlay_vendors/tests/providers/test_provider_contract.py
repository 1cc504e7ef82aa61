"""Behaviour every vendor provider shares, run against each of the four."""

from __future__ import annotations

import json
from typing import Any, Dict, List

import httpx
import pytest

from overlay_vendors import create_vendor_provider
from overlay_vendors.base.cancellation import CancellationToken
from overlay_vendors.base.errors import (
    ApiError,
    CancelledError,
    ErrorCode,
    MissingApiKeyError,
    NetworkError,
)
from overlay_vendors.base.models import StreamCallbacks


def _chat(text: str) -> Dict[str, Any]:
    return {"choices": [{"delta": {"content": text}}]}


def _gemini(text: str) -> Dict[str, Any]:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


def _claude(text: str) -> Dict[str, Any]:
    return {"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": text}}


STREAMS: Dict[str, List[Any]] = {
    "openai": [_chat("Hel"), _chat("lo"), "[DONE]"],
    "perplexity": [_chat("Hel"), _chat("lo"), "[DONE]"],
    "gemini": [_gemini("Hel"), _gemini("lo")],
    "anthropic": [{"type": "message_start"}, _claude("Hel"), _claude("lo"), {"type": "message_stop"}],
}
EMPTY_STREAMS: Dict[str, List[Any]] = {
    "openai": ["[DONE]"],
    "perplexity": ["[DONE]"],
    "gemini": [{"candidates": []}],
    "anthropic": [{"type": "message_stop"}],
}
KEYS = {"openai": "sk-live-1", "perplexity": "pk-live-1", "gemini": "g-live-1", "anthropic": "ak-live-1"}

vendors = pytest.mark.parametrize("vendor", sorted(STREAMS))


def _provider(vendor, http, **kwargs):
    kwargs.setdefault("api_key", KEYS[vendor])
    return create_vendor_provider(vendor, http_client=http.client, **kwargs)


@vendors
def test_return_value_equals_concatenated_chunks(vendor, mock_http, sse, stream_response, recorder):
    http = mock_http(lambda request: stream_response(sse(*STREAMS[vendor])))
    text = _provider(vendor, http).stream_text([{"role": "user", "content": "hi"}], recorder.callbacks)
    assert text == "Hello"
    assert recorder.chunks == ["Hel", "lo"]
    assert "".join(recorder.chunks) == text
    assert recorder.completed == 1
    assert recorder.errors == []
    assert len(http.requests) == 1


@vendors
def test_empty_answer_still_completes_once(vendor, mock_http, sse, stream_response, recorder):
    def handler(request):
        if request.url.path.endswith(":generateContent") or json.loads(request.content).get("stream") is False:
            return httpx.Response(500, text="fallback down")
        return stream_response(sse(*EMPTY_STREAMS[vendor]))

    http = mock_http(handler)
    text = _provider(vendor, http).stream_text([{"role": "user", "content": "hi"}], recorder.callbacks)
    assert text == ""
    assert recorder.chunks == []
    assert recorder.completed == 1
    assert recorder.errors == []
    assert len(http.requests) == 2


@vendors
def test_server_error_reports_api_error_once(vendor, mock_http, recorder):
    http = mock_http(lambda request: httpx.Response(500, json={"error": {"message": "internal"}}))
    with pytest.raises(ApiError) as info:
        _provider(vendor, http).stream_text([{"role": "user", "content": "hi"}], recorder.callbacks)
    assert info.value.status == 500
    assert info.value.provider == vendor
    assert recorder.errors == [info.value]
    assert recorder.completed == 0
    assert len(http.requests) == 1


@vendors
def test_transport_failure_is_network_error(vendor, mock_http, recorder):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    http = mock_http(refuse)
    with pytest.raises(NetworkError) as info:
        _provider(vendor, http).stream_text([{"role": "user", "content": "hi"}], recorder.callbacks)
    assert info.value.code is ErrorCode.NETWORK_ERROR
    assert isinstance(info.value.raw, httpx.ConnectError)
    assert len(recorder.errors) == 1


@vendors
def test_missing_key_fails_before_io(vendor, mock_http, recorder):
    http = mock_http(lambda request: httpx.Response(200))
    provider = create_vendor_provider(vendor, http_client=http.client)
    with pytest.raises(MissingApiKeyError):
        provider.stream_text([{"role": "user", "content": "hi"}], recorder.callbacks)
    assert http.requests == []
    assert len(recorder.errors) == 1
    assert recorder.errors[0].code is ErrorCode.MISSING_API_KEY


@vendors
def test_env_key_is_used(vendor, monkeypatch, mock_http, sse, stream_response):
    env = {"openai": "OPENAI_API_KEY", "perplexity": "PERPLEXITY_API_KEY", "gemini": "GOOGLE_API_KEY"}
    monkeypatch.setenv(env.get(vendor, "ANTHROPIC_API_KEY"), KEYS[vendor])
    http = mock_http(lambda request: stream_response(sse(*STREAMS[vendor])))
    provider = create_vendor_provider(vendor, http_client=http.client)
    assert provider.stream_text([{"role": "user", "content": "hi"}]) == "Hello"


@vendors
def test_cancel_before_start(vendor, mock_http, recorder):
    http = mock_http(lambda request: httpx.Response(200))
    token = CancellationToken()
    token.cancel("closed")
    with pytest.raises(CancelledError):
        _provider(vendor, http).stream_text([{"role": "user", "content": "hi"}], recorder.callbacks, cancel=token)
    assert http.requests == []
    assert recorder.errors[0].code is ErrorCode.CANCELLED


@vendors
def test_cancel_mid_stream_stops_after_current_chunk(vendor, mock_http, sse, stream_response):
    http = mock_http(lambda request: stream_response(sse(*STREAMS[vendor])))
    token = CancellationToken()
    chunks: List[str] = []
    errors: List[Exception] = []
    completed: List[bool] = []

    def on_chunk(text: str) -> None:
        chunks.append(text)
        token.cancel("user closed overlay")

    callbacks = StreamCallbacks(on_chunk=on_chunk, on_complete=lambda: completed.append(True), on_error=errors.append)
    with pytest.raises(CancelledError) as info:
        _provider(vendor, http).stream_text([{"role": "user", "content": "hi"}], callbacks, cancel=token)
    assert chunks == ["Hel"]
    assert errors == [info.value]
    assert completed == []
    assert info.value.message == "user closed overlay"


@vendors
def test_metadata_flags(vendor):
    provider = create_vendor_provider(vendor)
    assert provider.supports_images is True
    assert provider.supports_audio_summary is (vendor != "perplexity")
    assert provider.metadata.id == vendor
