from __future__ import annotations

import json

import httpx
import pytest

from overlay_vendors.base.errors import ApiError
from overlay_vendors.config.defaults import OPENAI_AUDIO_SUMMARY_SYSTEM_PROMPT
from overlay_vendors.openai import OpenAIProvider

MESSAGES = [{"role": "system", "content": "You are helpful"}, {"role": "user", "content": "2+2?"}]


def _delta(text):
    return {"choices": [{"delta": {"content": text}}]}


def test_basic_stream_returns_single_chunk(mock_http, sse, stream_response, recorder):
    http = mock_http(lambda request: stream_response(sse(_delta("4"), "[DONE]")))
    provider = OpenAIProvider(api_key="sk-live-1", http_client=http.client)

    assert provider.stream_text(MESSAGES, recorder.callbacks) == "4"
    assert recorder.chunks == ["4"]
    assert recorder.completed == 1
    assert recorder.errors == []

    (req,) = http.requests
    assert str(req.url) == "https://api.openai.com/v1/chat/completions"
    assert req.headers["authorization"] == "Bearer sk-live-1"
    assert req.headers["accept"] == "text/event-stream"
    assert json.loads(req.content) == {
        "model": "gpt-4o-mini",
        "messages": MESSAGES,
        "stream": True,
        "max_tokens": 1000,
        "temperature": 0.7,
    }


def test_empty_stream_falls_back_to_nonstreaming(mock_http, sse, stream_response, recorder):
    def handler(request):
        if json.loads(request.content)["stream"]:
            return stream_response(sse({"choices": [{"delta": {}, "finish_reason": "stop"}]}, "[DONE]"))
        return httpx.Response(200, json={"choices": [{"message": {"content": "Four."}, "finish_reason": "stop"}]})

    http = mock_http(handler)
    provider = OpenAIProvider(api_key="sk-live-1", http_client=http.client)
    assert provider.stream_text(MESSAGES, recorder.callbacks) == "Four."
    assert recorder.chunks == ["Four."]
    assert recorder.completed == 1

    stream_body, fallback_body = http.bodies()
    assert fallback_body["stream"] is False
    assert fallback_body["messages"] == stream_body["messages"]
    assert http.requests[1].headers["accept"] != "text/event-stream"


def test_failed_fallback_completes_with_empty_text(mock_http, sse, stream_response, recorder):
    def handler(request):
        if json.loads(request.content)["stream"]:
            return stream_response(sse("[DONE]"))
        return httpx.Response(500, text="nope")

    http = mock_http(handler)
    provider = OpenAIProvider(api_key="sk-live-1", http_client=http.client)
    assert provider.stream_text(MESSAGES, recorder.callbacks) == ""
    assert recorder.chunks == []
    assert recorder.completed == 1
    assert recorder.errors == []


def test_multimodal_attaches_images_to_last_user_message(mock_http, sse, stream_response):
    http = mock_http(lambda request: stream_response(sse(_delta("a cat"), "[DONE]")))
    provider = OpenAIProvider(api_key="sk-live-1", http_client=http.client)
    messages = [
        {"role": "user", "content": "hello"},
        {"role": "assistant", "content": "hi"},
        {"role": "user", "content": "What is this?"},
    ]
    assert provider.stream_multimodal(messages, ["iVBORw0KGgoAAA", "data:image/jpeg;base64,/9j/x", ""]) == "a cat"

    body = http.bodies()[0]
    assert body["messages"][0] == {"role": "user", "content": "hello"}
    assert body["messages"][2]["content"] == [
        {"type": "text", "text": "What is this?"},
        {"type": "image_url", "image_url": {"url": "data:image/png;base64,iVBORw0KGgoAAA", "detail": "high"}},
        {"type": "image_url", "image_url": {"url": "data:image/jpeg;base64,/9j/x", "detail": "high"}},
    ]


def test_images_without_user_message_get_their_own_turn(mock_http, sse, stream_response):
    http = mock_http(lambda request: stream_response(sse(_delta("ok"), "[DONE]")))
    provider = OpenAIProvider(api_key="sk-live-1", http_client=http.client)
    provider.stream_multimodal([{"role": "system", "content": "Describe."}], ["abc"])
    messages = http.bodies()[0]["messages"]
    assert messages[-1]["role"] == "user"
    assert messages[-1]["content"][0]["type"] == "image_url"


def test_model_not_found_retries_with_discovered_model(mock_http, sse, stream_response, memory_cache, recorder):
    def handler(request):
        if request.method == "GET":
            return httpx.Response(200, json={"data": [{"id": "gpt-4o"}, {"id": "gpt-4.1-mini"}]})
        if json.loads(request.content)["model"] == "gpt-legacy":
            return httpx.Response(404, json={"error": {"code": "model_not_found", "message": "gone"}})
        return stream_response(sse(_delta("fine"), "[DONE]"))

    http = mock_http(handler)
    provider = OpenAIProvider(api_key="sk-live-1", model="gpt-legacy", http_client=http.client, model_cache=memory_cache)
    assert provider.stream_text(MESSAGES, recorder.callbacks) == "fine"
    assert [b["model"] for b in http.bodies()] == ["gpt-legacy", "gpt-4.1-mini"]
    assert recorder.completed == 1
    assert memory_cache.get("openai_preferred_model") == "gpt-4.1-mini"

    # The replacement is remembered for later calls on the same instance.
    provider.stream_text(MESSAGES)
    assert http.bodies()[-1]["model"] == "gpt-4.1-mini"


def test_in_stream_error_frame_raises_api_error(mock_http, sse, stream_response, recorder):
    http = mock_http(lambda request: stream_response(sse({"error": {"message": "rate limited", "type": "rate_limit"}})))
    provider = OpenAIProvider(api_key="sk-live-1", http_client=http.client)
    with pytest.raises(ApiError) as info:
        provider.stream_text(MESSAGES, recorder.callbacks)
    assert "rate limited" in info.value.message
    assert json.loads(info.value.details)["type"] == "rate_limit"
    assert recorder.errors == [info.value]


def test_audio_summary_uses_openai_prompt(mock_http, sse, stream_response):
    http = mock_http(lambda request: stream_response(sse(_delta("- decided X"), "[DONE]")))
    provider = OpenAIProvider(api_key="sk-live-1", http_client=http.client)
    assert provider.stream_audio_summary("Alice: let's do X.") == "- decided X"
    messages = http.bodies()[0]["messages"]
    assert messages == [
        {"role": "system", "content": OPENAI_AUDIO_SUMMARY_SYSTEM_PROMPT},
        {"role": "user", "content": "Alice: let's do X."},
    ]


def test_text_replacement_is_not_reused_for_image_requests(mock_http, sse, stream_response, memory_cache):
    def handler(request):
        if request.method == "GET":
            return httpx.Response(200, json={"data": [{"id": "gpt-4"}, {"id": "gpt-3.5-turbo"}]})
        if json.loads(request.content)["model"] == "gpt-legacy":
            return httpx.Response(404, json={"error": {"code": "model_not_found", "message": "gone"}})
        return stream_response(sse(_delta("ok"), "[DONE]"))

    http = mock_http(handler)
    provider = OpenAIProvider(api_key="sk-live-1", model="gpt-legacy", http_client=http.client, model_cache=memory_cache)
    provider.stream_text(MESSAGES)
    assert [b["model"] for b in http.bodies()] == ["gpt-legacy", "gpt-4"]

    # gpt-4 has no image input, so the image request resolves on its own.
    provider.stream_multimodal(MESSAGES, ["iVBORw0KGgo"])
    assert [b["model"] for b in http.bodies()][2:] == ["gpt-legacy", "gpt-4o-mini"]

    provider.stream_text(MESSAGES)
    assert http.bodies()[-1]["model"] == "gpt-4"
