from __future__ import annotations

import json

import httpx
import pytest

from overlay_vendors.base.errors import ApiError, UnsupportedError
from overlay_vendors.base.models import VendorMessage
from overlay_vendors.perplexity import PerplexityProvider
from overlay_vendors.perplexity import protocol

QUESTION = [{"role": "user", "content": "Latest news?"}]


def _delta(text):
    return {"choices": [{"delta": {"content": text}}]}


def test_invalid_model_invalidates_cache_and_retries(mock_http, sse, stream_response, memory_cache, recorder):
    memory_cache.put("perplexity_preferred_model", "sonar-reasoning")

    def handler(request):
        body = json.loads(request.content)
        if body["model"] == "bad-model":
            return httpx.Response(
                400, json={"error": {"message": "Invalid model 'bad-model'", "type": "invalid_model", "code": 400}}
            )
        return stream_response(sse(_delta("News"), "[DONE]"))

    http = mock_http(handler)
    provider = PerplexityProvider(
        api_key="pk-live-1", model="bad-model", http_client=http.client, model_cache=memory_cache
    )
    assert provider.stream_text(QUESTION, recorder.callbacks) == "News"

    attempted = [b["model"] for b in http.bodies()]
    assert attempted == ["bad-model", "sonar-pro"]
    assert attempted[0] != attempted[1]
    assert memory_cache.get("perplexity_preferred_model") == "sonar-pro"
    assert recorder.chunks == ["News"]
    assert recorder.completed == 1


def test_preferred_tier_steers_replacement_model(mock_http, sse, stream_response, memory_cache):
    def handler(request):
        if json.loads(request.content)["model"] == "bad-model":
            return httpx.Response(400, text='{"error": {"type": "invalid_model"}}')
        return stream_response(sse(_delta("ok"), "[DONE]"))

    http = mock_http(handler)
    provider = PerplexityProvider(
        api_key="pk-live-1",
        model="bad-model",
        preferred_tier="free",
        http_client=http.client,
        model_cache=memory_cache,
    )
    provider.stream_text(QUESTION)
    assert [b["model"] for b in http.bodies()] == ["bad-model", "sonar"]


@pytest.mark.parametrize(
    "payload, expected",
    [
        (_delta("plain"), "plain"),
        ({"choices": [{"delta": {"content": [{"type": "text", "text": "a"}, {"text": "b"}]}}]}, "ab"),
        ({"choices": [{"delta": {"text": "t"}}]}, "t"),
        ({"choices": [{"delta": "raw"}]}, "raw"),
        ({"choices": [{"delta": {"content": "x"}, "message": {"content": "cumulative x"}}]}, "x"),
        ({"choices": []}, ""),
    ],
)
def test_delta_shapes(payload, expected):
    assert protocol.delta_text(payload) == expected


def test_empty_stream_fallback_body_is_minimal(mock_http, sse, stream_response, recorder):
    def handler(request):
        if json.loads(request.content)["stream"]:
            return stream_response(sse({"choices": [{"delta": {}}]}, "[DONE]"))
        return httpx.Response(200, json={"output_text": "From output_text"})

    http = mock_http(handler)
    provider = PerplexityProvider(api_key="pk-live-1", http_client=http.client)
    assert provider.stream_text(QUESTION, recorder.callbacks) == "From output_text"

    stream_body, fallback_body = http.bodies()
    assert stream_body["max_tokens"] == 1000
    assert fallback_body == {"model": "sonar", "messages": QUESTION, "stream": False}
    assert recorder.completed == 1


def test_images_only_on_final_user_turn():
    msgs = [VendorMessage("user", "Look"), VendorMessage("user", "  ")]
    out = protocol.build_messages(msgs, ["iVBORw0KGgo"])
    assert out[0] == {"role": "user", "content": "Look"}
    assert out[1]["content"] == [{"type": "image_url", "image_url": {"url": "data:image/png;base64,iVBORw0KGgo"}}]

    msgs = [VendorMessage("user", "Look"), VendorMessage("assistant", "Sure")]
    assert protocol.build_messages(msgs, ["iVBORw0KGgo"]) == [m.to_dict() for m in msgs]


def test_multimodal_stream_payload(mock_http, sse, stream_response):
    http = mock_http(lambda request: stream_response(sse(_delta("chart"), "[DONE]")))
    provider = PerplexityProvider(api_key="pk-live-1", http_client=http.client)
    assert provider.stream_multimodal(QUESTION, ["data:image/jpeg;base64,/9j/z"]) == "chart"
    content = http.bodies()[0]["messages"][0]["content"]
    assert content == [
        {"type": "text", "text": "Latest news?"},
        {"type": "image_url", "image_url": {"url": "data:image/jpeg;base64,/9j/z"}},
    ]


@pytest.mark.parametrize(
    "status, body, expected",
    [
        (400, '{"error": {"message": "x", "type": "invalid_model"}}', True),
        (400, "Invalid_Model supplied", True),
        (400, '{"error": {"type": "invalid_request_error"}}', True),
        (400, '{"code": "INVALID_PARAMETER"}', True),
        (400, '{"error": {"type": "bad_request"}}', False),
        (400, "plain failure", False),
        (404, '{"error": {"type": "invalid_model"}}', False),
    ],
)
def test_invalid_model_detection(status, body, expected):
    err = ApiError("perplexity", "failed", status=status, details=body)
    assert protocol.is_invalid_model_error(err) is expected


def test_validate_api_key_pings_completion(mock_http):
    http = mock_http(lambda request: httpx.Response(200, json={"choices": []}))
    provider = PerplexityProvider(api_key="pk-live-1", http_client=http.client)
    assert provider.validate_api_key() is True
    (req,) = http.requests
    assert json.loads(req.content) == {
        "model": "sonar",
        "messages": [{"role": "user", "content": "ping"}],
        "max_tokens": 1,
        "stream": False,
    }


def test_validate_api_key_failures(mock_http):
    http = mock_http(lambda request: httpx.Response(401, json={"error": "unauthorized"}))
    assert PerplexityProvider(api_key="pk-live-1", http_client=http.client).validate_api_key() is False

    def refuse(request):
        raise httpx.ConnectError("refused", request=request)

    http = mock_http(refuse)
    assert PerplexityProvider(api_key="pk-live-1", http_client=http.client).validate_api_key() is False

    http = mock_http(refuse)
    assert PerplexityProvider(http_client=http.client).validate_api_key() is False
    assert http.requests == []


def test_list_models_returns_catalog_without_key():
    names = [m.name for m in PerplexityProvider().list_models()]
    assert names == ["sonar-pro", "sonar", "sonar-reasoning-pro", "sonar-reasoning", "sonar-deep-research"]


def test_audio_summary_is_unsupported_before_any_io(mock_http, recorder):
    http = mock_http(lambda request: httpx.Response(200))
    provider = PerplexityProvider(http_client=http.client)
    assert provider.supports_audio_summary is False
    with pytest.raises(UnsupportedError):
        provider.stream_audio_summary("transcript", recorder.callbacks)
    assert http.requests == []
    assert len(recorder.errors) == 1
