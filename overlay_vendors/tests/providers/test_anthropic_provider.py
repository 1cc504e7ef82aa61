from __future__ import annotations

import json

import httpx
import pytest

from overlay_vendors.anthropic import AnthropicProvider
from overlay_vendors.anthropic import protocol
from overlay_vendors.base.errors import ApiError
from overlay_vendors.base.models import VendorMessage

QUESTION = [{"role": "system", "content": "Be terse."}, {"role": "user", "content": "Hi"}]


def _typed(kind, **fields):
    return f"event: {kind}\ndata: {json.dumps({'type': kind, **fields})}\n\n"


def _delta(text):
    return _typed("content_block_delta", index=0, delta={"type": "text_delta", "text": text})


STOP = _typed("message_delta", delta={"stop_reason": "end_turn"}) + _typed("message_stop")


def test_typed_events_stream_text(mock_http, stream_response, recorder):
    body = _typed("message_start", message={"id": "m1"}) + ": ping\n\n" + _delta("Hel") + _delta("lo") + STOP
    http = mock_http(lambda request: stream_response(body))
    provider = AnthropicProvider(api_key="ak-live-1", http_client=http.client)
    assert provider.stream_text(QUESTION, recorder.callbacks) == "Hello"
    assert recorder.chunks == ["Hel", "lo"]
    assert recorder.completed == 1

    (req,) = http.requests
    assert str(req.url) == "https://api.anthropic.com/v1/messages"
    assert req.headers["x-api-key"] == "ak-live-1"
    assert req.headers["anthropic-version"] == "2023-06-01"
    assert req.headers["accept"] == "text/event-stream"
    sent = json.loads(req.content)
    assert sent["system"] == "Be terse."
    assert sent["max_tokens"] == 1024
    assert sent["stream"] is True
    assert sent["messages"] == [{"role": "user", "content": [{"type": "text", "text": "Hi"}]}]


def test_event_name_used_when_payload_has_no_type(mock_http, stream_response):
    body = 'event: content_block_delta\ndata: {"delta": {"text": "ok"}}\n\n' + STOP
    http = mock_http(lambda request: stream_response(body))
    provider = AnthropicProvider(api_key="ak-live-1", http_client=http.client)
    assert provider.stream_text(QUESTION) == "ok"


def test_error_event_surfaces_api_error_once(mock_http, stream_response, recorder):
    body = _delta("par") + _typed("error", error={"type": "overloaded_error", "message": "Overloaded"})
    http = mock_http(lambda request: stream_response(body))
    provider = AnthropicProvider(api_key="ak-live-1", http_client=http.client)
    with pytest.raises(ApiError) as info:
        provider.stream_text(QUESTION, recorder.callbacks)
    assert "Overloaded" in info.value.message
    assert recorder.chunks == ["par"]
    assert recorder.errors == [info.value]
    assert recorder.completed == 0
    assert len(http.requests) == 1


def test_invalid_model_retry_is_bounded(mock_http, recorder, memory_cache):
    def handler(request):
        if request.method == "GET":
            return httpx.Response(500, text="listing down")
        model = json.loads(request.content)["model"]
        return httpx.Response(
            404, json={"type": "error", "error": {"type": "not_found_error", "message": f"model: {model}"}}
        )

    http = mock_http(handler)
    provider = AnthropicProvider(
        api_key="ak-live-1", model="claude-custom", http_client=http.client, model_cache=memory_cache
    )
    with pytest.raises(ApiError) as info:
        provider.stream_text(QUESTION, recorder.callbacks)

    attempted = [b["model"] for b in http.bodies()]
    assert attempted == [
        "claude-custom",
        "claude-3-5-sonnet-latest",
        "claude-3-sonnet-20240229",
        "claude-3-haiku-20240307",
        "claude-3-5-sonnet-20240620",
    ]
    assert len(set(attempted)) == 5
    assert info.value.status == 404
    assert recorder.errors == [info.value]
    assert recorder.completed == 0


def test_non_model_errors_are_not_retried(mock_http):
    http = mock_http(lambda request: httpx.Response(401, json={"error": {"type": "authentication_error"}}))
    provider = AnthropicProvider(api_key="ak-live-1", http_client=http.client)
    with pytest.raises(ApiError):
        provider.stream_text(QUESTION)
    assert len(http.requests) == 1


@pytest.mark.parametrize("count, expected", [(0, 1024), (1, 2048), (3, 3072), (6, 4096)])
def test_output_budget_scales_with_images(mock_http, stream_response, count, expected):
    http = mock_http(lambda request: stream_response(_delta("x") + STOP))
    provider = AnthropicProvider(api_key="ak-live-1", http_client=http.client)
    if count:
        provider.stream_multimodal(QUESTION, ["iVBORw0KGgo"] * count)
    else:
        provider.stream_text(QUESTION)
    assert http.bodies()[0]["max_tokens"] == expected


def test_empty_stream_falls_back(mock_http, stream_response, recorder):
    def handler(request):
        if json.loads(request.content)["stream"]:
            return stream_response(STOP)
        return httpx.Response(200, json={"content": [{"type": "text", "text": "late"}], "stop_reason": "end_turn"})

    http = mock_http(handler)
    provider = AnthropicProvider(api_key="ak-live-1", http_client=http.client)
    assert provider.stream_text(QUESTION, recorder.callbacks) == "late"
    assert recorder.completed == 1
    assert http.requests[1].headers.get("accept") != "text/event-stream"


def test_build_messages_attaches_images_to_last_user_turn():
    messages = [
        VendorMessage("user", "  first  "),
        VendorMessage("assistant", "ok"),
        VendorMessage("user", "Which chart is higher?"),
        VendorMessage("assistant", "   "),
    ]
    out = protocol.build_messages(messages, ["data:image/jpeg;base64,/9j/q"])
    assert out[0]["content"] == [{"type": "text", "text": "first"}]
    assert len(out) == 3
    assert out[2]["content"] == [
        {"type": "text", "text": "Which chart is higher?"},
        {"type": "image", "source": {"type": "base64", "media_type": "image/jpeg", "data": "/9j/q"}},
        {"type": "text", "text": protocol.QUESTION_IMAGE_SUFFIX},
    ]


def test_build_messages_without_user_turn_adds_one():
    out = protocol.build_messages([VendorMessage("system", "s")], ["iVBORw0KGgo"])
    assert out == [
        {
            "role": "user",
            "content": [
                {"type": "image", "source": {"type": "base64", "media_type": "image/png", "data": "iVBORw0KGgo"}},
                {"type": "text", "text": protocol.NO_QUESTION_IMAGE_TEXT},
            ],
        }
    ]


def test_blank_question_after_history_carries_images_at_the_end():
    messages = [VendorMessage("user", "hi"), VendorMessage("assistant", "hello"), VendorMessage("user", "")]
    out = protocol.build_messages(messages, ["iVBORw0KGgo"])
    assert [m["role"] for m in out] == ["user", "assistant", "user"]
    assert out[0]["content"] == [{"type": "text", "text": "hi"}]
    assert out[-1]["content"] == [
        {"type": "image", "source": {"type": "base64", "media_type": "image/png", "data": "iVBORw0KGgo"}},
        {"type": "text", "text": protocol.NO_QUESTION_IMAGE_TEXT},
    ]


def test_blank_earlier_user_turn_is_dropped_without_shifting_images():
    messages = [
        VendorMessage("user", " "),
        VendorMessage("assistant", "Anything else?"),
        VendorMessage("user", "Read the graph"),
    ]
    out = protocol.build_messages(messages, ["iVBORw0KGgo"])
    assert [m["role"] for m in out] == ["assistant", "user"]
    assert out[-1]["content"][0] == {"type": "text", "text": "Read the graph"}
    assert out[-1]["content"][1]["type"] == "image"


def test_blank_question_sent_through_provider(mock_http, sse, stream_response):
    http = mock_http(lambda request: stream_response(sse({"type": "content_block_delta", "delta": {"text": "A chart"}})))
    provider = AnthropicProvider(api_key="ak-live-1", http_client=http.client)
    history = [
        {"role": "user", "content": "hi"},
        {"role": "assistant", "content": "hello"},
        {"role": "user", "content": ""},
    ]
    assert provider.stream_multimodal(history, ["iVBORw0KGgo"]) == "A chart"
    sent = json.loads(http.requests[0].content)["messages"]
    assert sent[-1]["role"] == "user"
    assert sent[-1]["content"][0]["type"] == "image"
