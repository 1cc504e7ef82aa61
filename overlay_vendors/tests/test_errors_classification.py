from __future__ import annotations

import httpx

from overlay_vendors.base.errors import (
    ApiError,
    ErrorCode,
    MissingApiKeyError,
    NetworkError,
    ProviderError,
    UnsupportedError,
    api_error_from_response,
    classify_exception,
    classify_transport_error,
)


def test_taxonomy_codes():
    assert MissingApiKeyError("openai").code is ErrorCode.MISSING_API_KEY
    assert UnsupportedError("perplexity", "no").code is ErrorCode.UNSUPPORTED
    assert ApiError("x", "m").code is ErrorCode.API_ERROR
    assert NetworkError("x", "m").code is ErrorCode.NETWORK_ERROR
    assert ErrorCode.API_ERROR.value == "api_error"
    assert isinstance(MissingApiKeyError("openai"), ProviderError)


def test_api_error_from_response_reads_vendor_message():
    body = '{"error": {"message": "The model does not exist", "code": "model_not_found"}}'
    err = api_error_from_response("openai", 404, body, model="gpt-9")
    assert err.status == 404
    assert err.details == body
    assert err.model == "gpt-9"
    assert "openai request failed: 404" in err.message
    assert "The model does not exist" in err.message


def test_api_error_from_plain_body():
    err = api_error_from_response("gemini", 500, "upstream down", label="fallback request")
    assert err.message == "gemini fallback request failed: 500"


def test_transport_errors_become_network_errors():
    timeout = classify_transport_error(httpx.ReadTimeout("slow"), "anthropic", "claude")
    assert isinstance(timeout, NetworkError)
    assert "timed out" in timeout.message
    refused = classify_transport_error(httpx.ConnectError("refused"), "anthropic")
    assert "network failure" in refused.message
    assert isinstance(refused.raw, httpx.ConnectError)


def test_classify_exception_precedence():
    assert classify_exception(ApiError("x", "m")) is ErrorCode.API_ERROR
    assert classify_exception(httpx.ConnectError("x")) is ErrorCode.NETWORK_ERROR
    assert classify_exception(TimeoutError()) is ErrorCode.NETWORK_ERROR
    assert classify_exception(ValueError("x")) is ErrorCode.INTERNAL
