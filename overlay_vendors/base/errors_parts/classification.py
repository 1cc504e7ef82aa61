"""
Error classification helpers.

Maps transport exceptions and vendor HTTP failures onto the taxonomy so the
provider layer only ever sees :class:`ProviderError` instances.
"""
from __future__ import annotations

import json
from typing import Optional

import httpx

from .error_code import ErrorCode
from .provider_error import ProviderError
from .taxonomy import ApiError, NetworkError


def _message_from_body(body: str) -> Optional[str]:
    """Pull a human message out of a vendor JSON error body, if any.

    Recognized shapes: ``{"error": {"message": ...}}``, ``{"error": "..."}``
    and ``{"message": ...}``.
    """
    try:
        parsed = json.loads(body)
    except ValueError:
        return None
    if not isinstance(parsed, dict):
        return None
    err = parsed.get("error")
    if isinstance(err, dict) and isinstance(err.get("message"), str):
        return err["message"]
    if isinstance(err, str):
        return err
    msg = parsed.get("message")
    return msg if isinstance(msg, str) else None


def api_error_from_response(
    provider: str, status: int, body: str, *, model: Optional[str] = None, label: str = "request"
) -> ApiError:
    """Build an :class:`ApiError` for a non-2xx vendor response.

    Parameters:
        provider: Vendor id.
        status: HTTP status code.
        body: Raw response body text (attached as ``details``).
        model: Model that was requested.
        label: Short name of the failed call (``"request"``, ``"fallback request"``).
    """
    detail_msg = _message_from_body(body)
    message = f"{provider} {label} failed: {status}"
    if detail_msg:
        message = f"{message} ({detail_msg})"
    return ApiError(provider, message, model=model, status=status, details=body)


def classify_transport_error(
    exc: Exception, provider: str, model: Optional[str] = None
) -> NetworkError:
    """Wrap an ``httpx`` transport/timeout exception as :class:`NetworkError`."""
    if isinstance(exc, httpx.TimeoutException):
        message = f"{provider} request timed out: {exc}"
    else:
        message = f"{provider} network failure: {exc}"
    return NetworkError(provider, message, model=model, raw=exc)


def classify_exception(exc: Exception) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. httpx / builtin timeouts and transport errors.
        3. ``INTERNAL`` fallback.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, (httpx.TransportError, TimeoutError, ConnectionError)):
        return ErrorCode.NETWORK_ERROR
    return ErrorCode.INTERNAL


__all__ = [
    "api_error_from_response",
    "classify_transport_error",
    "classify_exception",
]
