"""
Concrete vendor error types.

Each subclass pins the :class:`ErrorCode` of one taxonomy member so callers
can branch on type (``except MissingApiKeyError``) or on ``err.code``.

- ``MissingApiKeyError``: no key configured; never retried.
- ``UnsupportedError``: capability not offered by the vendor; never retried.
- ``ApiError``: non-2xx vendor answer (or in-stream vendor error event).
- ``NetworkError``: transport failure or timeout.
- ``CancelledError``: the caller cancelled an in-flight stream.
"""
from __future__ import annotations

from typing import Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


class MissingApiKeyError(ProviderError):
    """Raised before any I/O when the vendor has no API key configured."""

    def __init__(self, provider: str, message: Optional[str] = None) -> None:
        super().__init__(
            code=ErrorCode.MISSING_API_KEY,
            message=message or f"{provider} API key not configured. Add a key in settings.",
            provider=provider,
        )


class UnsupportedError(ProviderError):
    """Raised when the vendor does not support the requested modality."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(code=ErrorCode.UNSUPPORTED, message=message, provider=provider)


class ApiError(ProviderError):
    """Non-2xx vendor response; ``details`` carries the raw body."""

    def __init__(
        self,
        provider: str,
        message: str,
        *,
        model: Optional[str] = None,
        status: Optional[int] = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.API_ERROR,
            message=message,
            provider=provider,
            model=model,
            status=status,
            details=details,
        )


class NetworkError(ProviderError):
    """Transport-level failure (connection, TLS, timeout)."""

    def __init__(
        self,
        provider: str,
        message: str,
        *,
        model: Optional[str] = None,
        raw: Optional[Exception] = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.NETWORK_ERROR,
            message=message,
            provider=provider,
            model=model,
            raw=raw,
        )


class CancelledError(ProviderError):
    """Raised when a cooperative cancellation request is observed."""

    def __init__(self, message: str = "operation cancelled", provider: str = "-") -> None:
        super().__init__(code=ErrorCode.CANCELLED, message=message, provider=provider)


__all__ = [
    "MissingApiKeyError",
    "UnsupportedError",
    "ApiError",
    "NetworkError",
    "CancelledError",
]
