"""Unified vendor error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``overlay_vendors.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.taxonomy import (
    ApiError,
    CancelledError,
    MissingApiKeyError,
    NetworkError,
    UnsupportedError,
)
from .errors_parts.classification import (
    api_error_from_response,
    classify_exception,
    classify_transport_error,
)

__all__ = [
    "ErrorCode",
    "ProviderError",
    "ApiError",
    "CancelledError",
    "MissingApiKeyError",
    "NetworkError",
    "UnsupportedError",
    "api_error_from_response",
    "classify_exception",
    "classify_transport_error",
]
