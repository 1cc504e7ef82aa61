"""
Normalized vendor error codes (taxonomy).

Defines the `ErrorCode` enumeration shared by every vendor adapter. Values are
lowercase snake_case and are a stable public contract for logging and for the
UI, which maps them to user-facing messages.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    MISSING_API_KEY = "missing_api_key"
    UNSUPPORTED = "unsupported"
    API_ERROR = "api_error"
    NETWORK_ERROR = "network_error"
    CANCELLED = "cancelled"
    INTERNAL = "internal"


__all__ = ["ErrorCode"]
