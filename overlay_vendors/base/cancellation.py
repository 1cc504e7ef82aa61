"""Cooperative cancellation primitives (public API facade).

``CancellationToken`` is accepted by every ``stream_*`` call; observing a
cancelled token raises ``CancelledError`` (error code ``cancelled``), which is
reported through ``on_error`` like any other terminal failure.
"""

from .cancellation_parts.cancellation_token import CancellationToken
from .errors import CancelledError

__all__ = ["CancellationToken", "CancelledError"]
