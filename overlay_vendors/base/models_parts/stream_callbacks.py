"""
Stream callback record.

`StreamCallbacks` is a capability record handed to every streaming call. All
hooks are optional; the provider invokes ``on_chunk`` zero or more times in
emission order and then exactly one terminal hook.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

ChunkHandler = Callable[[str], None]
CompleteHandler = Callable[[], None]
ErrorHandler = Callable[[Exception], None]


@dataclass
class StreamCallbacks:
    """Hooks invoked while a vendor response streams.

    Attributes:
        on_chunk: Receives each decoded text delta, in vendor order.
        on_complete: Fired once after the last chunk of a successful request
            (including one that produced no text).
        on_error: Fired once with the taxonomy error of a failed request.
    """

    on_chunk: Optional[ChunkHandler] = None
    on_complete: Optional[CompleteHandler] = None
    on_error: Optional[ErrorHandler] = None


__all__ = ["StreamCallbacks", "ChunkHandler", "CompleteHandler", "ErrorHandler"]
