"""VendorProvider Protocol (single-class module).

The one contract the UI layer depends on. Every vendor implements the text
and multimodal streaming calls; meeting summarization is advertised through
``supports_audio_summary`` instead of by probing for a method.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Protocol, Sequence, runtime_checkable

from ..models import StreamCallbacks, VendorMetadata, VendorModelInfo
from ..utils.messages import MessageLike

if TYPE_CHECKING:  # pragma: no cover
    from ..cancellation import CancellationToken


@runtime_checkable
class VendorProvider(Protocol):
    """Uniform streaming contract implemented by every vendor provider.

    Every ``stream_*`` call returns the concatenation of the chunks passed to
    ``on_chunk`` and fires exactly one terminal callback: ``on_complete`` on
    success (empty text included) or ``on_error`` before the taxonomy error
    is raised.
    """

    @property
    def vendor_id(self) -> str:
        """Vendor identifier, e.g. ``"gemini"``."""
        ...

    @property
    def metadata(self) -> VendorMetadata:
        """Static catalog entry for this vendor."""
        ...

    @property
    def supports_images(self) -> bool:
        """Whether :meth:`stream_multimodal` is available."""
        ...

    @property
    def supports_audio_summary(self) -> bool:
        """Whether :meth:`stream_audio_summary` is available."""
        ...

    def stream_text(
        self,
        messages: Sequence[MessageLike],
        callbacks: Optional[StreamCallbacks] = None,
        *,
        cancel: "Optional[CancellationToken]" = None,
    ) -> str:
        """Stream a text-only completion."""
        ...

    def stream_multimodal(
        self,
        messages: Sequence[MessageLike],
        images: Sequence[str],
        callbacks: Optional[StreamCallbacks] = None,
        *,
        cancel: "Optional[CancellationToken]" = None,
    ) -> str:
        """Stream a completion with base64 images attached to the final user turn."""
        ...

    def stream_audio_summary(
        self,
        transcript: str,
        callbacks: Optional[StreamCallbacks] = None,
        *,
        cancel: "Optional[CancellationToken]" = None,
    ) -> str:
        """Stream a rolling meeting summary of ``transcript``."""
        ...

    def validate_api_key(self) -> bool:
        """Return True when the configured key is accepted by the vendor."""
        ...

    def list_models(self) -> List[VendorModelInfo]:
        """Return the candidate models the vendor currently offers."""
        ...
