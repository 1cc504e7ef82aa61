"""overlay_vendors package

Uniform streaming access to four LLM vendors (OpenAI, Gemini, Anthropic,
Perplexity) for an on-screen assistant.

Public API (re-exported):
    - Version: ``__version__``
    - Factory: :func:`create_vendor_provider`, :class:`ProviderFactory`
    - Catalog: ``VENDOR_IDS``, ``VENDOR_METADATA``, :func:`get_vendor_metadata`
    - DTOs: :class:`VendorMessage`, :class:`StreamCallbacks`, ...
    - Errors: :class:`ProviderError` and the taxonomy subclasses

Usage::

    from overlay_vendors import StreamCallbacks, create_vendor_provider

    provider = create_vendor_provider("gemini", api_key="...")
    text = provider.stream_text(
        [{"role": "user", "content": "Summarize this meeting"}],
        StreamCallbacks(on_chunk=print),
    )
"""

from .base import (
    AdapterParams,
    ApiError,
    CancellationToken,
    CancelledError,
    ErrorCode,
    MissingApiKeyError,
    ModelCapabilities,
    NetworkError,
    ProviderError,
    ProviderFactory,
    ResolveOptions,
    StreamCallbacks,
    UnknownProviderError,
    UnsupportedError,
    VendorMessage,
    VendorMetadata,
    VendorModelInfo,
    VendorProvider,
    create_vendor_provider,
)
from .config import VENDOR_IDS, VENDOR_METADATA, get_vendor_metadata

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "create_vendor_provider",
    "ProviderFactory",
    "UnknownProviderError",
    "AdapterParams",
    "VENDOR_IDS",
    "VENDOR_METADATA",
    "get_vendor_metadata",
    "VendorProvider",
    "VendorMessage",
    "StreamCallbacks",
    "ModelCapabilities",
    "VendorModelInfo",
    "VendorMetadata",
    "ResolveOptions",
    "CancellationToken",
    "ProviderError",
    "ErrorCode",
    "MissingApiKeyError",
    "UnsupportedError",
    "ApiError",
    "NetworkError",
    "CancelledError",
]
