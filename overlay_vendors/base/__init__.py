"""
Vendor Layer Base Package

Exports vendor-agnostic contracts, DTOs, errors and the provider registry.
The streaming template (``provider_base``) and the resolver template
(``model_resolver``) are imported from their modules directly by the vendor
packages.
"""

from .cancellation import CancellationToken, CancelledError
from .dto import AdapterParams, CachedModelEntry
from .errors import (
    ApiError,
    ErrorCode,
    MissingApiKeyError,
    NetworkError,
    ProviderError,
    UnsupportedError,
)
from .factory import ProviderFactory, UnknownProviderError, create_vendor_provider
from .interfaces import AudioTranscriber, FileSaver, ScreenshotSource, VendorProvider
from .models import (
    ModelCapabilities,
    ResolveOptions,
    Role,
    StreamCallbacks,
    TranscriptionResult,
    VendorMessage,
    VendorMetadata,
    VendorModelInfo,
)
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    # Models
    "Role",
    "VendorMessage",
    "StreamCallbacks",
    "ModelCapabilities",
    "VendorModelInfo",
    "VendorMetadata",
    "ResolveOptions",
    "TranscriptionResult",
    # DTOs
    "AdapterParams",
    "CachedModelEntry",
    # Interfaces
    "VendorProvider",
    "ScreenshotSource",
    "FileSaver",
    "AudioTranscriber",
    # Errors
    "ErrorCode",
    "ProviderError",
    "MissingApiKeyError",
    "UnsupportedError",
    "ApiError",
    "NetworkError",
    "CancelledError",
    # Cancellation & timeouts
    "CancellationToken",
    "TimeoutConfig",
    "get_timeout_config",
    # Factory
    "ProviderFactory",
    "UnknownProviderError",
    "create_vendor_provider",
]
