"""Vendor DTO public surface.

Re-exports the one-class-per-file implementations under
``overlay_vendors.base.models_parts`` behind a stable import path.
"""

from .models_parts import (
    ModelCapabilities,
    ResolveOptions,
    Role,
    StreamCallbacks,
    TranscriptionResult,
    Tier,
    VendorMessage,
    VendorMetadata,
    VendorModelInfo,
)

__all__ = [
    "ModelCapabilities",
    "ResolveOptions",
    "Role",
    "StreamCallbacks",
    "TranscriptionResult",
    "Tier",
    "VendorMessage",
    "VendorMetadata",
    "VendorModelInfo",
]
