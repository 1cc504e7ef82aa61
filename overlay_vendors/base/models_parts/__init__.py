"""Vendor DTOs (one class per module)."""

from .vendor_message import VendorMessage, Role
from .stream_callbacks import StreamCallbacks
from .model_capabilities import ModelCapabilities
from .vendor_model_info import VendorModelInfo, Tier
from .vendor_metadata import VendorMetadata
from .resolve_options import ResolveOptions
from .transcription_result import TranscriptionResult

__all__ = [
    "VendorMessage",
    "Role",
    "StreamCallbacks",
    "ModelCapabilities",
    "VendorModelInfo",
    "Tier",
    "VendorMetadata",
    "ResolveOptions",
    "TranscriptionResult",
]
