"""
VendorMetadata DTO.

Static, process-wide description of one supported vendor. Consumed by the UI
(labels, capability toggles) and by providers (default model, capability
gates, Perplexity's static model catalog).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .vendor_model_info import VendorModelInfo


@dataclass(frozen=True)
class VendorMetadata:
    """Capabilities and defaults of one vendor.

    Attributes:
        id: Vendor identifier (``"openai"``, ``"gemini"``, ...).
        label: Display name.
        description: One-line description for settings screens.
        supports_images: Multimodal requests are allowed.
        supports_meetings_audio: Meeting-audio features are offered in the UI.
        supports_audio_recorder: The local recorder flow is offered in the UI.
        supports_audio_summary: ``stream_audio_summary`` is implemented.
        default_model: Model requested when nothing else is configured.
        model_catalog: Static model list for vendors without discovery.
    """

    id: str
    label: str
    description: str
    supports_images: bool
    supports_meetings_audio: bool
    supports_audio_recorder: bool
    supports_audio_summary: bool
    default_model: str
    model_catalog: Tuple[VendorModelInfo, ...] = ()


__all__ = ["VendorMetadata"]
