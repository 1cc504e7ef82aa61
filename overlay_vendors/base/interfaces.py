"""Vendor layer protocols public surface.

- ``VendorProvider``: the uniform streaming contract.
- ``ScreenshotSource``, ``FileSaver``, ``AudioTranscriber``: collaborators the
  host application supplies to the service helpers.
"""

from .interfaces_parts.audio_transcriber import AudioTranscriber
from .interfaces_parts.file_saver import FileSaver
from .interfaces_parts.screenshot_source import ScreenshotSource
from .interfaces_parts.vendor_provider import VendorProvider

__all__ = ["VendorProvider", "ScreenshotSource", "FileSaver", "AudioTranscriber"]
