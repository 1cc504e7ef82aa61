"""ScreenshotSource Protocol (single-class module).

Implemented by the desktop shell; the session helper only needs image bytes.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ScreenshotSource(Protocol):
    """Captures the current screen."""

    def take_screenshot(self) -> bytes:
        """Return the screenshot as encoded image bytes (png or jpeg)."""
        ...
