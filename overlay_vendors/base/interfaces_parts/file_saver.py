"""FileSaver Protocol (single-class module)."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class FileSaver(Protocol):
    """Persists text chosen by the user (transcripts, answers)."""

    def save_file(self, content: str, filename: str) -> str:
        """Write ``content`` and return the path it was saved to."""
        ...
