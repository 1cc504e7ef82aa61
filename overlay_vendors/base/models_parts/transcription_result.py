"""
Transcription result DTO.

Returned by the host's audio transcription collaborator; consumed by
``summarize_recording`` before the transcript is sent to a vendor.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TranscriptionResult:
    """Outcome of transcribing one audio buffer.

    Attributes:
        success: The transcription service produced a transcript.
        text: Transcript text (empty on failure).
        confidence: Optional service-reported confidence in ``[0, 1]``.
        error: Optional failure description.
    """

    success: bool
    text: str = ""
    confidence: Optional[float] = None
    error: Optional[str] = None


__all__ = ["TranscriptionResult"]
