"""AudioTranscriber Protocol (single-class module).

The local record-buffer-transcribe pipeline, consumed as a black box.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..models import TranscriptionResult


@runtime_checkable
class AudioTranscriber(Protocol):
    """Turns recorded audio into text."""

    def transcribe_audio(self, audio: bytes) -> TranscriptionResult:
        """Transcribe one buffer of recorded audio."""
        ...
