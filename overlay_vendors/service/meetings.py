"""Meeting helpers built on the vendor providers.

- ``stream_meeting_summary``: rolling summary, using the vendor's
  audio-summary specialization when it advertises one and ``stream_text``
  with a generic summarizer prompt otherwise.
- ``summarize_recording``: transcribe recorded audio through the host's
  :class:`AudioTranscriber`, then summarize the transcript.
- ``extract_questions``: ask the vendor for a JSON list of the questions in
  a transcript. The reply is parsed directly first, then by locating the
  first bracketed array in the text.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, List, Optional

from ..base.cancellation import CancellationToken
from ..base.interfaces import AudioTranscriber, VendorProvider
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import StreamCallbacks, TranscriptionResult, VendorMessage
from ..config.defaults import (
    MEETING_SUMMARY_FALLBACK_SYSTEM_PROMPT,
    MEETING_SUMMARY_FALLBACK_USER_TEMPLATE,
    QUESTION_EXTRACTION_MIN_TRANSCRIPT_CHARS,
    QUESTION_EXTRACTION_SYSTEM_PROMPT,
    QUESTION_EXTRACTION_USER_TEMPLATE,
    QUESTION_MIN_CHARS,
)

_logger = get_logger("overlay_vendors.service.meetings")

_JSON_ARRAY = re.compile(r"\[[\s\S]*?\]")


@dataclass(frozen=True)
class ExtractedQuestion:
    """One question found in a transcript.

    Attributes:
        text: The question as spoken.
        source: ``"microphone"`` (the user) or ``"system"`` (other participants).
    """

    text: str
    source: str = "microphone"


@dataclass(frozen=True)
class RecordingSummary:
    """Transcription outcome and the summary produced from it."""

    transcription: TranscriptionResult
    summary: str = ""


def stream_meeting_summary(
    provider: VendorProvider,
    transcript: str,
    callbacks: Optional[StreamCallbacks] = None,
    *,
    cancel: Optional[CancellationToken] = None,
) -> str:
    """Stream a summary of ``transcript`` with the best call the vendor offers."""
    if provider.supports_audio_summary:
        return provider.stream_audio_summary(transcript, callbacks, cancel=cancel)
    messages = [
        VendorMessage("system", MEETING_SUMMARY_FALLBACK_SYSTEM_PROMPT),
        VendorMessage("user", MEETING_SUMMARY_FALLBACK_USER_TEMPLATE.format(transcript=transcript)),
    ]
    return provider.stream_text(messages, callbacks, cancel=cancel)


def summarize_recording(
    transcriber: AudioTranscriber,
    audio: bytes,
    provider: VendorProvider,
    callbacks: Optional[StreamCallbacks] = None,
    *,
    cancel: Optional[CancellationToken] = None,
) -> RecordingSummary:
    """Transcribe ``audio`` and summarize it.

    A failed or empty transcription is returned as-is without calling the
    vendor.
    """
    result = transcriber.transcribe_audio(audio)
    if not result.success or not result.text.strip():
        log_event(
            _logger,
            "recording.transcription_failed",
            LogContext(vendor=provider.vendor_id),
            error=result.error,
        )
        return RecordingSummary(transcription=result)
    summary = stream_meeting_summary(provider, result.text, callbacks, cancel=cancel)
    return RecordingSummary(transcription=result, summary=summary)


def _load_json_array(text: str) -> Optional[List[Any]]:
    try:
        parsed = json.loads(text.strip())
    except ValueError:
        match = _JSON_ARRAY.search(text)
        if match is None:
            return None
        try:
            parsed = json.loads(match.group(0))
        except ValueError:
            return None
    return parsed if isinstance(parsed, list) else None


def parse_questions(reply: str) -> List[ExtractedQuestion]:
    """Parse a vendor reply into questions; unparseable replies yield ``[]``."""
    items = _load_json_array(reply or "")
    if items is None:
        return []
    out: List[ExtractedQuestion] = []
    for item in items:
        if not isinstance(item, dict) or not isinstance(item.get("q"), str):
            continue
        text = item["q"].strip()
        if len(text) <= QUESTION_MIN_CHARS:
            continue
        out.append(ExtractedQuestion(text=text, source="system" if item.get("s") == "system" else "microphone"))
    return out


def extract_questions(
    provider: VendorProvider,
    transcript: str,
    *,
    cancel: Optional[CancellationToken] = None,
) -> List[ExtractedQuestion]:
    """Return the questions asked in ``transcript``.

    Transcripts shorter than ``QUESTION_EXTRACTION_MIN_TRANSCRIPT_CHARS`` are
    skipped without a vendor call. Provider errors propagate.
    """
    if len((transcript or "").strip()) < QUESTION_EXTRACTION_MIN_TRANSCRIPT_CHARS:
        return []
    messages = [
        VendorMessage("system", QUESTION_EXTRACTION_SYSTEM_PROMPT),
        VendorMessage("user", QUESTION_EXTRACTION_USER_TEMPLATE.format(transcript=transcript)),
    ]
    reply = provider.stream_text(messages, cancel=cancel)
    questions = parse_questions(reply)
    if reply.strip() and not questions and _load_json_array(reply) is None:
        log_event(_logger, "questions.unparseable", LogContext(vendor=provider.vendor_id), chars=len(reply))
    return questions


__all__ = [
    "ExtractedQuestion",
    "RecordingSummary",
    "stream_meeting_summary",
    "summarize_recording",
    "parse_questions",
    "extract_questions",
]
