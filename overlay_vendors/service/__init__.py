"""Host-facing helpers: assistant session, meeting helpers and the CLI."""

from .meetings import (
    ExtractedQuestion,
    RecordingSummary,
    extract_questions,
    parse_questions,
    stream_meeting_summary,
    summarize_recording,
)
from .session import AssistantSession

__all__ = [
    "AssistantSession",
    "ExtractedQuestion",
    "RecordingSummary",
    "extract_questions",
    "parse_questions",
    "stream_meeting_summary",
    "summarize_recording",
]
