"""OpenAI-compatible Chat Completions helpers (OpenAI, Perplexity).

Re-exports provide a stable import surface for the vendor protocol modules.
"""

from .style_helpers import (
    bearer_headers,
    chat_payload,
    content_to_text,
    delta_text,
    extract_nonstream,
    finish_reason,
    message_text,
    parse_chat_event,
    plain_messages,
)

__all__ = [
    "bearer_headers",
    "chat_payload",
    "content_to_text",
    "delta_text",
    "extract_nonstream",
    "finish_reason",
    "message_text",
    "parse_chat_event",
    "plain_messages",
]
