"""Message helpers shared across vendor protocols.

Helpers here are side-effect free and operate on :class:`VendorMessage`
only. Every vendor collapses system messages into one instruction and
attaches images relative to the last user message; the shared rules live
here so the four protocol modules agree on them.
"""
from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from ..models import VendorMessage

MessageLike = Union[VendorMessage, Mapping[str, Any]]


def coerce_messages(messages: Iterable[MessageLike]) -> List[VendorMessage]:
    """Return ``messages`` as a list of :class:`VendorMessage`.

    Plain ``{"role", "content"}`` mappings are accepted for host code that
    keeps conversation state as dictionaries.

    Raises:
        ValueError: A mapping carries an unknown role.
        KeyError: A mapping has no ``role``.
    """
    out: List[VendorMessage] = []
    for m in messages:
        out.append(m if isinstance(m, VendorMessage) else VendorMessage.from_mapping(m))
    return out


def join_system_text(messages: Sequence[VendorMessage], extra: Sequence[str] = ()) -> str:
    """Concatenate system message contents (and ``extra`` notes) into one instruction.

    Contents are separated by a blank line and the result is stripped; an empty
    string means there is no system instruction to send.
    """
    pieces = [m.content for m in messages if m.role == "system"]
    pieces.extend(extra)
    return "".join(f"{p}\n\n" for p in pieces).strip()


def split_system(messages: Sequence[VendorMessage]) -> Tuple[str, List[VendorMessage]]:
    """Return ``(system_text, conversation)`` with system messages removed."""
    return join_system_text(messages), [m for m in messages if m.role != "system"]


def last_user_index(messages: Sequence[VendorMessage]) -> Optional[int]:
    """Index of the last user message, or ``None`` when there is none."""
    for idx in range(len(messages) - 1, -1, -1):
        if messages[idx].role == "user":
            return idx
    return None


def final_user_index(messages: Sequence[VendorMessage]) -> Optional[int]:
    """Index of the final message when it is a user message, else ``None``.

    Gemini and Perplexity only attach images when the conversation ends on
    a user turn.
    """
    if messages and messages[-1].role == "user":
        return len(messages) - 1
    return None


__all__ = [
    "MessageLike",
    "coerce_messages",
    "join_system_text",
    "split_system",
    "last_user_index",
    "final_user_index",
]
