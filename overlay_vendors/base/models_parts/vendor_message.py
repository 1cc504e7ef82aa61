"""
Vendor message DTO.

Defines the `VendorMessage` dataclass and the `Role` literal. A conversation is
an ordered sequence of messages; system messages may appear anywhere and are
collapsed into a single system instruction by each vendor protocol.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Mapping

# Message roles understood by every vendor adapter.
Role = Literal["system", "user", "assistant"]

_ROLES = ("system", "user", "assistant")


@dataclass(frozen=True)
class VendorMessage:
    """A single plain-text chat message.

    Attributes:
        role: Author role (``"system"``, ``"user"`` or ``"assistant"``).
        content: Plain text content.
    """

    role: Role
    content: str

    def __post_init__(self) -> None:
        if self.role not in _ROLES:
            raise ValueError(f"unsupported message role: {self.role!r}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "VendorMessage":
        """Build a message from a ``{"role", "content"}`` mapping."""
        return cls(role=data["role"], content=str(data.get("content") or ""))

    def to_dict(self) -> dict:
        """Return the OpenAI-compatible ``{"role", "content"}`` shape."""
        return {"role": self.role, "content": self.content}


__all__ = ["VendorMessage", "Role"]
