"""
Model capability flags.

`ModelCapabilities` describes what a candidate model can do. Resolvers filter
discovered models against a mapping of required flags before ranking them.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass(frozen=True)
class ModelCapabilities:
    """Capability flags advertised for one model.

    Attributes:
        text: Accepts and produces text.
        streaming: Supports incremental streaming responses.
        images: Accepts image input (``None`` when unknown).
        audio: Accepts audio input (``None`` when unknown).
        max_output_tokens: Advertised output ceiling, if known.
    """

    text: bool = True
    streaming: bool = True
    images: Optional[bool] = None
    audio: Optional[bool] = None
    max_output_tokens: Optional[int] = None

    def satisfies(self, required: Mapping[str, bool]) -> bool:
        """Return True when every required boolean flag is met.

        Unknown keys are ignored. A required ``True`` flag fails when the
        capability is ``False`` or unknown.
        """
        for key, wanted in required.items():
            if not wanted or not hasattr(self, key):
                continue
            if not getattr(self, key):
                return False
        return True


__all__ = ["ModelCapabilities"]
