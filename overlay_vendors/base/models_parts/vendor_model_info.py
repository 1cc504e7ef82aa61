"""
VendorModelInfo DTO.

Represents one candidate model as advertised by a vendor discovery endpoint
or a static catalog. Rebuilt on every discovery call; never mutated.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from .model_capabilities import ModelCapabilities

Tier = Literal["free", "paid"]


@dataclass(frozen=True)
class VendorModelInfo:
    """A single candidate model.

    Attributes:
        name: Identifier sent to the vendor API.
        label: Human-friendly display name.
        tier: ``"free"`` or ``"paid"``.
        capabilities: Capability flags used for filtering and ranking.
    """

    name: str
    label: str
    tier: Tier = "paid"
    capabilities: ModelCapabilities = field(default_factory=ModelCapabilities)


__all__ = ["VendorModelInfo", "Tier"]
