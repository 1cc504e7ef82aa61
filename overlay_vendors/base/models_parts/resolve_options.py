"""
Model resolution options.

Carries the per-call inputs of a resolver: the explicitly requested model, the
capability flags a candidate must meet, models to exclude and an optional tier
preference (honoured by Perplexity).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True)
class ResolveOptions:
    """Inputs for :meth:`BaseModelResolver.resolve`.

    Attributes:
        requested_model: Returned as-is unless excluded.
        required_capabilities: Flags a discovered candidate must satisfy.
        exclude_models: Models that already failed and must not be returned.
        preferred_tier: ``"free"`` or ``"paid"`` ranking preference.
    """

    requested_model: Optional[str] = None
    required_capabilities: Mapping[str, bool] = field(default_factory=dict)
    exclude_models: Tuple[str, ...] = ()
    preferred_tier: Optional[str] = None


__all__ = ["ResolveOptions"]
