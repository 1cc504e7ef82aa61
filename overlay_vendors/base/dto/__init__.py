"""Pydantic DTOs used at the package boundary."""

from .adapter_params import AdapterParams
from .cached_model_entry import CachedModelEntry

__all__ = ["AdapterParams", "CachedModelEntry"]
