"""Vendor provider registry.

Purpose
-------
Map a vendor id to its provider class and build instances. Adapters are
imported lazily with ``importlib`` so importing the registry never pulls in
every vendor module.

Timeout and fallback semantics
------------------------------
None. The registry either returns an instance or raises
:class:`UnknownProviderError`.

Scope
-----
``openai``, ``gemini``, ``anthropic`` and ``perplexity``.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from .dto.adapter_params import AdapterParams
from .interfaces import VendorProvider


class UnknownProviderError(Exception):
    """Raised when a vendor cannot be resolved or initialized.

    Failure modes include:
    - The vendor id is not registered.
    - The vendor module cannot be imported or the class is missing.
    - The provider constructor rejected its arguments.
    """


def create_vendor_provider(
    vendor_id: str,
    api_key: Optional[str] = None,
    *,
    params: Optional[AdapterParams] = None,
    **kwargs: Any,
) -> VendorProvider:
    """Return a provider for ``vendor_id`` (delegates to :meth:`ProviderFactory.create`).

    Parameters
    ----------
    vendor_id:
        One of ``openai``, ``gemini``, ``anthropic``, ``perplexity``.
    api_key:
        Vendor key; when omitted the config file / environment is consulted
        and a missing key surfaces as ``MissingApiKeyError`` on first use.
    params:
        Optional :class:`AdapterParams`; explicit keyword arguments win.
    **kwargs:
        Constructor keyword arguments (``model``, ``base_url``, ``http_client``,
        ``model_cache``, ``preferred_tier``).
    """
    if api_key is not None:
        kwargs["api_key"] = api_key
    return ProviderFactory.create(vendor_id, params=params, **kwargs)


class ProviderFactory:
    """Create vendor providers from a canonical id (e.g. ``"gemini"``)."""

    _PROVIDERS: Dict[str, Dict[str, str]] = {
        "openai": {"module": "overlay_vendors.openai.client", "class": "OpenAIProvider"},
        "gemini": {"module": "overlay_vendors.gemini.client", "class": "GeminiProvider"},
        "anthropic": {"module": "overlay_vendors.anthropic.client", "class": "AnthropicProvider"},
        "perplexity": {"module": "overlay_vendors.perplexity.client", "class": "PerplexityProvider"},
    }

    @classmethod
    def create(
        cls,
        vendor_id: str,
        *,
        params: Optional[AdapterParams] = None,
        **kwargs: Any,
    ) -> VendorProvider:
        """Create a provider instance.

        Raises
        ------
        UnknownProviderError
            Unknown vendor, import failure, missing class or rejected
            constructor arguments.
        """
        merged_kwargs = cls._coerce_params(params, kwargs)

        name = (vendor_id or "").lower().strip()
        spec = cls._PROVIDERS.get(name)
        if not spec:
            raise UnknownProviderError(f"Unknown vendor '{vendor_id}'")

        module_path, class_name = spec["module"], spec["class"]
        try:
            mod = import_module(module_path)
        except ImportError as exc:  # pragma: no cover - import failure path
            raise UnknownProviderError(
                f"Failed to import module '{module_path}' for vendor '{vendor_id}': {exc}"
            ) from exc

        try:
            klass: Type = getattr(mod, class_name)
        except AttributeError as exc:  # pragma: no cover - registry typo
            raise UnknownProviderError(
                f"Provider class '{class_name}' not found in '{module_path}' for vendor '{vendor_id}'"
            ) from exc

        try:
            return klass(**merged_kwargs)
        except TypeError as exc:
            raise UnknownProviderError(
                f"Invalid arguments for '{vendor_id}' provider constructor: {exc}"
            ) from exc

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Registered vendor ids in deterministic order."""
        return tuple(cls._PROVIDERS.keys())

    @staticmethod
    def _coerce_params(params: Optional[AdapterParams], kwargs: Mapping[str, Any]) -> Dict[str, Any]:
        """Merge ``AdapterParams`` into ``kwargs``; kwargs win and ``None`` is ignored."""
        if params is None:
            return dict(kwargs)
        merged: Dict[str, Any] = dict(params.model_dump(exclude_none=True))
        merged.pop("vendor", None)
        merged.update(kwargs)
        return merged


__all__ = ["ProviderFactory", "UnknownProviderError", "create_vendor_provider"]
