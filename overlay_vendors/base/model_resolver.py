"""Model resolution shared by every vendor.

A resolver picks the concrete model identifier for a request. The algorithm
is the same for all vendors; subclasses only supply discovery, scoring and a
fallback list:

1. An explicit ``requested_model`` that is not excluded is returned as-is
   (no network call).
2. A live cache entry that is not excluded is returned.
3. Without an API key the first non-excluded fallback model is returned.
4. Otherwise the vendor's listing is fetched, normalized into
   :class:`VendorModelInfo`, filtered by required capabilities and
   exclusions, and ranked by :meth:`BaseModelResolver.score` (stable sort,
   so ties keep listing order).
5. The winner is cached and returned. Discovery failures and empty candidate
   lists fall back to the static list; resolution never raises.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Optional, Set, Tuple

import httpx

from .errors import api_error_from_response
from .http import get_httpx_client
from .logging import LogContext, get_logger, log_event
from .models import ResolveOptions, VendorModelInfo
from .repositories.model_cache import ModelCache, get_default_model_cache
from .timeouts import get_timeout_config


class BaseModelResolver(ABC):
    """Template for per-vendor model resolvers.

    Class attributes:
        vendor_id: Vendor identifier used for logging and client pooling.
        cache_key: Fixed key of this vendor's cache entry.
        fallback_models: Ordered static fallback list (never empty).
    """

    vendor_id: str = ""
    cache_key: str = ""
    fallback_models: Tuple[str, ...] = ()

    def __init__(
        self,
        *,
        cache: Optional[ModelCache] = None,
        http_client: Optional[httpx.Client] = None,
        base_url: Optional[str] = None,
    ) -> None:
        self._cache = cache
        self._http_client = http_client
        self._base_url = (base_url or self.default_base_url()).rstrip("/")
        self._logger = get_logger(f"overlay_vendors.{self.vendor_id}")

    # ---- hooks ----
    def default_base_url(self) -> str:
        """Base URL of the vendor API (overridden per vendor)."""
        return ""

    @abstractmethod
    def discover(self, api_key: str) -> List[VendorModelInfo]:
        """Return the vendor's candidate models (may perform I/O and raise)."""

    @abstractmethod
    def score(self, model: VendorModelInfo, options: ResolveOptions) -> Any:
        """Return a sortable ranking key; higher ranks first."""

    def normalize_model_id(self, model: str) -> str:
        """Canonical form used when comparing against exclusions."""
        return model

    def present_model_id(self, model: str) -> str:
        """Form returned to callers (Gemini adds the ``models/`` prefix)."""
        return model

    # ---- shared plumbing ----
    @property
    def cache(self) -> ModelCache:
        return self._cache if self._cache is not None else get_default_model_cache()

    @property
    def base_url(self) -> str:
        return self._base_url

    def http_client(self) -> httpx.Client:
        return self._http_client or get_httpx_client(None, purpose=self.vendor_id)

    def get_json(self, url: str, *, headers: Optional[dict] = None, params: Optional[dict] = None) -> Any:
        """GET ``url`` and return the decoded JSON body.

        Raises:
            ApiError: non-2xx response.
            httpx.HTTPError: transport failure.
            ValueError: body is not JSON.
        """
        resp = self.http_client().get(
            url, headers=headers, params=params, timeout=get_timeout_config().for_request()
        )
        if resp.status_code >= 400:
            raise api_error_from_response(self.vendor_id, resp.status_code, resp.text, label="model listing")
        return resp.json()

    def _excluded(self, models: Iterable[str]) -> Set[str]:
        return {self.normalize_model_id(m) for m in models if m}

    def fallback(self, excluded: Set[str]) -> str:
        """First fallback model not excluded; the last one when all are."""
        for model in self.fallback_models:
            if self.normalize_model_id(model) not in excluded:
                return self.present_model_id(model)
        return self.present_model_id(self.fallback_models[-1])

    def _log(self, source: str, model: str, **fields: Any) -> None:
        log_event(
            self._logger,
            "model.resolve",
            LogContext(vendor=self.vendor_id, model=model),
            source=source,
            **fields,
        )

    def rank(self, candidates: List[VendorModelInfo], options: ResolveOptions) -> List[VendorModelInfo]:
        """Filter ``candidates`` by capabilities/exclusions and sort by score."""
        excluded = self._excluded(options.exclude_models)
        survivors = [
            c
            for c in candidates
            if self.normalize_model_id(c.name) not in excluded
            and c.capabilities.satisfies(options.required_capabilities)
        ]
        return sorted(survivors, key=lambda m: self.score(m, options), reverse=True)

    def resolve(self, api_key: Optional[str], options: Optional[ResolveOptions] = None) -> str:
        """Return the model identifier to use for a request."""
        opts = options or ResolveOptions()
        excluded = self._excluded(opts.exclude_models)

        requested = opts.requested_model
        if requested and self.normalize_model_id(requested) not in excluded:
            return self.present_model_id(requested)

        cached = self.cache.get(self.cache_key)
        if cached and self.normalize_model_id(cached) not in excluded:
            self._log("cache", cached)
            return cached

        if not api_key:
            model = self.fallback(excluded)
            self._log("fallback", model, reason="no_api_key")
            return model

        try:
            candidates = self.discover(api_key)
        except Exception as exc:  # noqa: BLE001 - resolution must never fail the request
            model = self.fallback(excluded)
            log_event(
                self._logger,
                "model.discovery_failed",
                LogContext(vendor=self.vendor_id, model=model),
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return model

        ranked = self.rank(candidates, opts)
        if not ranked:
            model = self.fallback(excluded)
            self._log("fallback", model, reason="no_candidates", discovered=len(candidates))
            return model

        best = self.present_model_id(ranked[0].name)
        self.cache.put(self.cache_key, best)
        self._log("discovery", best, discovered=len(candidates), eligible=len(ranked))
        return best

    def invalidate(self) -> None:
        """Drop this vendor's cached model choice."""
        self.cache.invalidate(self.cache_key)
        log_event(self._logger, "model.invalidate", LogContext(vendor=self.vendor_id), cache_key=self.cache_key)


__all__ = ["BaseModelResolver"]
