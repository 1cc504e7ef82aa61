"""Perplexity provider.

Same streaming shape as OpenAI. The empty-stream fallback sends only
``{model, messages, stream: false}``. Key validation uses a one-token
completion because the API has no model listing.
"""

from __future__ import annotations

from typing import Any, List, Optional

import httpx

from ..base.errors import ApiError
from ..base.model_resolver import BaseModelResolver
from ..base.models import VendorModelInfo
from ..base.openai_style_parts import bearer_headers
from ..base.provider_base import BaseVendorProvider, RequestSpec, StreamRequest
from ..base.streaming import FrameResult, NonStreamResult, SSEEvent
from ..base.timeouts import get_timeout_config
from . import protocol
from .model_resolver import PerplexityModelResolver


class PerplexityProvider(BaseVendorProvider):
    """Perplexity Sonar provider."""

    vendor_id = "perplexity"

    def _make_resolver(self, *, model_cache: Any, http_client: Optional[httpx.Client]) -> BaseModelResolver:
        return PerplexityModelResolver(cache=model_cache, http_client=http_client, base_url=self.base_url)

    def _stream_request(self, model: str, request: StreamRequest) -> RequestSpec:
        return RequestSpec(
            url=protocol.chat_url(self.base_url),
            headers=bearer_headers(self._api_key or ""),
            body=protocol.build_payload(model, request.messages, request.images),
        )

    def _fallback_request(
        self, model: str, request: StreamRequest, *, max_tokens: Optional[int] = None
    ) -> RequestSpec:
        body = protocol.build_fallback_payload(model, request.messages, request.images)
        if max_tokens is not None:
            body["max_tokens"] = max_tokens
        return RequestSpec(
            url=protocol.chat_url(self.base_url),
            headers=bearer_headers(self._api_key or "", stream=False),
            body=body,
        )

    def _parse_event(self, event: SSEEvent) -> FrameResult:
        return protocol.parse_event(event)

    def _extract_nonstream(self, payload: Any) -> NonStreamResult:
        return protocol.extract_nonstream(payload)

    def _is_invalid_model_error(self, error: ApiError) -> bool:
        return protocol.is_invalid_model_error(error)

    def validate_api_key(self) -> bool:
        """Send a one-token completion; True when the vendor accepts it."""
        if not self._api_key:
            return False
        body = {
            "model": self.requested_model,
            "messages": [{"role": "user", "content": "ping"}],
            "max_tokens": 1,
            "stream": False,
        }
        try:
            resp = self._client().post(
                protocol.chat_url(self.base_url),
                headers=bearer_headers(self._api_key, stream=False),
                json=body,
                timeout=get_timeout_config().for_request(),
            )
        except httpx.HTTPError:
            return False
        return resp.status_code < 400

    def list_models(self) -> List[VendorModelInfo]:
        """Return the static catalog (no key needed)."""
        return list(self._resolver.discover(self._api_key or ""))


__all__ = ["PerplexityProvider"]
