"""Anthropic provider.

Output budget scales with the image count (``output_token_budget``). In-stream
``error`` events surface as ``ApiError``; ``not_found`` bodies trigger the
shared invalid-model retry.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from ..base.errors import ApiError
from ..base.model_resolver import BaseModelResolver
from ..base.provider_base import BaseVendorProvider, RequestSpec, StreamRequest
from ..base.streaming import FrameResult, NonStreamResult, SSEEvent
from ..base.utils.token_budget import output_token_budget
from . import protocol
from .model_resolver import AnthropicModelResolver


class AnthropicProvider(BaseVendorProvider):
    """Anthropic Messages API provider."""

    vendor_id = "anthropic"

    def _make_resolver(self, *, model_cache: Any, http_client: Optional[httpx.Client]) -> BaseModelResolver:
        return AnthropicModelResolver(cache=model_cache, http_client=http_client, base_url=self.base_url)

    def _payload(self, model: str, request: StreamRequest, *, stream: bool, max_tokens: Optional[int]) -> dict:
        return protocol.build_payload(
            model,
            request.messages,
            request.images,
            max_tokens=max_tokens or output_token_budget(len(request.images)),
            stream=stream,
        )

    def _stream_request(self, model: str, request: StreamRequest) -> RequestSpec:
        return RequestSpec(
            url=protocol.messages_url(self.base_url),
            headers=protocol.stream_headers(self._api_key or ""),
            body=self._payload(model, request, stream=True, max_tokens=None),
        )

    def _fallback_request(
        self, model: str, request: StreamRequest, *, max_tokens: Optional[int] = None
    ) -> RequestSpec:
        return RequestSpec(
            url=protocol.messages_url(self.base_url),
            headers=protocol.auth_headers(self._api_key or ""),
            body=self._payload(model, request, stream=False, max_tokens=max_tokens),
        )

    def _parse_event(self, event: SSEEvent) -> FrameResult:
        return protocol.parse_event(event)

    def _extract_nonstream(self, payload: Any) -> NonStreamResult:
        return protocol.extract_nonstream(payload)

    def _is_invalid_model_error(self, error: ApiError) -> bool:
        return protocol.is_invalid_model_error(error)


__all__ = ["AnthropicProvider"]
