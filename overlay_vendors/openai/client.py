"""OpenAI provider.

Streams ``/chat/completions`` and reissues the same body without ``stream``
when the stream ends without text. Model ids rejected with
``model_not_found`` trigger the shared invalid-model retry.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from ..base.errors import ApiError
from ..base.model_resolver import BaseModelResolver
from ..base.openai_style_parts import bearer_headers
from ..base.provider_base import BaseVendorProvider, RequestSpec, StreamRequest
from ..base.streaming import FrameResult, NonStreamResult, SSEEvent
from ..config.defaults import OPENAI_AUDIO_SUMMARY_SYSTEM_PROMPT
from . import protocol
from .model_resolver import OpenAIModelResolver


class OpenAIProvider(BaseVendorProvider):
    """OpenAI Chat Completions provider."""

    vendor_id = "openai"
    audio_summary_prompt = OPENAI_AUDIO_SUMMARY_SYSTEM_PROMPT

    def _make_resolver(self, *, model_cache: Any, http_client: Optional[httpx.Client]) -> BaseModelResolver:
        return OpenAIModelResolver(cache=model_cache, http_client=http_client, base_url=self.base_url)

    def _stream_request(self, model: str, request: StreamRequest) -> RequestSpec:
        return RequestSpec(
            url=protocol.chat_url(self.base_url),
            headers=bearer_headers(self._api_key or ""),
            body=protocol.build_payload(model, request.messages, request.images, stream=True),
        )

    def _fallback_request(
        self, model: str, request: StreamRequest, *, max_tokens: Optional[int] = None
    ) -> RequestSpec:
        body = protocol.build_payload(model, request.messages, request.images, stream=False)
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


__all__ = ["OpenAIProvider"]
