"""Gemini provider.

Besides the shared empty-stream fallback, Gemini escalates once: when the
plain fallback is still empty and the answer was cut at the token budget
(``finishReason == "MAX_TOKENS"``) or the request carried images, one more
non-streaming call runs at a doubled ``maxOutputTokens`` (capped). Its
result is final, even when empty.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from ..base.errors import ApiError
from ..base.logging import LogContext, normalized_log_event
from ..base.model_resolver import BaseModelResolver
from ..base.provider_base import BaseVendorProvider, RequestSpec, StreamRequest
from ..base.streaming import CallbackDispatcher, FrameResult, NonStreamResult, SSEEvent, StreamOutcome
from ..base.utils.token_budget import escalated_budget, output_token_budget
from . import protocol
from .model_resolver import GeminiModelResolver

_JSON_HEADERS = {"Content-Type": "application/json"}


class GeminiProvider(BaseVendorProvider):
    """Google Gemini ``generateContent`` provider."""

    vendor_id = "gemini"

    def _make_resolver(self, *, model_cache: Any, http_client: Optional[httpx.Client]) -> BaseModelResolver:
        return GeminiModelResolver(cache=model_cache, http_client=http_client, base_url=self.base_url)

    @staticmethod
    def _budget(request: StreamRequest) -> int:
        return output_token_budget(len(request.images))

    def _stream_request(self, model: str, request: StreamRequest) -> RequestSpec:
        return RequestSpec(
            url=protocol.stream_url(self.base_url, model),
            headers=dict(_JSON_HEADERS),
            params={"alt": "sse", "key": self._api_key or ""},
            body=protocol.build_payload(
                request.messages, request.images, max_output_tokens=self._budget(request)
            ),
        )

    def _fallback_request(
        self, model: str, request: StreamRequest, *, max_tokens: Optional[int] = None
    ) -> RequestSpec:
        return RequestSpec(
            url=protocol.generate_url(self.base_url, model),
            headers=dict(_JSON_HEADERS),
            params={"key": self._api_key or ""},
            body=protocol.build_payload(
                request.messages,
                request.images,
                max_output_tokens=max_tokens or self._budget(request),
            ),
        )

    def _parse_event(self, event: SSEEvent) -> FrameResult:
        return protocol.parse_event(event)

    def _extract_nonstream(self, payload: Any) -> NonStreamResult:
        return protocol.extract_nonstream(payload)

    def _is_invalid_model_error(self, error: ApiError) -> bool:
        return protocol.is_invalid_model_error(error)

    def _after_empty_stream(
        self,
        model: str,
        request: StreamRequest,
        outcome: StreamOutcome,
        dispatcher: CallbackDispatcher,
        attempt: int,
    ) -> None:
        result = self._nonstream(model, self._fallback_request(model, request), attempt, dispatcher)
        if result.text.strip():
            dispatcher.chunk(result.text)
            return

        base = self._budget(request)
        bigger = escalated_budget(base)
        truncated = protocol.MAX_TOKENS_FINISH in (outcome.finish_reason, result.finish_reason)
        if (truncated or request.images) and bigger > base:
            normalized_log_event(
                self._logger,
                "stream.escalate",
                LogContext(vendor=self.vendor_id, model=model),
                phase="escalate",
                attempt=attempt,
                emitted=dispatcher.emitted,
                max_output_tokens=bigger,
                finish_reason=outcome.finish_reason or result.finish_reason,
            )
            result = self._nonstream(
                model,
                self._fallback_request(model, request, max_tokens=bigger),
                attempt,
                dispatcher,
                phase="escalate",
            )
        dispatcher.chunk(result.text)


__all__ = ["GeminiProvider"]
