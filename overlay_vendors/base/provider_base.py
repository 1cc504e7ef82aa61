"""Shared streaming template for the four vendor providers.

Purpose
-------
``BaseVendorProvider`` owns everything the vendors have in common so each
``<vendor>/client.py`` only supplies wire details:

- api-key and capability checks before any I/O;
- model selection through the vendor's resolver, memoized per instance;
- the bounded invalid-model retry loop (at most ``MAX_MODEL_ATTEMPTS``
  attempts, each excluding every model already tried);
- the per-attempt state machine STREAMING -> FALLBACK-NONSTREAM -> DONE;
- callback dispatch (ordered chunks, exactly one terminal callback);
- the audio-summary specialization of ``stream_text``.

Vendor hooks
------------
``_make_resolver``, ``_stream_request``, ``_fallback_request``,
``_parse_event``, ``_extract_nonstream`` and ``_is_invalid_model_error``.
``_after_empty_stream`` may be overridden (Gemini escalates its token budget).

Timeouts & errors
-----------------
Streaming requests use ``get_timeout_config().for_stream()``, fallbacks use
``for_request()``. httpx transport errors become ``NetworkError`` and non-2xx
answers become ``ApiError``; fallback failures are logged and treated as "no
text" so they never fail an otherwise successful request.
"""

from __future__ import annotations

import json
import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Sequence, Tuple

import httpx

from ..config import get_provider_config, get_vendor_metadata
from ..config.defaults import AUDIO_SUMMARY_SYSTEM_PROMPT, MAX_MODEL_ATTEMPTS
from .cancellation import CancellationToken
from .errors import (
    ApiError,
    ErrorCode,
    MissingApiKeyError,
    ProviderError,
    UnsupportedError,
    api_error_from_response,
    classify_exception,
    classify_transport_error,
)
from .http import get_httpx_client
from .logging import LogContext, get_logger, normalized_log_event
from .model_resolver import BaseModelResolver
from .models import ResolveOptions, StreamCallbacks, VendorMessage, VendorMetadata, VendorModelInfo
from .streaming import (
    CallbackDispatcher,
    FrameResult,
    NonStreamResult,
    SSEEvent,
    StreamOutcome,
    iter_sse_events,
)
from .timeouts import get_timeout_config
from .utils.messages import MessageLike, coerce_messages


def _capability_key(required: Mapping[str, bool]) -> FrozenSet[str]:
    return frozenset(name for name, needed in required.items() if needed)


@dataclass(frozen=True)
class RequestSpec:
    """One prepared HTTP call (URL, headers, query parameters, JSON body)."""

    url: str
    headers: Dict[str, str]
    body: Dict[str, Any]
    params: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class StreamRequest:
    """Caller input for one ``stream_*`` call, independent of the model."""

    operation: str
    messages: Tuple[VendorMessage, ...]
    images: Tuple[str, ...] = ()

    @property
    def required_capabilities(self) -> Dict[str, bool]:
        required = {"text": True, "streaming": True}
        if self.images:
            required["images"] = True
        return required


class BaseVendorProvider(ABC):
    """Template implementation of :class:`VendorProvider`.

    Parameters
    ----------
    api_key:
        Vendor key; falls back to config file / environment.
    model:
        Requested model; falls back to ``<VENDOR>_MODEL`` and then the
        catalog default. A requested model is used without discovery until
        the vendor rejects it.
    base_url:
        API base URL override.
    http_client:
        Injected ``httpx.Client`` (tests use ``httpx.MockTransport``).
    model_cache:
        ``ModelCache`` for the resolver; the process default when omitted.
    preferred_tier:
        ``"free"``/``"paid"`` ranking preference used during re-resolution.
    """

    vendor_id: str = ""
    audio_summary_prompt: str = AUDIO_SUMMARY_SYSTEM_PROMPT

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        *,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
        model_cache: Any = None,
        preferred_tier: Optional[str] = None,
    ) -> None:
        cfg = get_provider_config(
            self.vendor_id,
            {"api_key": api_key, "model": model, "base_url": base_url, "preferred_tier": preferred_tier},
        )
        self._metadata = get_vendor_metadata(self.vendor_id)
        self._api_key: Optional[str] = cfg.get("api_key") or None
        self._requested_model: str = cfg.get("model") or self._metadata.default_model
        self._base_url: str = str(cfg.get("base_url") or "").rstrip("/")
        self._preferred_tier: Optional[str] = cfg.get("preferred_tier")
        self._http_client = http_client
        self._resolver = self._make_resolver(model_cache=model_cache, http_client=http_client)
        self._resolved_models: Dict[FrozenSet[str], str] = {}
        self._model_lock = threading.Lock()
        self._logger = get_logger(f"overlay_vendors.{self.vendor_id}")

    # ---- vendor hooks ----
    @abstractmethod
    def _make_resolver(self, *, model_cache: Any, http_client: Optional[httpx.Client]) -> BaseModelResolver:
        """Return this vendor's model resolver."""

    @abstractmethod
    def _stream_request(self, model: str, request: StreamRequest) -> RequestSpec:
        """Build the streaming HTTP call."""

    @abstractmethod
    def _fallback_request(
        self, model: str, request: StreamRequest, *, max_tokens: Optional[int] = None
    ) -> RequestSpec:
        """Build the non-streaming call (optionally at a larger token budget)."""

    @abstractmethod
    def _parse_event(self, event: SSEEvent) -> FrameResult:
        """Translate one SSE event."""

    @abstractmethod
    def _extract_nonstream(self, payload: Any) -> NonStreamResult:
        """Read the text of a synchronous JSON body."""

    @abstractmethod
    def _is_invalid_model_error(self, error: ApiError) -> bool:
        """True when ``error`` says the model does not exist for this key."""

    # ---- public surface ----
    @property
    def metadata(self) -> VendorMetadata:
        return self._metadata

    @property
    def supports_images(self) -> bool:
        return self._metadata.supports_images

    @property
    def supports_audio_summary(self) -> bool:
        return self._metadata.supports_audio_summary

    @property
    def requested_model(self) -> str:
        return self._requested_model

    @property
    def resolver(self) -> BaseModelResolver:
        return self._resolver

    @property
    def base_url(self) -> str:
        return self._base_url

    def stream_text(
        self,
        messages: Sequence[MessageLike],
        callbacks: Optional[StreamCallbacks] = None,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> str:
        """Stream a text completion and return the concatenated chunks."""
        request = StreamRequest("stream_text", tuple(coerce_messages(messages)))
        return self._run(request, callbacks, cancel)

    def stream_multimodal(
        self,
        messages: Sequence[MessageLike],
        images: Sequence[str],
        callbacks: Optional[StreamCallbacks] = None,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> str:
        """Stream a completion with ``images`` attached to the final user turn."""
        request = StreamRequest(
            "stream_multimodal",
            tuple(coerce_messages(messages)),
            tuple(img for img in images if img),
        )
        return self._run(request, callbacks, cancel)

    def stream_audio_summary(
        self,
        transcript: str,
        callbacks: Optional[StreamCallbacks] = None,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> str:
        """Stream a rolling meeting summary of ``transcript``."""
        messages = (
            VendorMessage("system", self.audio_summary_prompt),
            VendorMessage("user", transcript),
        )
        return self._run(StreamRequest("stream_audio_summary", messages), callbacks, cancel)

    def resolve_model(
        self,
        *,
        use_requested: bool = True,
        exclude_models: Sequence[str] = (),
        images: bool = False,
    ) -> str:
        """Run model resolution without touching the per-instance memo.

        With ``use_requested=False`` the configured model is ignored so the
        cache / discovery / fallback path is exercised (used by the CLI).
        """
        required = {"text": True, "streaming": True}
        if images:
            required["images"] = True
        return self._resolver.resolve(
            self._api_key,
            ResolveOptions(
                requested_model=self._requested_model if use_requested else None,
                required_capabilities=required,
                exclude_models=tuple(exclude_models),
                preferred_tier=self._preferred_tier,
            ),
        )

    def validate_api_key(self) -> bool:
        """Return True when an authenticated model listing succeeds."""
        if not self._api_key:
            return False
        try:
            self._resolver.discover(self._api_key)
        except Exception:  # noqa: BLE001 - any failure means "not usable"
            return False
        return True

    def list_models(self) -> List[VendorModelInfo]:
        """Return the vendor's current model listing.

        Raises:
            MissingApiKeyError: no key configured.
            ApiError: the listing endpoint answered non-2xx.
            NetworkError: transport failure.
        """
        if not self._api_key:
            raise MissingApiKeyError(self.vendor_id)
        try:
            return list(self._resolver.discover(self._api_key))
        except httpx.HTTPError as exc:
            raise classify_transport_error(exc, self.vendor_id) from exc

    # ---- orchestration ----
    def _client(self) -> httpx.Client:
        return self._http_client or get_httpx_client(None, purpose=self.vendor_id)

    def _check_request(self, request: StreamRequest) -> None:
        if request.operation == "stream_multimodal" and not self.supports_images:
            raise UnsupportedError(self.vendor_id, f"{self._metadata.label} does not support image input.")
        if request.operation == "stream_audio_summary" and not self.supports_audio_summary:
            raise UnsupportedError(self.vendor_id, f"{self._metadata.label} does not support meeting summaries.")
        if not self._api_key:
            raise MissingApiKeyError(self.vendor_id)

    def _run(
        self,
        request: StreamRequest,
        callbacks: Optional[StreamCallbacks],
        cancel: Optional[CancellationToken],
    ) -> str:
        dispatcher = CallbackDispatcher(callbacks)
        try:
            self._check_request(request)
            self._run_with_model_retry(request, dispatcher, cancel)
        except ProviderError as exc:
            self._log_failure(request, exc, dispatcher)
            dispatcher.fail(exc)
            raise
        except Exception as exc:
            err = ProviderError(
                code=ErrorCode.INTERNAL,
                message=str(exc) or type(exc).__name__,
                provider=self.vendor_id,
                raw=exc,
            )
            self._log_failure(request, err, dispatcher)
            dispatcher.fail(err)
            raise err from exc
        dispatcher.complete()
        return dispatcher.text

    def _log_failure(self, request: StreamRequest, exc: ProviderError, dispatcher: CallbackDispatcher) -> None:
        normalized_log_event(
            self._logger,
            "stream.error",
            LogContext(vendor=self.vendor_id, model=exc.model),
            phase="finalize",
            error_code=exc.code.value,
            emitted=dispatcher.emitted,
            level=logging.ERROR,
            operation=request.operation,
            status=exc.status,
            error=exc.message,
        )

    def _current_model(self, required: Mapping[str, bool]) -> str:
        """Resolve the model once per capability set; later calls reuse it."""
        key = _capability_key(required)
        with self._model_lock:
            if key not in self._resolved_models:
                self._resolved_models[key] = self._resolver.resolve(
                    self._api_key,
                    ResolveOptions(
                        requested_model=self._requested_model,
                        required_capabilities=dict(required),
                        preferred_tier=self._preferred_tier,
                    ),
                )
            return self._resolved_models[key]

    def _remember_model(self, model: str, required: Mapping[str, bool]) -> None:
        with self._model_lock:
            self._resolved_models[_capability_key(required)] = model

    def _forget_model(self, model: str) -> None:
        """Drop every memoized choice of a model the vendor rejected."""
        with self._model_lock:
            self._resolved_models = {k: v for k, v in self._resolved_models.items() if v != model}

    def _run_with_model_retry(
        self,
        request: StreamRequest,
        dispatcher: CallbackDispatcher,
        cancel: Optional[CancellationToken],
    ) -> None:
        required = request.required_capabilities
        model = self._current_model(required)
        attempted: List[str] = []
        while True:
            attempted.append(model)
            attempt = len(attempted)
            try:
                self._attempt(model, request, dispatcher, cancel, attempt)
            except ApiError as err:
                if (
                    dispatcher.emitted
                    or attempt >= MAX_MODEL_ATTEMPTS
                    or not self._is_invalid_model_error(err)
                ):
                    raise
                model = self._next_model(err, required, attempted)
                continue
            if attempt > 1:
                self._remember_model(model, required)
            return

    def _next_model(self, err: ApiError, required: Mapping[str, bool], attempted: List[str]) -> str:
        """Invalidate the cache and pick a model not tried yet, or re-raise ``err``."""
        normalized_log_event(
            self._logger,
            "retry.invalid_model",
            LogContext(vendor=self.vendor_id, model=attempted[-1]),
            phase="retry",
            attempt=len(attempted),
            error_code=err.code.value,
            emitted=False,
            level=logging.WARNING,
            status=err.status,
        )
        self._resolver.invalidate()
        self._forget_model(attempted[-1])
        candidate = self._resolver.resolve(
            self._api_key,
            ResolveOptions(
                required_capabilities=dict(required),
                exclude_models=tuple(attempted),
                preferred_tier=self._preferred_tier,
            ),
        )
        tried = {self._resolver.normalize_model_id(m) for m in attempted}
        if self._resolver.normalize_model_id(candidate) in tried:
            raise err
        return candidate

    def _attempt(
        self,
        model: str,
        request: StreamRequest,
        dispatcher: CallbackDispatcher,
        cancel: Optional[CancellationToken],
        attempt: int,
    ) -> None:
        ctx = LogContext(vendor=self.vendor_id, model=model)
        if cancel is not None:
            cancel.raise_if_cancelled(self.vendor_id)
        normalized_log_event(
            self._logger,
            "stream.start",
            ctx,
            phase="start",
            attempt=attempt,
            emitted=dispatcher.emitted,
            operation=request.operation,
            images=len(request.images),
        )
        outcome = self._stream_once(model, request, dispatcher, cancel)
        if not outcome.has_text:
            if cancel is not None:
                cancel.raise_if_cancelled(self.vendor_id)
            self._after_empty_stream(model, request, outcome, dispatcher, attempt)
        normalized_log_event(
            self._logger,
            "stream.end",
            ctx,
            phase="finalize",
            attempt=attempt,
            emitted=dispatcher.emitted,
            chars=len(dispatcher.text),
            frames=outcome.frames,
            finish_reason=outcome.finish_reason,
        )

    def _stream_once(
        self,
        model: str,
        request: StreamRequest,
        dispatcher: CallbackDispatcher,
        cancel: Optional[CancellationToken],
    ) -> StreamOutcome:
        spec = self._stream_request(model, request)
        outcome = StreamOutcome()
        try:
            with self._client().stream(
                "POST",
                spec.url,
                headers=spec.headers,
                params=spec.params or None,
                json=spec.body,
                timeout=get_timeout_config().for_stream(),
            ) as resp:
                if resp.status_code >= 400:
                    resp.read()
                    raise api_error_from_response(self.vendor_id, resp.status_code, resp.text, model=model)
                for event in iter_sse_events(resp.iter_text()):
                    if cancel is not None:
                        cancel.raise_if_cancelled(self.vendor_id)
                    frame = self._parse_event(event)
                    if frame.error is not None:
                        raise self._stream_error(frame.error, model)
                    dispatcher.chunk(frame.text)
                    outcome.absorb(frame)
                    if frame.done:
                        break
        except httpx.HTTPError as exc:
            raise classify_transport_error(exc, self.vendor_id, model) from exc
        return outcome

    def _stream_error(self, error: Any, model: str) -> ApiError:
        """Convert an error carried inside the stream into :class:`ApiError`."""
        message = error.get("message") if isinstance(error, dict) else None
        return ApiError(
            self.vendor_id,
            f"{self.vendor_id} stream error: {message or error}",
            model=model,
            details=json.dumps(error, ensure_ascii=False, default=str),
        )

    def _after_empty_stream(
        self,
        model: str,
        request: StreamRequest,
        outcome: StreamOutcome,
        dispatcher: CallbackDispatcher,
        attempt: int,
    ) -> None:
        """Reissue the request without streaming and emit whatever it returns."""
        result = self._nonstream(model, self._fallback_request(model, request), attempt, dispatcher)
        dispatcher.chunk(result.text)

    def _nonstream(
        self,
        model: str,
        spec: RequestSpec,
        attempt: int,
        dispatcher: CallbackDispatcher,
        *,
        phase: str = "fallback",
    ) -> NonStreamResult:
        """Run one synchronous call; failures are logged and yield no text."""
        ctx = LogContext(vendor=self.vendor_id, model=model)
        try:
            resp = self._client().post(
                spec.url,
                headers=spec.headers,
                params=spec.params or None,
                json=spec.body,
                timeout=get_timeout_config().for_request(),
            )
            if resp.status_code >= 400:
                raise api_error_from_response(
                    self.vendor_id, resp.status_code, resp.text, model=model, label="fallback request"
                )
            payload = resp.json()
        except (ApiError, httpx.HTTPError, ValueError) as exc:
            normalized_log_event(
                self._logger,
                "stream.fallback",
                ctx,
                phase=phase,
                attempt=attempt,
                error_code=classify_exception(exc).value,
                emitted=dispatcher.emitted,
                level=logging.WARNING,
                error=str(exc),
            )
            return NonStreamResult()
        result = self._extract_nonstream(payload)
        normalized_log_event(
            self._logger,
            "stream.fallback",
            ctx,
            phase=phase,
            attempt=attempt,
            emitted=dispatcher.emitted,
            chars=len(result.text),
            finish_reason=result.finish_reason,
        )
        return result


__all__ = ["BaseVendorProvider", "RequestSpec", "StreamRequest"]
