"""In-memory assistant conversation.

``AssistantSession`` keeps the running chat history for one overlay window
and sends each question, optionally with screenshots, through a
:class:`VendorProvider`. History is only extended after a successful call,
so a failed request can simply be retried.
"""

from __future__ import annotations

import base64
import threading
from typing import List, Optional, Sequence, Tuple

from ..base.cancellation import CancellationToken
from ..base.interfaces import FileSaver, ScreenshotSource, VendorProvider
from ..base.models import StreamCallbacks, VendorMessage

_ROLE_LABELS = {"user": "You", "assistant": "Assistant"}


class AssistantSession:
    """Conversation state bound to one provider.

    Parameters
    ----------
    provider:
        Any :class:`VendorProvider`.
    system_prompt:
        Optional instruction sent first on every request (never stored in
        the history).
    """

    def __init__(self, provider: VendorProvider, *, system_prompt: Optional[str] = None) -> None:
        self._provider = provider
        self._system_prompt = system_prompt
        self._history: List[VendorMessage] = []
        self._lock = threading.Lock()

    @property
    def provider(self) -> VendorProvider:
        return self._provider

    @property
    def history(self) -> Tuple[VendorMessage, ...]:
        with self._lock:
            return tuple(self._history)

    def reset(self) -> None:
        with self._lock:
            self._history.clear()

    def _messages_for(self, question: str) -> List[VendorMessage]:
        messages: List[VendorMessage] = []
        if self._system_prompt:
            messages.append(VendorMessage("system", self._system_prompt))
        messages.extend(self.history)
        messages.append(VendorMessage("user", question))
        return messages

    def ask(
        self,
        question: str,
        images: Optional[Sequence[str]] = None,
        callbacks: Optional[StreamCallbacks] = None,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> str:
        """Send ``question`` (with base64 ``images`` when given) and record the exchange."""
        messages = self._messages_for(question)
        if images:
            answer = self._provider.stream_multimodal(messages, list(images), callbacks, cancel=cancel)
        else:
            answer = self._provider.stream_text(messages, callbacks, cancel=cancel)
        with self._lock:
            self._history.append(VendorMessage("user", question))
            if answer:
                self._history.append(VendorMessage("assistant", answer))
        return answer

    def ask_about_screen(
        self,
        question: str,
        screenshot_source: ScreenshotSource,
        callbacks: Optional[StreamCallbacks] = None,
        *,
        cancel: Optional[CancellationToken] = None,
    ) -> str:
        """Capture the screen and ask ``question`` about it."""
        shot = screenshot_source.take_screenshot()
        encoded = base64.b64encode(shot).decode("ascii")
        return self.ask(question, [encoded], callbacks, cancel=cancel)

    def transcript_text(self) -> str:
        """Render the history as plain text (``You:``/``Assistant:`` blocks)."""
        return "\n\n".join(f"{_ROLE_LABELS.get(m.role, m.role)}: {m.content}" for m in self.history)

    def export_transcript(self, file_saver: FileSaver, filename: str = "assistant-transcript.txt") -> str:
        """Save the rendered history and return the saved path."""
        return file_saver.save_file(self.transcript_text(), filename)


__all__ = ["AssistantSession"]
