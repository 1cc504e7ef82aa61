from __future__ import annotations

import pytest

from overlay_vendors.base.cancellation import CancellationToken, CancelledError
from overlay_vendors.base.errors import ErrorCode


def test_cancel_is_idempotent_and_keeps_first_reason():
    token = CancellationToken()
    token.cancel("window closed")
    token.cancel("again")
    assert token.cancelled
    assert token.reason == "window closed"


def test_children_inherit_cancellation():
    parent = CancellationToken()
    child = parent.child()
    parent.cancel("stop")
    assert child.cancelled
    late = parent.child()
    assert late.cancelled and late.reason == "stop"


def test_raise_if_cancelled_uses_taxonomy():
    token = CancellationToken()
    token.raise_if_cancelled("gemini")
    token.cancel()
    with pytest.raises(CancelledError) as info:
        token.raise_if_cancelled("gemini")
    assert info.value.code is ErrorCode.CANCELLED
    assert info.value.provider == "gemini"


def test_wait_wakes_when_cancelled_from_another_thread():
    import threading

    token = CancellationToken()
    assert token.wait(0.01) is False
    threading.Timer(0.05, token.cancel, args=("closed",)).start()
    assert token.wait(5) is True
    assert token.reason == "closed"
