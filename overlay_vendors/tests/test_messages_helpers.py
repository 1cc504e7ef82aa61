from __future__ import annotations

import pytest

from overlay_vendors.base.models import VendorMessage
from overlay_vendors.base.utils.messages import (
    coerce_messages,
    final_user_index,
    join_system_text,
    last_user_index,
    split_system,
)


def _conv():
    return [
        VendorMessage("system", "Be brief."),
        VendorMessage("user", "first"),
        VendorMessage("system", "Use English."),
        VendorMessage("assistant", "ok"),
    ]


def test_coerce_accepts_mappings_and_dtos():
    out = coerce_messages([{"role": "user", "content": "hi"}, VendorMessage("assistant", "yo")])
    assert out == [VendorMessage("user", "hi"), VendorMessage("assistant", "yo")]


def test_unknown_role_is_rejected():
    with pytest.raises(ValueError):
        coerce_messages([{"role": "tool", "content": "x"}])


def test_system_messages_collapse_in_order():
    system, rest = split_system(_conv())
    assert system == "Be brief.\n\nUse English."
    assert [m.role for m in rest] == ["user", "assistant"]
    assert join_system_text([], ["note"]) == "note"
    assert join_system_text([VendorMessage("user", "x")]) == ""


def test_user_indexes():
    conv = _conv()
    assert last_user_index(conv) == 1
    assert final_user_index(conv) is None
    conv.append(VendorMessage("user", "second"))
    assert final_user_index(conv) == 4
    assert last_user_index([VendorMessage("assistant", "x")]) is None
