from __future__ import annotations

import pytest

from overlay_vendors.base.utils.images import (
    infer_image_mime_type,
    normalize_inline_image,
    to_data_uri,
)
from overlay_vendors.base.utils.token_budget import escalated_budget, output_token_budget


@pytest.mark.parametrize(
    "payload, mime",
    [
        ("iVBORw0KGgoAAAA", "image/png"),
        ("/9j/4AAQSkZJRg", "image/jpeg"),
        ("R0lGODlhAQAB", "image/gif"),
        ("UklGRiQAAABXRUJQ", "image/webp"),
        ("AAAAunknown", "image/png"),
    ],
)
def test_mime_inferred_from_base64_magic(payload, mime):
    assert infer_image_mime_type(payload) == mime


def test_data_uri_header_wins_over_magic():
    img = normalize_inline_image("data:image/webp;base64,/9j/abc")
    assert img.mime_type == "image/webp"
    assert img.data == "/9j/abc"


def test_malformed_or_empty_images_are_skipped():
    assert normalize_inline_image("") is None
    assert normalize_inline_image("data:image/png;base64") is None
    assert normalize_inline_image("data:image/png;base64,") is None


def test_to_data_uri_keeps_existing_uri():
    assert to_data_uri("abc") == "data:image/png;base64,abc"
    assert to_data_uri("data:image/jpeg;base64,xyz") == "data:image/jpeg;base64,xyz"


@pytest.mark.parametrize(
    "count, expected",
    [(0, 1024), (1, 2048), (2, 2560), (3, 3072), (4, 3584), (5, 4096), (9, 4096)],
)
def test_output_budget_scales_with_images_and_caps(count, expected):
    assert output_token_budget(count) == expected


def test_budget_is_monotonic_in_image_count():
    budgets = [output_token_budget(n) for n in range(12)]
    assert budgets == sorted(budgets)
    assert max(budgets) == 4096


def test_escalated_budget_doubles_with_ceiling():
    assert escalated_budget(1024) == 2048
    assert escalated_budget(3072) == 4096
    assert escalated_budget(4096) == 4096
