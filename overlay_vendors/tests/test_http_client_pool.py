from __future__ import annotations

from overlay_vendors.base.http import close_all_clients, get_httpx_client


def test_clients_are_pooled_by_base_url_and_purpose():
    a = get_httpx_client(None, purpose="openai")
    assert get_httpx_client(None, purpose="openai") is a
    assert get_httpx_client(None, purpose="gemini") is not a
    assert get_httpx_client("https://api.example.invalid", purpose="openai") is not a


def test_close_all_clients_resets_pool():
    a = get_httpx_client(None, purpose="anthropic")
    close_all_clients()
    assert a.is_closed
    assert get_httpx_client(None, purpose="anthropic") is not a
