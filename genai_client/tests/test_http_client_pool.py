"""Unit tests for the shared httpx client pool.

Covers:
- Same key (base_url, purpose) returns the same instance.
- Different purpose or base URL yields different instances.
- Pooled clients pick up the configured default timeout.
"""
from __future__ import annotations

from genai_client.base.http import close_all_clients, get_httpx_client


def setup_function(_):
    close_all_clients()


def teardown_function(_):
    close_all_clients()


def test_same_key_returns_same_instance():
    c1 = get_httpx_client("https://genai.test", purpose="genai")
    c2 = get_httpx_client("https://genai.test", purpose="genai")
    assert c1 is c2  # nosec B101


def test_different_purpose_returns_different_instances():
    c1 = get_httpx_client("https://genai.test", purpose="genai")
    c2 = get_httpx_client("https://genai.test", purpose="embed")
    assert c1 is not c2  # nosec B101


def test_different_base_url_returns_different_instances():
    c1 = get_httpx_client("https://genai.test", purpose="genai")
    c2 = get_httpx_client("https://other.test", purpose="genai")
    assert c1 is not c2  # nosec B101


def test_close_all_clients_closes_and_clears():
    c1 = get_httpx_client("https://genai.test", purpose="genai")
    close_all_clients()
    assert c1.is_closed  # nosec B101
    assert get_httpx_client("https://genai.test", purpose="genai") is not c1  # nosec B101


def test_pooled_client_uses_env_timeouts(monkeypatch):
    monkeypatch.setenv("GENAI_TIMEOUT_CONNECT_SECONDS", "3")
    monkeypatch.setenv("GENAI_TIMEOUT_HTTP_SECONDS", "7")
    client = get_httpx_client("https://timeouts.test", purpose="genai")
    assert client.timeout.connect == 3.0  # nosec B101
    assert client.timeout.read == 7.0  # nosec B101
