from __future__ import annotations

import pytest

from genai_client.base.timeouts import TimeoutConfig, get_timeout_config


def test_defaults_without_env():
    cfg = get_timeout_config()
    assert cfg == TimeoutConfig()  # nosec B101


@pytest.mark.parametrize("raw", ["", "abc", "0", "-5"])
def test_invalid_env_values_fall_back(monkeypatch, raw):
    monkeypatch.setenv("GENAI_TIMEOUT_HTTP_SECONDS", raw)
    assert get_timeout_config().http_timeout_seconds == 60.0  # nosec B101


def test_env_change_refreshes_cache(monkeypatch):
    monkeypatch.setenv("GENAI_TIMEOUT_STREAM_SECONDS", "15")
    assert get_timeout_config().stream_timeout_seconds == 15.0  # nosec B101
    monkeypatch.setenv("GENAI_TIMEOUT_STREAM_SECONDS", "25")
    assert get_timeout_config().stream_timeout_seconds == 25.0  # nosec B101


def test_httpx_timeout_selects_stream_read():
    cfg = TimeoutConfig(connect_timeout_seconds=2, http_timeout_seconds=10, stream_timeout_seconds=40)
    assert cfg.httpx_timeout().read == 10  # nosec B101
    assert cfg.httpx_timeout(stream=True).read == 40  # nosec B101


def test_httpx_timeout_clamped_to_remaining():
    cfg = TimeoutConfig(connect_timeout_seconds=2, http_timeout_seconds=10)
    t = cfg.httpx_timeout(remaining=1.5)
    assert t.read == 1.5  # nosec B101
    assert t.connect == 1.5  # nosec B101
