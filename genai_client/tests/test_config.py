from __future__ import annotations

import pytest

from genai_client.config import DEFAULTS, clear_config_cache, get_client_config
from genai_client.config.env import is_placeholder, resolve_api_key


def test_defaults_without_sources():
    cfg = get_client_config()
    assert "api_key" not in cfg  # nosec B101
    for key, value in DEFAULTS.items():
        assert cfg[key] == value  # nosec B101


def test_canonical_key_wins(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "k-google")
    monkeypatch.setenv("GEMINI_API_KEY", "k-gemini")
    assert resolve_api_key() == ("k-gemini", "GEMINI_API_KEY")  # nosec B101


def test_placeholder_key_is_skipped(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "changeme")
    monkeypatch.setenv("GOOGLE_API_KEY", "k-real")
    assert get_client_config()["api_key"] == "k-real"  # nosec B101


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, False),
        ("k-abc", False),
        ("  PLACEHOLDER ", True),
        ("your-key.example", True),
        ("test_123", True),
    ],
)
def test_is_placeholder(value, expected):
    assert is_placeholder(value) is expected  # nosec B101


def test_file_section_env_and_overrides_merge_in_order(tmp_path, monkeypatch):
    path = tmp_path / "genai.yaml"
    path.write_text(
        "genai:\n  base_url: https://file.test\n  api_version: v1\n  model: file-model\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("GENAI_CONFIG_FILE", str(path))
    monkeypatch.setenv("GEMINI_MODEL", "env-model")

    cfg = get_client_config({"api_version": "v2", "base_url": None})

    assert cfg["base_url"] == "https://file.test"  # nosec B101
    assert cfg["model"] == "env-model"  # nosec B101
    assert cfg["api_version"] == "v2"  # nosec B101


def test_json_file_without_section(tmp_path, monkeypatch):
    path = tmp_path / "genai.json"
    path.write_text('{"model": "json-model"}', encoding="utf-8")
    monkeypatch.setenv("GENAI_CONFIG_FILE", str(path))
    assert get_client_config()["model"] == "json-model"  # nosec B101


def test_missing_file_is_ignored(tmp_path, monkeypatch):
    monkeypatch.setenv("GENAI_CONFIG_FILE", str(tmp_path / "absent.yaml"))
    assert get_client_config()["model"] == DEFAULTS["model"]  # nosec B101


def test_non_mapping_file_is_rejected(tmp_path, monkeypatch):
    path = tmp_path / "bad.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    monkeypatch.setenv("GENAI_CONFIG_FILE", str(path))
    with pytest.raises(ValueError):
        get_client_config()


def test_file_contents_are_cached_until_cleared(tmp_path, monkeypatch):
    path = tmp_path / "genai.yaml"
    path.write_text("model: first\n", encoding="utf-8")
    monkeypatch.setenv("GENAI_CONFIG_FILE", str(path))
    assert get_client_config()["model"] == "first"  # nosec B101

    path.write_text("model: second\n", encoding="utf-8")
    assert get_client_config()["model"] == "first"  # nosec B101
    clear_config_cache()
    assert get_client_config()["model"] == "second"  # nosec B101
