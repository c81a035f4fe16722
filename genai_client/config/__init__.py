"""Unified configuration layer for the client.

Merge order (later wins):
    1. Built-in defaults (``genai_client.config.defaults``)
    2. Optional external config file (YAML or JSON) named by ``GENAI_CONFIG_FILE``
    3. Environment variables (``GEMINI_API_KEY``/``GOOGLE_API_KEY``,
       ``GEMINI_BASE_URL``, ``GEMINI_API_VERSION``, ``GEMINI_MODEL``)
    4. In-code overrides passed to :func:`get_client_config`

External Config File
--------------------
The file holds a top-level mapping; a ``genai`` section is used when present::

    genai:
      base_url: https://generativelanguage.googleapis.com
      api_version: v1beta
      model: gemini-1.5-flash

The configuration is consumed once at client construction.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional
import os

import yaml

from .defaults import DEFAULT_API_VERSION, DEFAULT_BASE_URL, DEFAULT_MODEL
from .env import CONFIG_FILE_ENV, env_overrides, resolve_api_key

DEFAULTS: Dict[str, Any] = {
    "base_url": DEFAULT_BASE_URL,
    "api_version": DEFAULT_API_VERSION,
    "model": DEFAULT_MODEL,
}

_FILE_CACHE: Dict[str, Dict[str, Any]] = {}


def _load_external_config() -> Dict[str, Any]:
    path = os.getenv(CONFIG_FILE_ENV)
    if not path:
        return {}
    if path in _FILE_CACHE:
        return _FILE_CACHE[path]
    p = Path(path)
    if not p.exists():
        _FILE_CACHE[path] = {}
        return _FILE_CACHE[path]
    # YAML is a superset of JSON, so one loader covers both formats.
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    section = data.get("genai", data)
    _FILE_CACHE[path] = dict(section) if isinstance(section, dict) else {}
    return _FILE_CACHE[path]


def get_client_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged client configuration.

    Keys: ``api_key``, ``base_url``, ``api_version``, ``model``.
    """
    cfg: Dict[str, Any] = dict(DEFAULTS)
    cfg |= _load_external_config()
    cfg |= env_overrides()
    api_key, _ = resolve_api_key()
    if api_key:
        cfg["api_key"] = api_key
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


def clear_config_cache() -> None:
    _FILE_CACHE.clear()


__all__ = [
    "get_client_config",
    "clear_config_cache",
    "DEFAULTS",
]
