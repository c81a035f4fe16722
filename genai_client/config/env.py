"""genai_client.config.env
======================

Environment variable names and helpers for credentials and endpoint
overrides.

Design Notes
------------
- The API key has historically been read from both ``GEMINI_API_KEY`` and
  ``GOOGLE_API_KEY``; ``API_KEY_ENV_VARS`` lists them canonical first to
  establish precedence.
- Helpers never raise on unset variables; callers decide how to proceed.
"""

from __future__ import annotations

import os
from typing import Dict, Optional, Tuple

API_KEY_ENV_VARS: Tuple[str, ...] = ("GEMINI_API_KEY", "GOOGLE_API_KEY")

# Config field → environment variable
ENV_FIELD_MAP: Dict[str, str] = {
    "base_url": "GEMINI_BASE_URL",
    "api_version": "GEMINI_API_VERSION",
    "model": "GEMINI_MODEL",
}

CONFIG_FILE_ENV = "GENAI_CONFIG_FILE"


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. The check is case-insensitive and resilient to surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def resolve_api_key() -> Tuple[Optional[str], Optional[str]]:
    """Resolve the API key from the process environment.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        ``(value, env_var_used)`` for the first non-empty, non-placeholder
        variable in priority order, or ``(None, None)``.
    """
    for name in API_KEY_ENV_VARS:
        val = os.environ.get(name)
        if val and not is_placeholder(val):
            return val, name
    return None, None


def env_overrides() -> Dict[str, str]:
    """Return endpoint/model overrides present in the environment."""
    out: Dict[str, str] = {}
    for field, name in ENV_FIELD_MAP.items():
        val = os.getenv(name)
        if val:
            out[field] = val
    return out


__all__ = [
    "API_KEY_ENV_VARS",
    "ENV_FIELD_MAP",
    "CONFIG_FILE_ENV",
    "is_placeholder",
    "resolve_api_key",
    "env_overrides",
]
