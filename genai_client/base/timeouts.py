"""Unified timeout configuration for HTTP calls and streams.

TimeoutConfig
    Dataclass capturing normalized timeout values in seconds.

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use (and again whenever the relevant variables change). Supported
    environment variables (all optional):
        GENAI_TIMEOUT_CONNECT_SECONDS
        GENAI_TIMEOUT_HTTP_SECONDS
        GENAI_TIMEOUT_STREAM_SECONDS

A call context's deadline always takes precedence: per-attempt timeouts are
clamped to the time remaining before it.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

import httpx


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        connect_timeout_seconds: Time allowed to establish a connection.
        http_timeout_seconds: Read timeout for unary (non-streaming) calls.
        stream_timeout_seconds: Idle timeout between streamed messages.
    """

    connect_timeout_seconds: float = 10.0
    http_timeout_seconds: float = 60.0
    stream_timeout_seconds: float = 120.0

    def httpx_timeout(self, *, stream: bool = False, remaining: Optional[float] = None) -> httpx.Timeout:
        """Build an ``httpx.Timeout``, clamped to ``remaining`` when given."""
        read = self.stream_timeout_seconds if stream else self.http_timeout_seconds
        connect = self.connect_timeout_seconds
        if remaining is not None:
            read = min(read, remaining)
            connect = min(connect, remaining)
        return httpx.Timeout(read, connect=connect)


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None

_ENV_NAMES = (
    "GENAI_TIMEOUT_CONNECT_SECONDS",
    "GENAI_TIMEOUT_HTTP_SECONDS",
    "GENAI_TIMEOUT_STREAM_SECONDS",
)


def _parse_env_float(name: str, default: float) -> float:
    """Parse a positive float from the environment, else return ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(n, "") for n in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        connect_timeout_seconds=_parse_env_float(_ENV_NAMES[0], defaults.connect_timeout_seconds),
        http_timeout_seconds=_parse_env_float(_ENV_NAMES[1], defaults.http_timeout_seconds),
        stream_timeout_seconds=_parse_env_float(_ENV_NAMES[2], defaults.stream_timeout_seconds),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
