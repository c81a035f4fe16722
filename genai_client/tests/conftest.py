"""Shared fixtures for the client test suite.

- ``make_http`` builds an ``httpx.Client`` over ``httpx.MockTransport`` so no
  test touches the network.
- ``sleeps`` replaces ``CallContext.sleep`` with a recorder that keeps the
  cancellation checks but never waits.
- ``log_events`` captures JSON events emitted under the ``genai`` logger.
- ``clean_env`` (autouse) removes credential/config variables and clears the
  config file cache so tests never depend on the developer's environment.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Iterator, List

import httpx
import pytest

from genai_client.base.cancellation import CallContext
from genai_client.base.logging import BASE_LOGGER_NAME, LOG_LEVEL_ENV, get_logger
from genai_client.config import clear_config_cache

_ENV_VARS = (
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "GEMINI_BASE_URL",
    "GEMINI_API_VERSION",
    "GEMINI_MODEL",
    "GENAI_CONFIG_FILE",
    "GENAI_TIMEOUT_CONNECT_SECONDS",
    "GENAI_TIMEOUT_HTTP_SECONDS",
    "GENAI_TIMEOUT_STREAM_SECONDS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture()
def make_http() -> Iterator[Callable[[Callable[[httpx.Request], httpx.Response]], httpx.Client]]:
    """Return a factory building mock-transport clients; all are closed after the test."""
    clients: List[httpx.Client] = []

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _make
    for c in clients:
        c.close()


@pytest.fixture()
def sleeps(monkeypatch: pytest.MonkeyPatch) -> List[float]:
    """Record requested backoff pauses instead of sleeping."""
    recorded: List[float] = []

    def _fake_sleep(self: CallContext, seconds: float) -> None:
        self.raise_if_done()
        recorded.append(seconds)

    monkeypatch.setattr(CallContext, "sleep", _fake_sleep)
    return recorded


class _ListHandler(logging.Handler):
    """Capture log records into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: List[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())


@pytest.fixture()
def log_events(monkeypatch: pytest.MonkeyPatch) -> Iterator[Callable[[], List[Dict[str, Any]]]]:
    """Yield a callable returning the JSON events logged under ``genai`` so far."""
    # get_logger re-applies the env level on every call.
    monkeypatch.setenv(LOG_LEVEL_ENV, "DEBUG")
    logger = get_logger(BASE_LOGGER_NAME)
    handler = _ListHandler()
    previous = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    def _events() -> List[Dict[str, Any]]:
        return [json.loads(m) for m in handler.messages]

    yield _events
    logger.removeHandler(handler)
    logger.setLevel(previous)


def sse_body(*messages: Dict[str, Any]) -> bytes:
    """Frame JSON ``messages`` as a server-sent-events body."""
    return b"".join(b"data: " + json.dumps(m).encode("utf-8") + b"\r\n\r\n" for m in messages)


@pytest.fixture()
def sse() -> Callable[..., bytes]:
    return sse_body
