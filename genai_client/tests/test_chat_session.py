"""ChatSession history semantics.

Covers:
- history is sent with each message and grows by one user+model turn per call
- a streamed turn is recorded exactly once, only after the stream ends
- failed, blocked or abandoned calls leave history untouched
"""
from __future__ import annotations

import json
from typing import Any, Dict, List

import httpx
import pytest

from genai_client import BlockedError, CancelledError, Client, NoPauseBackoff, ProviderError, RetryConfig
from genai_client.base.models import Content, Text


def _reply(text: str) -> Dict[str, Any]:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}, "finishReason": "STOP"}]}


class _ChatService:
    def __init__(self, replies: List[httpx.Response]) -> None:
        self.replies = replies
        self.bodies: List[Dict[str, Any]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.bodies.append(json.loads(request.content))
        return self.replies[len(self.bodies) - 1]


def _session(make_http, service: _ChatService, history=None):
    client = Client(api_key="k-abc", base_url="https://genai.test", http_client=make_http(service), retry=RetryConfig(backoff=NoPauseBackoff()))
    return client.generative_model("m").start_chat(history)


def test_send_message_records_both_turns(make_http):
    service = _ChatService([httpx.Response(200, json=_reply("hi!")), httpx.Response(200, json=_reply("fine"))])
    chat = _session(make_http, service)

    chat.send_message("hello")
    chat.send_message("how are you?")

    assert [(c.role, c.text()) for c in chat.history] == [  # nosec B101
        ("user", "hello"),
        ("model", "hi!"),
        ("user", "how are you?"),
        ("model", "fine"),
    ]
    assert [c["role"] for c in service.bodies[1]["contents"]] == ["user", "model", "user"]  # nosec B101


def test_initial_history_is_sent_and_copied(make_http):
    seed = [Content(role="user", parts=[Text("a")]), Content(role="model", parts=[Text("b")])]
    service = _ChatService([httpx.Response(200, json=_reply("c"))])
    chat = _session(make_http, service, history=seed)

    chat.send_message("next")

    assert len(seed) == 2  # nosec B101
    assert len(chat.history) == 4  # nosec B101
    assert [p["parts"][0]["text"] for p in service.bodies[0]["contents"]] == ["a", "b", "next"]  # nosec B101


def test_failed_and_blocked_messages_leave_history_untouched(make_http):
    service = _ChatService(
        [
            httpx.Response(400, json={"error": {"code": 400, "message": "bad", "status": "INVALID_ARGUMENT"}}),
            httpx.Response(200, json={"promptFeedback": {"blockReason": "OTHER"}}),
        ]
    )
    chat = _session(make_http, service)

    with pytest.raises(ProviderError):
        chat.send_message("one")
    with pytest.raises(BlockedError):
        chat.send_message("two")

    assert chat.history == []  # nosec B101


def test_stream_records_turn_once_at_end(make_http, sse):
    body = sse(
        {"candidates": [{"content": {"role": "model", "parts": [{"text": "Hel"}]}}]},
        {"candidates": [{"content": {"role": "model", "parts": [{"text": "lo"}]}, "finishReason": "STOP"}]},
    )
    service = _ChatService([httpx.Response(200, content=body)])
    chat = _session(make_http, service)

    it = chat.send_message_stream("greet me")
    next(it)
    assert chat.history == []  # nosec B101
    list(it)
    list(it)

    assert [(c.role, c.text()) for c in chat.history] == [("user", "greet me"), ("model", "Hello")]  # nosec B101
    assert chat.history[1].parts == [Text("Hello")]  # nosec B101


def test_abandoned_stream_leaves_history_untouched(make_http, sse):
    body = sse(
        {"candidates": [{"content": {"parts": [{"text": "a"}]}}]},
        {"candidates": [{"content": {"parts": [{"text": "b"}]}}]},
    )
    service = _ChatService([httpx.Response(200, content=body)])
    chat = _session(make_http, service)

    it = chat.send_message_stream("x")
    next(it)
    it.close()
    with pytest.raises(CancelledError):
        next(it)

    assert chat.history == []  # nosec B101


def test_model_turn_role_is_forced(make_http):
    reply = {"candidates": [{"content": {"parts": [{"text": "no role"}]}}]}
    service = _ChatService([httpx.Response(200, json=reply)])
    chat = _session(make_http, service)

    chat.send_message("q")

    assert chat.history[1].role == "model"  # nosec B101
