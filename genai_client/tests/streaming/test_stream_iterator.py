"""Contract tests for ``GenerateContentResponseIterator``.

Covers:
- lazy open, partials returned unmodified, merged view only at clean end
- sticky StopIteration and sticky errors
- blocked prompt / blocked candidate surface ``BlockedError``
- failures discard the cumulative response unless ``keep_partial``
- the history sink is called exactly once, only after a clean end
- cancellation between messages closes the stream
- cancellation while a read is blocked returns promptly
- terminal log events carry stream metrics
"""
from __future__ import annotations

import copy
import threading
import time
from typing import Any, Dict, List

import httpx
import pytest

from genai_client.base.cancellation import CallContext, CancelledError
from genai_client.base.errors import BlockedError, ErrorCode, ProviderError
from genai_client.base.models import BlockReason, FinishReason, Text
from genai_client.base.streaming import GenerateContentResponseIterator


def _msg(text: str, *, index: int = 0, finish: str | None = None, **extra: Any) -> Dict[str, Any]:
    cand: Dict[str, Any] = {"index": index, "content": {"role": "model", "parts": [{"text": text}]}}
    if finish:
        cand["finishReason"] = finish
    return {"candidates": [cand], **extra}


class _History:
    def __init__(self) -> None:
        self.calls: List[list] = []

    def add_to_history(self, candidates) -> None:
        self.calls.append(candidates)


class _Opener:
    """Serves one SSE body per open; counts opens and tracks the response."""

    def __init__(self, body: bytes) -> None:
        self.body = body
        self.opens = 0
        self.response: httpx.Response | None = None

    def __call__(self, ctx: CallContext) -> httpx.Response:
        self.opens += 1
        self.response = httpx.Response(200, stream=httpx.ByteStream(self.body))
        return self.response


def test_partials_then_merged_at_end(sse):
    opener = _Opener(sse(_msg("Hel"), _msg("lo, "), _msg("world", finish="STOP", usageMetadata={"totalTokenCount": 9})))
    it = GenerateContentResponseIterator(opener)

    assert opener.opens == 0  # nosec B101
    first = next(it)
    assert opener.opens == 1  # nosec B101
    assert it.merged is None  # nosec B101
    kept = copy.deepcopy(first)
    rest = list(it)

    assert [p.text() for p in [first, *rest]] == ["Hel", "lo, ", "world"]  # nosec B101
    assert first == kept  # nosec B101
    merged = it.merged
    assert merged is not None  # nosec B101
    assert merged.candidates[0].content.parts == [Text("Hello, world")]  # nosec B101
    assert merged.candidates[0].finish_reason is FinishReason.STOP  # nosec B101
    assert merged.usage_metadata.total_token_count == 9  # nosec B101
    assert it.metrics.emitted == 3 and it.metrics.total_tokens == 9  # nosec B101
    assert opener.response.is_closed  # nosec B101


def test_stop_iteration_is_sticky(sse):
    it = GenerateContentResponseIterator(_Opener(sse(_msg("a"))))
    assert len(list(it)) == 1  # nosec B101
    with pytest.raises(StopIteration):
        next(it)
    with pytest.raises(StopIteration):
        next(it)


def test_empty_stream_ends_without_history(sse):
    history = _History()
    it = GenerateContentResponseIterator(_Opener(b""), history=history)
    assert list(it) == []  # nosec B101
    assert it.merged is None  # nosec B101
    assert history.calls == []  # nosec B101


def test_history_appended_once_after_clean_end(sse):
    history = _History()
    it = GenerateContentResponseIterator(_Opener(sse(_msg("a"), _msg("b"))), history=history)

    next(it)
    next(it)
    assert history.calls == []  # nosec B101
    with pytest.raises(StopIteration):
        next(it)
    with pytest.raises(StopIteration):
        next(it)

    assert len(history.calls) == 1  # nosec B101
    assert history.calls[0][0].content.text() == "ab"  # nosec B101


def test_blocked_prompt_raises_blocked_error(sse):
    history = _History()
    body = sse({"promptFeedback": {"blockReason": "SAFETY"}})
    it = GenerateContentResponseIterator(_Opener(body), history=history)

    with pytest.raises(BlockedError) as ei:
        next(it)

    assert ei.value.prompt_feedback.block_reason is BlockReason.SAFETY  # nosec B101
    assert ei.value.candidate is None  # nosec B101
    assert history.calls == []  # nosec B101


def test_safety_finished_candidate_raises_even_if_others_succeed(sse):
    msg = {
        "candidates": [
            {"index": 0, "content": {"parts": [{"text": "fine"}]}, "finishReason": "STOP"},
            {"index": 1, "finishReason": "SAFETY"},
        ]
    }
    it = GenerateContentResponseIterator(_Opener(sse(_msg("x", index=0), msg)))

    assert next(it).text() == "x"  # nosec B101
    with pytest.raises(BlockedError) as ei:
        next(it)
    assert ei.value.candidate.index == 1  # nosec B101
    assert it.merged is None  # nosec B101


def test_errors_are_sticky_and_discard_merged(sse):
    body = sse(_msg("a")) + b"data: {broken\n\n" + sse(_msg("b"))
    history = _History()
    it = GenerateContentResponseIterator(_Opener(body), history=history)

    next(it)
    with pytest.raises(ProviderError) as first:
        next(it)
    with pytest.raises(ProviderError) as second:
        next(it)

    assert first.value is second.value  # nosec B101
    assert first.value.code is ErrorCode.INTERNAL  # nosec B101
    assert it.merged is None  # nosec B101
    assert it.error is first.value  # nosec B101
    assert history.calls == []  # nosec B101


def test_keep_partial_retains_merged_after_failure(sse):
    body = sse(_msg("a"), _msg("b")) + b"data: {broken\n\n"
    it = GenerateContentResponseIterator(_Opener(body), keep_partial=True)

    with pytest.raises(ProviderError):
        list(it)

    assert it.merged is not None and it.merged.text() == "ab"  # nosec B101


def test_open_failure_propagates(sse):
    def opener(ctx):
        raise ProviderError(code=ErrorCode.UNAVAILABLE, message="down", status_code=503)

    it = GenerateContentResponseIterator(opener)
    with pytest.raises(ProviderError) as ei:
        next(it)
    assert ei.value.code is ErrorCode.UNAVAILABLE  # nosec B101


def test_transport_error_mid_stream_is_normalized():
    class _Broken(httpx.SyncByteStream):
        def __iter__(self):
            yield b'data: {"candidates": [{"content": {"parts": [{"text": "a"}]}}]}\n\n'
            raise httpx.ReadError("connection lost")

    def opener(ctx):
        return httpx.Response(200, stream=_Broken())

    it = GenerateContentResponseIterator(opener)
    assert next(it).text() == "a"  # nosec B101
    with pytest.raises(ProviderError) as ei:
        next(it)
    assert ei.value.code is ErrorCode.TRANSIENT  # nosec B101
    assert isinstance(ei.value.raw, httpx.ReadError)  # nosec B101


def test_cancel_between_messages_closes_stream(sse):
    opener = _Opener(sse(_msg("a"), _msg("b")))
    ctx = CallContext.background()
    history = _History()
    it = GenerateContentResponseIterator(opener, ctx, history=history)

    next(it)
    ctx.cancel("user stop")
    with pytest.raises(CancelledError):
        next(it)

    assert opener.response.is_closed  # nosec B101
    assert it.merged is None  # nosec B101
    assert history.calls == []  # nosec B101


def test_cancel_interrupts_blocked_read():
    release = threading.Event()

    class _Stalled(httpx.SyncByteStream):
        def __iter__(self):
            yield b'data: {"candidates": [{"content": {"parts": [{"text": "a"}]}}]}\n\n'
            release.wait(2.0)
            yield b'data: {"candidates": [{"content": {"parts": [{"text": "b"}]}}]}\n\n'

    def opener(ctx):
        return httpx.Response(200, stream=_Stalled())

    ctx = CallContext.background()
    history = _History()
    it = GenerateContentResponseIterator(opener, ctx, history=history)
    assert next(it).text() == "a"  # nosec B101

    timer = threading.Timer(0.05, ctx.cancel)
    timer.start()
    start = time.monotonic()
    try:
        with pytest.raises(CancelledError):
            next(it)
        elapsed = time.monotonic() - start
    finally:
        timer.cancel()
        release.set()

    assert elapsed < 0.5  # nosec B101
    assert it.merged is None and history.calls == []  # nosec B101
    with pytest.raises(CancelledError):
        next(it)


def test_precancelled_context_never_opens(sse):
    opener = _Opener(sse(_msg("a")))
    ctx = CallContext.background()
    ctx.cancel()
    it = GenerateContentResponseIterator(opener, ctx)

    with pytest.raises(CancelledError):
        next(it)
    assert opener.opens == 0  # nosec B101


def test_close_abandons_stream(sse):
    opener = _Opener(sse(_msg("a"), _msg("b")))
    with GenerateContentResponseIterator(opener) as it:
        next(it)
    assert opener.response.is_closed  # nosec B101
    with pytest.raises(CancelledError):
        next(it)


def test_terminal_events_are_logged(sse, log_events):
    it = GenerateContentResponseIterator(_Opener(sse(_msg("a", usageMetadata={"promptTokenCount": 2, "candidatesTokenCount": 3}))))
    list(it)

    end = next(e for e in log_events() if e["event"] == "stream.end")
    assert end["emitted_count"] == 1  # nosec B101
    assert end["tokens"] == {"prompt": 2, "candidates": 3, "total": 5}  # nosec B101
    assert "error_code" not in end  # nosec B101


def test_cancelled_stream_logs_cancelled_event(sse, log_events):
    ctx = CallContext.background()
    it = GenerateContentResponseIterator(_Opener(sse(_msg("a"), _msg("b"))), ctx)
    next(it)
    ctx.cancel()
    with pytest.raises(CancelledError):
        next(it)
    names = [e["event"] for e in log_events()]
    assert "stream.cancelled" in names and "stream.end" not in names  # nosec B101
