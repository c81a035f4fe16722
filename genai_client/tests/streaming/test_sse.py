from __future__ import annotations

import pytest

from genai_client.base.errors import ErrorCode, ProviderError, ServiceError
from genai_client.base.streaming import iter_sse_messages


def test_events_are_split_on_blank_lines():
    lines = ['data: {"a": 1}', "", 'data: {"b": 2}', ""]
    assert list(iter_sse_messages(lines)) == [{"a": 1}, {"b": 2}]  # nosec B101


def test_trailing_event_without_blank_line_is_flushed():
    assert list(iter_sse_messages(['data: {"a": 1}'])) == [{"a": 1}]  # nosec B101


def test_multiline_data_comments_and_other_fields():
    lines = [": keep-alive", "event: message", 'data: {"a":', "data: 1}", "", ""]
    assert list(iter_sse_messages(lines)) == [{"a": 1}]  # nosec B101


def test_crlf_and_missing_space_after_colon():
    assert list(iter_sse_messages(['data:{"a": 1}\r\n', "\r\n"])) == [{"a": 1}]  # nosec B101


def test_malformed_json_raises_internal_error():
    with pytest.raises(ProviderError) as ei:
        list(iter_sse_messages(["data: {not json", ""]))
    assert ei.value.code is ErrorCode.INTERNAL  # nosec B101


def test_error_object_in_stream_raises_service_error():
    line = 'data: {"error": {"code": 503, "message": "overloaded", "status": "UNAVAILABLE"}}'
    with pytest.raises(ServiceError) as ei:
        list(iter_sse_messages([line, ""]))
    assert ei.value.code is ErrorCode.UNAVAILABLE  # nosec B101
    assert ei.value.status == "UNAVAILABLE"  # nosec B101
