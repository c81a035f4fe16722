from __future__ import annotations

import httpx
import pytest

from genai_client.base.errors import ErrorCode, ProviderError, classify_exception, classify_status
from genai_client.base.http import Dispatcher
from genai_client.base.resilience import NoPauseBackoff, RetryConfig


@pytest.mark.parametrize(
    "status,code",
    [
        (400, ErrorCode.VALIDATION),
        (401, ErrorCode.AUTH),
        (403, ErrorCode.AUTH),
        (404, ErrorCode.NOT_FOUND),
        (409, ErrorCode.CONFLICT),
        (429, ErrorCode.RATE_LIMIT),
        (500, ErrorCode.SERVER_ERROR),
        (503, ErrorCode.UNAVAILABLE),
        (599, ErrorCode.SERVER_ERROR),
        (418, ErrorCode.VALIDATION),
        (302, ErrorCode.UNKNOWN),
    ],
)
def test_classify_status(status, code):
    assert classify_status(status) is code


def test_classify_exception_transport_errors():
    assert classify_exception(httpx.ReadTimeout("slow")) is ErrorCode.TIMEOUT
    assert classify_exception(httpx.ConnectError("refused")) is ErrorCode.TRANSIENT
    assert classify_exception(ConnectionResetError()) is ErrorCode.TRANSIENT


def test_classify_exception_passthrough_and_heuristics():
    err = ProviderError(code=ErrorCode.RATE_LIMIT, message="slow down")
    assert classify_exception(err) is ErrorCode.RATE_LIMIT
    assert classify_exception(RuntimeError("invalid argument")) is ErrorCode.VALIDATION
    assert classify_exception(RuntimeError("???")) is ErrorCode.UNKNOWN


def test_classify_exception_request_side_protocol_errors():
    assert classify_exception(httpx.UnsupportedProtocol("ftp://x")) is ErrorCode.VALIDATION
    assert classify_exception(httpx.LocalProtocolError("bad header")) is ErrorCode.VALIDATION


def test_classify_exception_reads_status_from_attached_response():
    request = httpx.Request("GET", "https://genai.test/v1beta/models/x")
    response = httpx.Response(404, request=request)
    err = httpx.HTTPStatusError("not here", request=request, response=response)
    assert classify_exception(err) is ErrorCode.NOT_FOUND


@pytest.mark.parametrize(
    "exc,code",
    [
        (httpx.UnsupportedProtocol("Request URL has an unsupported protocol 'ftp://'."), ErrorCode.VALIDATION),
        (httpx.ProxyError("proxy temporarily unavailable"), ErrorCode.UNAVAILABLE),
    ],
)
def test_dispatched_transport_errors_are_classified_without_retry(exc, code):
    calls = []

    def handler(request):
        calls.append(request)
        raise exc

    with httpx.Client(transport=httpx.MockTransport(handler)) as http:
        dispatcher = Dispatcher(http, retry=RetryConfig(backoff=NoPauseBackoff()))
        with pytest.raises(ProviderError) as ei:
            dispatcher.send(None, http.build_request("GET", "https://genai.test/v1beta/models"))

    assert ei.value.code is code
    assert ei.value.raw is exc
    assert len(calls) == 1
