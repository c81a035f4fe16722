from __future__ import annotations

import httpx
import pytest

from genai_client import Client, ErrorCode, NoPauseBackoff, ProviderError, RetryConfig


def _page(names, token=None):
    body = {"models": [{"name": f"models/{n}", "baseModelId": n, "inputTokenLimit": 1000} for n in names]}
    if token:
        body["nextPageToken"] = token
    return body


def _client(make_http, handler):
    return Client(
        api_key="k-abc",
        base_url="https://genai.test",
        http_client=make_http(handler),
        retry=RetryConfig(backoff=NoPauseBackoff()),
    )


def test_list_models_follows_page_tokens(make_http):
    pages = {None: _page(["a", "b"], "t1"), "t1": _page([], "t2"), "t2": _page(["c"])}
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        token = request.url.params.get("pageToken")
        seen.append((token, request.url.params.get("pageSize")))
        return httpx.Response(200, json=pages[token])

    it = _client(make_http, handler).list_models(page_size=2)
    names = [m.name for m in it]

    assert names == ["models/a", "models/b", "models/c"]
    assert seen == [(None, "2"), ("t1", "2"), ("t2", "2")]
    assert it.pages_fetched == 3
    with pytest.raises(StopIteration):
        next(it)


def test_list_models_is_lazy(make_http):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json=_page(["a"]))

    it = _client(make_http, handler).list_models()
    assert calls == []
    assert next(it).base_model_id == "a"
    assert len(calls) == 1


def test_list_models_error_is_sticky(make_http):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(403, json={"error": {"code": 403, "message": "denied", "status": "PERMISSION_DENIED"}})

    it = _client(make_http, handler).list_models()
    with pytest.raises(ProviderError) as first:
        next(it)
    with pytest.raises(ProviderError) as second:
        next(it)
    assert first.value is second.value
    assert first.value.code is ErrorCode.AUTH
    assert len(calls) == 1


def test_get_model(make_http):
    def handler(request):
        assert request.url.path == "/v1beta/models/gemini-1.5-pro"
        return httpx.Response(
            200,
            json={
                "name": "models/gemini-1.5-pro",
                "displayName": "Gemini 1.5 Pro",
                "outputTokenLimit": 8192,
                "supportedGenerationMethods": ["generateContent", "countTokens"],
            },
        )

    info = _client(make_http, handler).get_model("gemini-1.5-pro")
    assert info.display_name == "Gemini 1.5 Pro"
    assert info.output_token_limit == 8192
    assert "countTokens" in info.supported_generation_methods
