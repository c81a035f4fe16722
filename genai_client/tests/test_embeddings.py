from __future__ import annotations

import json

import httpx

from genai_client import Client, TaskType


class _Recorder:
    def __init__(self, reply):
        self.reply = reply
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(200, json=self.reply)

    def body(self):
        return json.loads(self.requests[-1].content)


def _model(make_http, recorder, name="text-embedding-004"):
    client = Client(api_key="k-abc", base_url="https://genai.test", http_client=make_http(recorder))
    return client.embedding_model(name)


def test_embed_content(make_http):
    recorder = _Recorder({"embedding": {"values": [0.1, 0.2, 0.3]}})
    model = _model(make_http, recorder)

    resp = model.embed_content("hello world")

    assert resp.embedding.values == [0.1, 0.2, 0.3]
    assert recorder.requests[0].url.path == "/v1beta/models/text-embedding-004:embedContent"
    body = recorder.body()
    assert body["content"]["parts"] == [{"text": "hello world"}]
    assert "taskType" not in body and "title" not in body


def test_title_forces_retrieval_document(make_http):
    recorder = _Recorder({"embedding": {"values": []}})
    model = _model(make_http, recorder)
    model.task_type = TaskType.CLUSTERING

    model.embed_content("doc text", title="My Doc")

    body = recorder.body()
    assert body["title"] == "My Doc"
    assert body["taskType"] == "RETRIEVAL_DOCUMENT"


def test_model_task_type_applies_without_title(make_http):
    recorder = _Recorder({"embedding": {"values": []}})
    model = _model(make_http, recorder)
    model.task_type = TaskType.SEMANTIC_SIMILARITY

    model.embed_content("q")

    assert recorder.body()["taskType"] == "SEMANTIC_SIMILARITY"


def test_batch_embed_contents_preserves_order(make_http):
    recorder = _Recorder({"embeddings": [{"values": [1.0]}, {"values": [2.0]}]})
    model = _model(make_http, recorder, name="models/embedding-001")

    batch = model.new_batch().add_content("first").add_content_with_title("Title", "second")
    resp = model.batch_embed_contents(batch)

    assert len(batch) == 2
    assert [e.values for e in resp.embeddings] == [[1.0], [2.0]]
    assert recorder.requests[0].url.path == "/v1beta/models/embedding-001:batchEmbedContents"
    reqs = recorder.body()["requests"]
    assert [r["model"] for r in reqs] == ["models/embedding-001"] * 2
    assert "title" not in reqs[0]
    assert reqs[1]["title"] == "Title" and reqs[1]["taskType"] == "RETRIEVAL_DOCUMENT"
