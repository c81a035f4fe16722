"""Embedding models: single and batched content embeddings."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

from ..base.cancellation import CallContext
from ..base.models import (
    BatchEmbedContentsResponse,
    EmbedContentResponse,
    EmbedRequest,
    Part,
    TaskType,
)
from ..base.serialization import batch_embed_from_wire, content_to_wire, embed_content_from_wire
from .client import full_model_name, new_user_content

if TYPE_CHECKING:
    from .client import Client


class EmbeddingModel:
    """A handle on one embedding model.

    Attributes:
        name: Model name as given by the caller.
        full_name: Resource name (``models/<name>``).
        task_type: Task type applied to requests without a title.
    """

    def __init__(self, client: "Client", name: str) -> None:
        self._client = client
        self.name = name
        self.full_name = full_model_name(name)
        self.task_type = TaskType.UNSPECIFIED

    def _request_wire(self, request: EmbedRequest) -> Dict[str, Any]:
        out: Dict[str, Any] = {"model": self.full_name, "content": content_to_wire(request.content)}
        task_type = request.task_type
        # A non-empty title marks the content as a document.
        if request.title:
            out["title"] = request.title
            task_type = TaskType.RETRIEVAL_DOCUMENT
        if task_type is not TaskType.UNSPECIFIED:
            out["taskType"] = task_type.value
        return out

    def embed_content(
        self,
        *parts: "Part | str",
        title: Optional[str] = None,
        ctx: Optional[CallContext] = None,
    ) -> EmbedContentResponse:
        request = EmbedRequest(content=new_user_content(parts), task_type=self.task_type, title=title)
        data = self._client._call(
            ctx, "POST", f"{self.full_name}:embedContent", body=self._request_wire(request), model=self.name
        )
        return embed_content_from_wire(data)

    def new_batch(self) -> "EmbeddingBatch":
        return EmbeddingBatch(task_type=self.task_type)

    def batch_embed_contents(
        self, batch: "EmbeddingBatch", ctx: Optional[CallContext] = None
    ) -> BatchEmbedContentsResponse:
        """Embed every entry of ``batch`` in one call; results keep batch order."""
        body = {"requests": [self._request_wire(r) for r in batch.requests]}
        data = self._client._call(ctx, "POST", f"{self.full_name}:batchEmbedContents", body=body, model=self.name)
        return batch_embed_from_wire(data)


class EmbeddingBatch:
    """Ordered collection of embedding requests built with chained calls."""

    def __init__(self, task_type: TaskType = TaskType.UNSPECIFIED) -> None:
        self.task_type = task_type
        self.requests: List[EmbedRequest] = []

    def add_content(self, *parts: "Part | str") -> "EmbeddingBatch":
        return self.add_content_with_title("", *parts)

    def add_content_with_title(self, title: str, *parts: "Part | str") -> "EmbeddingBatch":
        self.requests.append(
            EmbedRequest(content=new_user_content(parts), task_type=self.task_type, title=title or None)
        )
        return self

    def __len__(self) -> int:
        return len(self.requests)


__all__ = ["EmbeddingModel", "EmbeddingBatch"]
