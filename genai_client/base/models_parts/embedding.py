"""
Embedding request/response DTOs.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .content import Content


class TaskType(str, Enum):
    UNSPECIFIED = "TASK_TYPE_UNSPECIFIED"
    RETRIEVAL_QUERY = "RETRIEVAL_QUERY"
    RETRIEVAL_DOCUMENT = "RETRIEVAL_DOCUMENT"
    SEMANTIC_SIMILARITY = "SEMANTIC_SIMILARITY"
    CLASSIFICATION = "CLASSIFICATION"
    CLUSTERING = "CLUSTERING"


@dataclass
class ContentEmbedding:
    values: List[float] = field(default_factory=list)


@dataclass
class EmbedContentResponse:
    embedding: Optional[ContentEmbedding] = None


@dataclass
class BatchEmbedContentsResponse:
    embeddings: List[ContentEmbedding] = field(default_factory=list)


@dataclass
class EmbedRequest:
    """One entry of an embedding batch."""

    content: Content
    task_type: TaskType = TaskType.UNSPECIFIED
    title: Optional[str] = None


__all__ = [
    "TaskType",
    "ContentEmbedding",
    "EmbedContentResponse",
    "BatchEmbedContentsResponse",
    "EmbedRequest",
]
