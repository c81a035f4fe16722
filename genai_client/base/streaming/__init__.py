"""Streaming package: SSE framing, merge rules, metrics and the response iterator."""

from .blocking import check_response
from .iterator import GenerateContentResponseIterator, HistorySink, StreamOpener
from .merge import (
    join_candidate_lists,
    join_citation_metadata,
    join_content,
    join_responses,
    merge_texts,
)
from .sse import iter_sse_messages
from .streaming_metrics import StreamMetrics, apply_usage, build_token_usage

__all__ = [
    "check_response",
    "GenerateContentResponseIterator",
    "HistorySink",
    "StreamOpener",
    "join_candidate_lists",
    "join_citation_metadata",
    "join_content",
    "join_responses",
    "merge_texts",
    "iter_sse_messages",
    "StreamMetrics",
    "apply_usage",
    "build_token_usage",
]
