"""Streaming metrics data structures.

Collected by the response iterator and emitted once per stream in the
terminal log event.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..models import UsageMetadata


@dataclass
class StreamMetrics:
    """Collected metrics for a single streamed generation.

    Attributes:
        emitted: Number of partial messages returned to the caller.
        time_to_first_message_ms: Delay between opening the stream and the
            first partial message.
        total_duration_ms: Time from opening the stream to its termination.
        prompt_tokens: Prompt token count from the latest usage metadata.
        candidates_tokens: Candidate token count from the latest usage metadata.
        total_tokens: Total token count from the latest usage metadata.
    """

    emitted: int = 0
    time_to_first_message_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    prompt_tokens: Optional[int] = None
    candidates_tokens: Optional[int] = None
    total_tokens: Optional[int] = None

    @property
    def tokens(self) -> Dict[str, Optional[int]]:
        return build_token_usage(self.prompt_tokens, self.candidates_tokens, self.total_tokens)


def build_token_usage(prompt: Optional[int], candidates: Optional[int], total: Optional[int] = None) -> Dict[str, Optional[int]]:
    """Return a canonical token usage mapping, deriving ``total`` when possible."""
    derived_total = total
    if derived_total is None and (prompt is not None and candidates is not None):
        derived_total = prompt + candidates
    return {"prompt": prompt, "candidates": candidates, "total": derived_total}


def apply_usage(metrics: StreamMetrics, usage: Optional[UsageMetadata]) -> None:
    """Copy token counts from ``usage`` onto ``metrics`` (no-op for ``None``)."""
    if usage is None:
        return
    metrics.prompt_tokens = usage.prompt_token_count
    metrics.candidates_tokens = usage.candidates_token_count
    metrics.total_tokens = usage.total_token_count


def metrics_fields(metrics: StreamMetrics) -> Dict[str, Any]:
    return {
        "emitted_count": metrics.emitted,
        "time_to_first_message_ms": metrics.time_to_first_message_ms,
        "total_duration_ms": metrics.total_duration_ms,
    }


__all__ = ["StreamMetrics", "build_token_usage", "apply_usage", "metrics_fields"]
