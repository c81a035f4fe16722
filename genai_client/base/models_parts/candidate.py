"""
Candidate DTO and its terminal classification.

A ``Candidate`` is one alternative answer. ``index`` is its identity across
the partial messages of a stream and is the key the aggregator merges on.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .content import Content
from .safety import SafetyRating


class FinishReason(str, Enum):
    """Why the model stopped generating tokens for a candidate."""

    UNSPECIFIED = "FINISH_REASON_UNSPECIFIED"
    STOP = "STOP"
    MAX_TOKENS = "MAX_TOKENS"
    SAFETY = "SAFETY"
    RECITATION = "RECITATION"
    OTHER = "OTHER"


@dataclass
class CitationSource:
    """Attribution for a span of a candidate's content."""

    start_index: Optional[int] = None
    end_index: Optional[int] = None
    uri: Optional[str] = None
    license: Optional[str] = None


@dataclass
class CitationMetadata:
    """Ordered citation sources; appended to, never replaced, during merges."""

    citation_sources: List[CitationSource] = field(default_factory=list)


@dataclass
class Candidate:
    """A response candidate generated from the model.

    Attributes:
        index: Stable identity of the candidate within one response/stream.
        content: Generated content, or ``None`` when the candidate was blocked.
        finish_reason: Terminal classification; ``UNSPECIFIED`` while streaming.
        safety_ratings: Latest known safety ratings.
        citation_metadata: Accumulated citation sources.
        token_count: Token count reported for the candidate, if any.
    """

    index: int = 0
    content: Optional[Content] = None
    finish_reason: FinishReason = FinishReason.UNSPECIFIED
    safety_ratings: List[SafetyRating] = field(default_factory=list)
    citation_metadata: Optional[CitationMetadata] = None
    token_count: Optional[int] = None


__all__ = ["FinishReason", "CitationSource", "CitationMetadata", "Candidate"]
