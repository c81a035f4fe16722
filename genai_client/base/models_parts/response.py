"""
Response DTOs produced by generation and token counting calls.

A ``GenerateContentResponse`` returned from a non-streaming call is treated as
immutable. During streaming the aggregator owns one merged instance and
mutates it in place until the stream finishes.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .candidate import Candidate
from .safety import SafetyRating


class BlockReason(str, Enum):
    """Why a prompt was rejected before any candidate was produced."""

    UNSPECIFIED = "BLOCK_REASON_UNSPECIFIED"
    SAFETY = "SAFETY"
    OTHER = "OTHER"
    BLOCKLIST = "BLOCKLIST"
    PROHIBITED_CONTENT = "PROHIBITED_CONTENT"


@dataclass
class PromptFeedback:
    """Prompt-level feedback; a non-unspecified ``block_reason`` means rejection."""

    block_reason: BlockReason = BlockReason.UNSPECIFIED
    safety_ratings: List[SafetyRating] = field(default_factory=list)

    @property
    def blocked(self) -> bool:
        return self.block_reason is not BlockReason.UNSPECIFIED


@dataclass
class UsageMetadata:
    """Token accounting reported by the service (cumulative per response)."""

    prompt_token_count: Optional[int] = None
    candidates_token_count: Optional[int] = None
    total_token_count: Optional[int] = None
    cached_content_token_count: Optional[int] = None


@dataclass
class GenerateContentResponse:
    """Individual response from a generation call or one step of a stream."""

    candidates: List[Candidate] = field(default_factory=list)
    prompt_feedback: Optional[PromptFeedback] = None
    usage_metadata: Optional[UsageMetadata] = None

    def text(self) -> str:
        """Return the text of the first candidate, or ``""`` when there is none."""
        if not self.candidates or self.candidates[0].content is None:
            return ""
        return self.candidates[0].content.text()


@dataclass
class CountTokensResponse:
    total_tokens: int = 0


__all__ = [
    "BlockReason",
    "PromptFeedback",
    "UsageMetadata",
    "GenerateContentResponse",
    "CountTokensResponse",
]
