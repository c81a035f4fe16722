"""
Blocked-content error type.

A ``BlockedError`` is raised for responses that were transported successfully
but whose content the service withheld: either the prompt was rejected
(``PromptFeedback.block_reason`` set) or a candidate finished for safety.
It is deliberately not a :class:`ProviderError`, so callers that retry on
transport failures never retry a blocked request by accident.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from .error_code import ErrorCode

if TYPE_CHECKING:
    from ..models_parts.candidate import Candidate
    from ..models_parts.response import PromptFeedback


class BlockedError(Exception):
    """The model's response was blocked.

    Exactly one of ``candidate`` or ``prompt_feedback`` is normally set.
    Consult ``candidate.safety_ratings`` for details on a blocked candidate.
    """

    code = ErrorCode.BLOCKED

    def __init__(
        self,
        *,
        candidate: Optional["Candidate"] = None,
        prompt_feedback: Optional["PromptFeedback"] = None,
    ) -> None:
        self.candidate = candidate
        self.prompt_feedback = prompt_feedback
        super().__init__(self._describe())

    def _describe(self) -> str:
        pieces = []
        if self.candidate is not None:
            pieces.append(f"candidate: {self.candidate.finish_reason.value}")
        if self.prompt_feedback is not None:
            pieces.append(f"prompt: {self.prompt_feedback.block_reason.value}")
        return "blocked: " + ", ".join(pieces)


__all__ = ["BlockedError"]
