"""Blocked-response checks shared by unary and streamed generation."""
from __future__ import annotations

from ..errors import BlockedError
from ..models import FinishReason, GenerateContentResponse


def check_response(response: GenerateContentResponse) -> GenerateContentResponse:
    """Return ``response`` unchanged, or raise :class:`BlockedError`.

    A prompt-level block reason wins over candidate checks. Otherwise the
    first candidate that finished for safety is reported, even when other
    candidates completed normally.
    """
    feedback = response.prompt_feedback
    if feedback is not None and feedback.blocked:
        raise BlockedError(prompt_feedback=feedback)
    for candidate in response.candidates:
        if candidate.finish_reason is FinishReason.SAFETY:
            raise BlockedError(candidate=candidate)
    return response


__all__ = ["check_response"]
