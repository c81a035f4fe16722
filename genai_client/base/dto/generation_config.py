"""
Pydantic DTO for generation parameters.

Purpose
-------
Validate sampling/generation parameters at assignment time so out-of-range
values are rejected before a request is built. Serialization uses the
service's camelCase field names and omits unset values.

Failure Modes
-------------
Raises ``pydantic.ValidationError`` on invalid values.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class GenerationConfig(BaseModel):
    """Configuration options for model generation and outputs.

    Attributes:
        candidate_count: Number of candidates to return.
        stop_sequences: Up to five sequences that stop generation.
        max_output_tokens: Upper bound on generated tokens per candidate.
        temperature: Sampling temperature in ``[0.0, 2.0]``.
        top_p: Nucleus sampling probability mass in ``[0.0, 1.0]``.
        top_k: Top-k sampling cutoff.
        response_mime_type: Output MIME type such as ``application/json``.
        response_schema: Optional output schema when JSON output is requested.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
        extra="forbid",
    )

    candidate_count: Optional[int] = Field(default=None, ge=1)
    stop_sequences: Optional[List[str]] = None
    max_output_tokens: Optional[int] = Field(default=None, ge=1)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    top_k: Optional[int] = Field(default=None, ge=1)
    response_mime_type: Optional[str] = None
    response_schema: Optional[Dict[str, Any]] = None

    @field_validator("stop_sequences")
    @classmethod
    def _limit_stop_sequences(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is not None and len(value) > 5:
            raise ValueError("at most 5 stop sequences are allowed")
        return value

    def to_wire(self) -> Optional[Dict[str, Any]]:
        """Return the camelCase request mapping, or ``None`` when nothing is set."""
        data = self.model_dump(by_alias=True, exclude_none=True)
        return data or None


__all__ = ["GenerationConfig"]
