"""
Pydantic DTOs for the service's JSON error envelope.

Purpose
-------
Validate the ``{"error": {...}}`` body returned with non-2xx responses so the
error normalizer can lift machine-readable detail (status, reason, domain,
metadata) into a :class:`ServiceError` without ad-hoc dictionary probing.

Shape (Google JSON error format v2)::

    {"error": {"code": 400, "message": "...", "status": "INVALID_ARGUMENT",
               "details": [{"@type": "type.googleapis.com/google.rpc.ErrorInfo",
                            "reason": "...", "domain": "...", "metadata": {...}}]}}

Validation failures are not raised to callers; ``parse_error_payload`` returns
``None`` so the normalizer falls back to a generic error.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

ERROR_INFO_TYPE = "type.googleapis.com/google.rpc.ErrorInfo"


class ErrorDetailDTO(BaseModel):
    """One entry of ``error.details``; unknown keys are retained."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type_url: str = Field(default="", alias="@type")
    reason: Optional[str] = None
    domain: Optional[str] = None
    metadata: Dict[str, str] = Field(default_factory=dict)

    def is_error_info(self) -> bool:
        return self.type_url == ERROR_INFO_TYPE


class ErrorBodyDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    code: Optional[int] = None
    message: str = ""
    status: Optional[str] = None
    details: List[ErrorDetailDTO] = Field(default_factory=list)

    def error_info(self) -> Optional[ErrorDetailDTO]:
        """Return the first ``ErrorInfo`` detail, if the service supplied one."""
        return next((d for d in self.details if d.is_error_info()), None)


class ErrorEnvelopeDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    error: ErrorBodyDTO


def parse_error_payload(body: bytes | str | None) -> Optional[ErrorBodyDTO]:
    """Parse a response body into :class:`ErrorBodyDTO` or return ``None``."""
    if not body:
        return None
    try:
        data: Any = json.loads(body)
    except (ValueError, UnicodeDecodeError):
        return None
    # Streamed error bodies arrive wrapped in a one-element JSON array.
    if isinstance(data, list) and len(data) == 1:
        data = data[0]
    if not isinstance(data, dict):
        return None
    try:
        return ErrorEnvelopeDTO.model_validate(data).error
    except ValidationError:
        return None


__all__ = [
    "ERROR_INFO_TYPE",
    "ErrorDetailDTO",
    "ErrorBodyDTO",
    "ErrorEnvelopeDTO",
    "parse_error_payload",
]
