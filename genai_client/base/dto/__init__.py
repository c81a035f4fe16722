"""Pydantic DTOs used at the wire boundary."""

from .error_payload import (
    ERROR_INFO_TYPE,
    ErrorBodyDTO,
    ErrorDetailDTO,
    ErrorEnvelopeDTO,
    parse_error_payload,
)
from .generation_config import GenerationConfig

__all__ = [
    "ERROR_INFO_TYPE",
    "ErrorBodyDTO",
    "ErrorDetailDTO",
    "ErrorEnvelopeDTO",
    "parse_error_payload",
    "GenerationConfig",
]
