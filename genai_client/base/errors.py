"""Unified client error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``genai_client.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import (
    NonResendableBodyError,
    ProviderError,
    ServiceError,
    UnrecognizedPartKind,
)
from .errors_parts.blocked_error import BlockedError
from .errors_parts.classification import classify_exception, classify_status
from .errors_parts.normalizer import normalize_error

__all__ = [
    "ErrorCode",
    "ProviderError",
    "ServiceError",
    "NonResendableBodyError",
    "UnrecognizedPartKind",
    "BlockedError",
    "classify_exception",
    "classify_status",
    "normalize_error",
]
