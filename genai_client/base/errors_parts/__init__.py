"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `genai_client.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import (
    NonResendableBodyError,
    ProviderError,
    ServiceError,
    UnrecognizedPartKind,
)
from .blocked_error import BlockedError
from .classification import classify_exception, classify_status
from .normalizer import normalize_error

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
