"""
Structured client error exception types.

``ProviderError`` wraps transport and service failures with a normalized
`ErrorCode`. ``ServiceError`` extends it with the machine-readable detail the
service attaches to rejections (status, reason, domain, metadata).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a normalized client error.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        status_code: HTTP status of the failing response, when there was one.
        retryable: Whether the retry predicate classified the failure as transient.
        attempts: Number of HTTP attempts made for the logical call.
        exhausted: True when the backoff policy stopped further retries.
        model: Optional model name associated with the failure.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    status_code: Optional[int] = None
    retryable: bool = False
    attempts: int = 1
    exhausted: bool = False
    model: Optional[str] = None
    raw: Optional[BaseException] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        status = f" ({self.status_code})" if self.status_code is not None else ""
        suffix = f" after {self.attempts} attempts" if self.exhausted else ""
        return f"{self.code.value}{status}: {self.message}{suffix}"


@dataclass
class ServiceError(ProviderError):
    """A service rejection carrying the structured error payload.

    Attributes:
        status: Canonical status name from the payload (e.g. ``INVALID_ARGUMENT``).
        reason: Machine-readable reason from the first ``ErrorInfo`` detail.
        domain: Logical error domain from the first ``ErrorInfo`` detail.
        metadata: Additional key/value pairs from the ``ErrorInfo`` detail.
        details: All raw detail records, in payload order.
    """

    status: Optional[str] = None
    reason: Optional[str] = None
    domain: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)
    details: List[Dict[str, Any]] = field(default_factory=list)

    def __str__(self) -> str:  # pragma: no cover - trivial
        base = super().__str__()
        if self.reason:
            return f"{base} [reason={self.reason} domain={self.domain or '-'}]"
        return base


@dataclass
class NonResendableBodyError(ProviderError):
    """Raised when a retryable failure hits a request whose body cannot be replayed."""

    code: ErrorCode = ErrorCode.NON_RESENDABLE
    message: str = "request body is a consumed stream and cannot be re-sent"


@dataclass
class UnrecognizedPartKind(ProviderError):
    """Raised by the wire decoder for a part whose shape matches no known variant."""

    code: ErrorCode = ErrorCode.UNRECOGNIZED_PART
    message: str = "unrecognized part kind"
    keys: List[str] = field(default_factory=list)


__all__ = [
    "ProviderError",
    "ServiceError",
    "NonResendableBodyError",
    "UnrecognizedPartKind",
]
