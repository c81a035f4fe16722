"""
Normalized client error codes (taxonomy).

Defines the `ErrorCode` enumeration used by the dispatcher, the error
normalizer and the streaming aggregator. Values are lowercase snake_case and
are considered a stable public contract for logging and caller branching.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    DEADLINE_EXCEEDED = "deadline_exceeded"
    TRANSIENT = "transient"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    INTERNAL = "internal"
    UNAVAILABLE = "unavailable"
    BLOCKED = "blocked"
    NON_RESENDABLE = "non_resendable"
    UNRECOGNIZED_PART = "unrecognized_part"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
