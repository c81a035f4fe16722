"""Cancellation error types.

Defines ``CancelledError`` for caller-initiated cancellation and
``DeadlineExceededError`` for deadline expiry, which is modeled as a special
case of cancellation.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation observes a cancellation request.

    Distinguishes cooperative cancellation from other runtime failures so the
    dispatcher never retries it and callers can tell "canceled" apart from
    "retries exhausted".
    """


class DeadlineExceededError(CancelledError):
    """Raised when the call context's deadline passes before completion."""


__all__ = ["CancelledError", "DeadlineExceededError"]
