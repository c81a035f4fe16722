"""Backoff policies: map a retry attempt number to a pause or "stop".

Every policy is stateless and pure in the attempt number, so the same policy
object can be shared across concurrent calls and tests can assert exact
schedules. ``attempt`` counts retryable failures seen so far, starting at 0.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from ...config.defaults import (
    BACKOFF_INITIAL_SECONDS,
    BACKOFF_MAX_ATTEMPTS,
    BACKOFF_MAX_SECONDS,
    BACKOFF_MULTIPLIER,
)


class BackoffPolicy(Protocol):  # pragma: no cover - structural protocol
    def pause(self, attempt: int) -> Optional[float]:
        """Return seconds to wait before the next attempt, or ``None`` to stop."""
        ...


@dataclass(frozen=True)
class ExponentialBackoff:
    """Exponential backoff with a bounded delay and a cap on total attempts.

    ``pause(n)`` is ``min(maximum, initial * multiplier ** n)`` while fewer
    than ``max_attempts`` attempts have been made; ``None`` afterwards.
    ``max_attempts=None`` retries forever.
    """

    initial: float = BACKOFF_INITIAL_SECONDS
    maximum: float = BACKOFF_MAX_SECONDS
    multiplier: float = BACKOFF_MULTIPLIER
    max_attempts: Optional[int] = BACKOFF_MAX_ATTEMPTS

    def __post_init__(self) -> None:
        if self.initial < 0 or self.maximum < 0:
            raise ValueError("backoff delays must be non-negative")
        if self.multiplier < 1:
            raise ValueError("backoff multiplier must be >= 1")
        if self.max_attempts is not None and self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")

    def pause(self, attempt: int) -> Optional[float]:
        if self.max_attempts is not None and attempt + 1 >= self.max_attempts:
            return None
        return min(self.maximum, self.initial * self.multiplier**attempt)


@dataclass(frozen=True)
class NoPauseBackoff:
    """Retry forever without waiting."""

    def pause(self, attempt: int) -> Optional[float]:
        return 0.0


@dataclass(frozen=True)
class PauseOneSecond:
    """Retry forever, waiting one second between attempts."""

    def pause(self, attempt: int) -> Optional[float]:
        return 1.0


DEFAULT_BACKOFF = ExponentialBackoff()


__all__ = [
    "BackoffPolicy",
    "ExponentialBackoff",
    "NoPauseBackoff",
    "PauseOneSecond",
    "DEFAULT_BACKOFF",
]
