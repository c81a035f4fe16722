"""Per-call context: cancellation, deadline and caller-supplied headers.

A ``CallContext`` is what the dispatcher and the streaming iterator consult at
every suspension point. It bundles:

* a :class:`CancellationToken` (explicit cancellation),
* an optional absolute deadline on the ``time.monotonic`` clock,
* a read-only mapping of extra request headers supplied by the caller.

Contexts are immutable; ``with_timeout`` and ``with_headers`` derive new ones.
A derived context uses a child token, so cancelling the parent cancels the
child but not the reverse.
"""

from __future__ import annotations

import time
from types import MappingProxyType
from typing import Mapping, Optional

from .cancellation_token import CancellationToken
from .cancelled_error import CancelledError, DeadlineExceededError


class CallContext:
    """Cancellation scope for one or more logical calls."""

    def __init__(
        self,
        *,
        token: Optional[CancellationToken] = None,
        deadline: Optional[float] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._token = token or CancellationToken()
        self._deadline = deadline
        self._headers = MappingProxyType(dict(headers or {}))

    @classmethod
    def background(cls) -> "CallContext":
        """Return a fresh context that is never cancelled unless asked to."""
        return cls()

    # Derivation -----------------------------------------------------------
    def with_timeout(self, seconds: float) -> "CallContext":
        """Derive a context whose deadline is at most ``seconds`` from now."""
        deadline = time.monotonic() + max(0.0, seconds)
        if self._deadline is not None:
            deadline = min(deadline, self._deadline)
        return CallContext(token=self._token.child(), deadline=deadline, headers=self._headers)

    def with_headers(self, headers: Mapping[str, str]) -> "CallContext":
        """Derive a context carrying ``headers`` in addition to existing ones."""
        merged = dict(self._headers)
        merged.update(headers)
        return CallContext(token=self._token.child(), deadline=self._deadline, headers=merged)

    # State ----------------------------------------------------------------
    @property
    def token(self) -> CancellationToken:
        return self._token

    @property
    def headers(self) -> Mapping[str, str]:
        return self._headers

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    def cancel(self, reason: str | None = None) -> None:
        self._token.cancel(reason)

    def remaining(self) -> Optional[float]:
        """Seconds until the deadline (never negative), or ``None`` if unbounded."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    @property
    def done(self) -> bool:
        return self._token.cancelled or self.remaining() == 0.0

    def raise_if_done(self) -> None:
        """Raise ``CancelledError`` or ``DeadlineExceededError`` when done.

        Explicit cancellation takes precedence over an elapsed deadline.
        """
        self._token.raise_if_cancelled()
        if self._deadline is not None and time.monotonic() >= self._deadline:
            raise DeadlineExceededError("context deadline exceeded")

    def sleep(self, seconds: float) -> None:
        """Sleep for ``seconds`` unless cancelled or the deadline passes first.

        Raises the corresponding cancellation error as soon as the context is
        done; returns normally only after the full duration elapsed.
        """
        self.raise_if_done()
        if seconds <= 0:
            return
        end = time.monotonic() + seconds
        while (left := end - time.monotonic()) > 0:
            remaining = self.remaining()
            self._token.wait(left if remaining is None else min(left, remaining))
            self.raise_if_done()

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CallContext(token={self._token!r}, remaining={self.remaining()!r}, headers={dict(self._headers)!r})"


__all__ = ["CallContext", "CancelledError", "DeadlineExceededError"]
