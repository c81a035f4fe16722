"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose stable cancellation constructs via the canonical
``genai_client.base.cancellation`` import path while the concrete
implementations live under ``cancellation_parts``.

Notes
-----
- ``CancellationToken`` enables cooperative cancellation signalling across
  retries, backoff sleeps and streaming.
- ``CallContext`` carries a token, an optional deadline and caller headers
  for a logical call.
- ``run_interruptibly`` runs a blocking call (an HTTP attempt, a stream
  read) so that cancelling its context returns control immediately.
- ``CancelledError`` is raised by operations that observe a cancellation
  request; ``DeadlineExceededError`` when the deadline elapses.
"""

from .cancellation_parts.cancelled_error import CancelledError, DeadlineExceededError
from .cancellation_parts.cancellation_token import CancellationToken
from .cancellation_parts.call_context import CallContext
from .cancellation_parts.interruptible import run_interruptibly

__all__ = [
    "CancellationToken",
    "CancelledError",
    "DeadlineExceededError",
    "CallContext",
    "run_interruptibly",
]
