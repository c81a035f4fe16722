"""Internal state holder for cancellation tokens."""

from __future__ import annotations

from dataclasses import dataclass, field
from threading import Event
from typing import Optional


@dataclass
class State:
    """Internal state for cooperative cancellation tokens.

    ``event`` is set exactly when ``cancelled`` becomes True so waiters can
    block on it instead of polling.
    """

    cancelled: bool = False
    reason: Optional[str] = None
    event: Event = field(default_factory=Event)
