"""Event-backed cancellation token.

Call contexts hold one token each. Cancelling it wakes every thread blocked in
:meth:`CancellationToken.wait` (backoff sleeps), runs the callbacks registered
with :meth:`CancellationToken.on_cancel` (in-flight attempts and stream reads)
and is observed by the dispatcher and the streaming iterator at their next
check.
"""

from __future__ import annotations

import weakref
from threading import Lock
from typing import Callable, Dict, Optional

from .state import State
from .cancelled_error import CancelledError


class CancellationToken:
    """Cancellation signal shared by a call context and contexts derived from it.

    ``cancel`` may be called from any thread. Cancellation flows down to
    tokens created with :meth:`child` (or ``parent=``), never up. Children are
    held weakly, so a long-lived parent does not keep derived tokens alive.
    """

    def __init__(self, *, parent: Optional["CancellationToken"] = None) -> None:
        self._state = State()
        self._lock = Lock()
        self._children: "weakref.WeakSet[CancellationToken]" = weakref.WeakSet()
        self._callbacks: Dict[int, Callable[[], None]] = {}
        self._next_callback_id = 0
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:
        return self._state.cancelled

    @property
    def reason(self) -> Optional[str]:
        return self._state.reason

    def cancel(self, reason: Optional[str] = None) -> None:
        """Mark the token cancelled, wake waiters, run callbacks, then cancel children.

        Only the first call has an effect; its ``reason`` is kept.
        """
        with self._lock:
            if self._state.cancelled:
                return
            self._state.reason = reason
            self._state.cancelled = True
            self._state.event.set()
            callbacks = list(self._callbacks.values())
            self._callbacks.clear()
            children = list(self._children)
            self._children.clear()
        for fn in callbacks:
            fn()
        for token in children:
            token.cancel(reason)

    def on_cancel(self, fn: Callable[[], None]) -> Callable[[], None]:
        """Run ``fn`` once when the token is cancelled; return an unregister function.

        ``fn`` runs immediately (in the caller's thread) when the token is
        already cancelled. Callers must unregister once they no longer care,
        otherwise the callback lives as long as the token.
        """
        with self._lock:
            if not self._state.cancelled:
                key = self._next_callback_id
                self._next_callback_id += 1
                self._callbacks[key] = fn

                def unregister() -> None:
                    with self._lock:
                        self._callbacks.pop(key, None)

                return unregister
        fn()
        return lambda: None

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Make ``token`` follow this one; it is cancelled at once if this one already is."""
        with self._lock:
            inherited = self._state.cancelled
            if not inherited:
                self._children.add(token)
        if inherited:
            token.cancel(self._state.reason)
        return token

    def child(self) -> "CancellationToken":
        return CancellationToken(parent=self)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block up to ``timeout`` seconds; return True once cancelled."""
        return self._state.event.wait(timeout)

    def raise_if_cancelled(self) -> None:
        if self._state.cancelled:
            raise CancelledError(self._state.reason or "operation cancelled")

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self._state.cancelled}, reason={self._state.reason!r})"


__all__ = ["CancellationToken"]
