"""Run a blocking call so that cancellation returns control promptly.

Blocking ``httpx`` calls cannot be interrupted from another thread. The call
therefore runs on a worker thread while the caller waits on a wake-up event
set by either the worker finishing or the context's token being cancelled;
the context deadline bounds the wait as well.

When the context finishes first the caller gets the cancellation error right
away and the worker is abandoned. Its eventual result is handed to
``on_abandon`` so resources such as an open response can be released.
"""

from __future__ import annotations

import concurrent.futures as cf
import threading
from typing import Any, Callable, Optional, TypeVar

from .call_context import CallContext

T = TypeVar("T")


def _run(future: "cf.Future[Any]", fn: Callable[..., Any], args: tuple) -> None:
    if not future.set_running_or_notify_cancel():
        return
    try:
        result = fn(*args)
    except BaseException as exc:  # noqa: BLE001 - delivered through the future
        future.set_exception(exc)
    else:
        future.set_result(result)


def _abandon(future: "cf.Future[Any]", on_abandon: Optional[Callable[[Any], None]]) -> None:
    if on_abandon is None:
        return

    def _release(done: "cf.Future[Any]") -> None:
        if done.exception() is None:
            on_abandon(done.result())

    future.add_done_callback(_release)


def run_interruptibly(
    ctx: CallContext,
    fn: Callable[..., T],
    *args: Any,
    on_abandon: Optional[Callable[[T], None]] = None,
    name: str = "genai-call",
) -> T:
    """Call ``fn(*args)`` and return its result unless ``ctx`` finishes first.

    Raises:
        CancelledError: ``ctx`` was cancelled while ``fn`` was running
            (``DeadlineExceededError`` when its deadline passed).
        Exception: Whatever ``fn`` raised.
    """
    future: "cf.Future[T]" = cf.Future()
    wake = threading.Event()
    future.add_done_callback(lambda _f: wake.set())
    unregister = ctx.token.on_cancel(wake.set)
    try:
        threading.Thread(target=_run, args=(future, fn, args), name=name, daemon=True).start()
        while not future.done():
            if ctx.done:
                _abandon(future, on_abandon)
                ctx.raise_if_done()
            wake.wait(ctx.remaining())
    finally:
        unregister()
    return future.result()


__all__ = ["run_interruptibly"]
