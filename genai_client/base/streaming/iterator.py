"""Pull-based iterator over a streamed generation.

``GenerateContentResponseIterator`` opens its stream lazily on the first
``next()``, returns every partial message to the caller as it arrives and
folds it into a cumulative response that becomes available through
:attr:`merged` once the stream ends cleanly.

State machine::

    idle --next--> open --message--> open
                    |  \\--end------> done    (merged finalized, history appended)
                    \\----error-----> failed  (sticky error, merged discarded)

Errors are sticky: after a failure every further ``next()`` raises the same
error. After a clean end every further ``next()`` raises ``StopIteration``.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Iterator, List, Optional, Protocol

import httpx

from ..cancellation import CallContext, CancelledError, run_interruptibly
from ..errors import normalize_error
from ..log_support import LogContext
from ..logging import get_logger, normalized_log_event
from ..models import Candidate, GenerateContentResponse
from ..serialization import response_from_wire
from .blocking import check_response
from .merge import join_responses
from .sse import iter_sse_messages
from .streaming_metrics import StreamMetrics, apply_usage, metrics_fields

StreamOpener = Callable[[CallContext], httpx.Response]

_END: Dict[str, Any] = {}


class HistorySink(Protocol):  # pragma: no cover - structural protocol
    def add_to_history(self, candidates: List[Candidate]) -> None: ...


class GenerateContentResponseIterator:
    """Iterator over the partial responses of one streamed generation.

    Parameters:
        opener: Callable that performs the streamed dispatch for a context
            and returns the open response.
        ctx: Call context observed before and after every message.
        history: Optional conversation receiving the final candidates,
            exactly once, when the stream ends cleanly.
        keep_partial: Keep the cumulative response after a failure instead
            of discarding it.
        log_ctx: Structured logging context for stream events.

    Not thread-safe: one consumer drives the iterator.
    """

    def __init__(
        self,
        opener: StreamOpener,
        ctx: Optional[CallContext] = None,
        *,
        history: Optional[HistorySink] = None,
        keep_partial: bool = False,
        log_ctx: Optional[LogContext] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._opener = opener
        self._ctx = ctx or CallContext.background()
        self._history = history
        self._keep_partial = keep_partial
        self._log_ctx = log_ctx or LogContext()
        self._logger = logger or get_logger("stream")
        self._response: Optional[httpx.Response] = None
        self._messages: Optional[Iterator[dict]] = None
        self._merged: Optional[GenerateContentResponse] = None
        self._err: Optional[BaseException] = None
        self._done = False
        self._start: Optional[float] = None
        self.metrics = StreamMetrics()

    def __iter__(self) -> "GenerateContentResponseIterator":
        return self

    def __next__(self) -> GenerateContentResponse:
        if self._err is not None:
            raise self._err
        if self._done:
            raise StopIteration
        try:
            partial = self._step()
        except StopIteration:
            self._finish()
            raise
        except Exception as exc:
            self._fail(exc)
            raise
        return partial

    @property
    def merged(self) -> Optional[GenerateContentResponse]:
        """The cumulative response.

        ``None`` until the stream ends cleanly. After a failure it is ``None``
        unless the iterator was created with ``keep_partial=True``.
        """
        if self._done or (self._err is not None and self._keep_partial):
            return self._merged
        return None

    @property
    def error(self) -> Optional[BaseException]:
        return self._err

    def close(self) -> None:
        """Abandon the stream; later ``next()`` calls raise ``CancelledError``."""
        if self._done or self._err is not None:
            self._release()
            return
        self._fail(CancelledError("stream closed by caller"))

    def __enter__(self) -> "GenerateContentResponseIterator":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # Internals ------------------------------------------------------------
    def _open(self) -> None:
        self._start = time.monotonic()
        normalized_log_event(
            self._logger,
            "stream.start",
            self._log_ctx,
            phase="start",
            attempt=None,
            emitted=False,
            tokens=None,
            level=logging.DEBUG,
        )
        self._response = self._opener(self._ctx)
        self._messages = iter_sse_messages(self._response.iter_lines())

    def _step(self) -> GenerateContentResponse:
        self._ctx.raise_if_done()
        if self._messages is None:
            self._open()
        response = self._response
        try:
            data = run_interruptibly(
                self._ctx,
                next,
                self._messages,
                _END,
                on_abandon=lambda _data: response.close(),
                name="genai-stream-read",
            )
        except CancelledError:
            # The abandoned read still owns the response and closes it on return.
            self._response = None
            self._messages = None
            raise
        except httpx.TransportError as exc:
            self._ctx.raise_if_done()
            raise normalize_error(None, exc) from exc
        self._ctx.raise_if_done()
        if data is _END:
            raise StopIteration

        partial = check_response(response_from_wire(data))
        self._merged = join_responses(self._merged, partial)
        if self.metrics.emitted == 0:
            self.metrics.time_to_first_message_ms = self._elapsed_ms()
        elif partial.prompt_feedback is not None:
            normalized_log_event(
                self._logger,
                "stream.prompt_feedback_ignored",
                self._log_ctx,
                phase="stream",
                attempt=None,
                emitted=True,
                tokens=None,
                level=logging.DEBUG,
                message_index=self.metrics.emitted,
            )
        self.metrics.emitted += 1
        apply_usage(self.metrics, partial.usage_metadata)
        return partial

    def _finish(self) -> None:
        self._done = True
        self._release()
        self.metrics.total_duration_ms = self._elapsed_ms()
        normalized_log_event(
            self._logger,
            "stream.end",
            self._log_ctx,
            phase="finalize",
            attempt=None,
            emitted=self.metrics.emitted > 0,
            tokens=self.metrics.tokens,
            **metrics_fields(self.metrics),
        )
        if self._history is not None and self._merged is not None:
            self._history.add_to_history(self._merged.candidates)

    def _fail(self, exc: BaseException) -> None:
        self._err = exc
        self._release()
        if not self._keep_partial:
            self._merged = None
        self.metrics.total_duration_ms = self._elapsed_ms()
        cancelled = isinstance(exc, CancelledError)
        code = getattr(exc, "code", None)
        normalized_log_event(
            self._logger,
            "stream.cancelled" if cancelled else "stream.error",
            self._log_ctx,
            phase="finalize",
            attempt=None,
            error_code=getattr(code, "value", None),
            emitted=self.metrics.emitted > 0,
            tokens=self.metrics.tokens,
            level=logging.INFO if cancelled else logging.WARNING,
            error=str(exc),
            **metrics_fields(self.metrics),
        )

    def _release(self) -> None:
        if self._response is not None:
            self._response.close()
            self._response = None
        self._messages = None

    def _elapsed_ms(self) -> Optional[float]:
        if self._start is None:
            return None
        return round((time.monotonic() - self._start) * 1000.0, 2)


__all__ = ["GenerateContentResponseIterator", "HistorySink", "StreamOpener"]
