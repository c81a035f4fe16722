"""Resilient request dispatcher.

``Dispatcher.send`` performs one logical call: it installs the call headers,
then sends the request, retrying transient failures under the configured
backoff policy until the call succeeds, the policy gives up, or the call
context is cancelled or its deadline passes.

Cancellation is observed before every attempt, while an attempt waits for
the server, and during every backoff pause. Each attempt runs through
:func:`run_interruptibly`, so cancelling the context returns control at once;
the abandoned attempt's response is closed when it eventually arrives. Each
attempt's timeout is also clamped to the time remaining before the deadline.
"""
from __future__ import annotations

import logging
import time
from typing import Optional, Tuple

import httpx

from ..cancellation import CallContext, run_interruptibly
from ..errors import NonResendableBodyError, normalize_error
from ..log_support import LogContext
from ..logging import get_logger, normalized_log_event
from ..resilience.retry import DEFAULT_RETRY_CONFIG, RetryConfig
from ..timeouts import TimeoutConfig, get_timeout_config
from .headers import (
    ClientInfo,
    apply_call_headers,
    check_encoding_directives,
    is_replayable,
    new_idempotency_token,
)


_Outcome = Tuple[Optional[httpx.Response], Optional[BaseException]]


def _close_outcome(outcome: _Outcome) -> None:
    response, _ = outcome
    if response is not None:
        response.close()


class Dispatcher:
    """Sends requests through a shared ``httpx.Client`` with retry semantics.

    The dispatcher holds no per-call state, so one instance can serve many
    concurrent calls from different threads.
    """

    def __init__(
        self,
        client: httpx.Client,
        *,
        client_info: Optional[ClientInfo] = None,
        retry: RetryConfig = DEFAULT_RETRY_CONFIG,
        timeouts: Optional[TimeoutConfig] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._client = client
        self._client_info = client_info or ClientInfo()
        self._retry = retry
        self._timeouts = timeouts
        self._logger = logger or get_logger("http")

    @property
    def client_info(self) -> ClientInfo:
        return self._client_info

    def send(
        self,
        ctx: Optional[CallContext],
        request: httpx.Request,
        *,
        retry: Optional[RetryConfig] = None,
        stream: bool = False,
        log_ctx: Optional[LogContext] = None,
    ) -> httpx.Response:
        """Send ``request`` and return the first successful response.

        Parameters:
            ctx: Call context supplying cancellation, deadline and extra
                headers. ``None`` means a fresh background context.
            request: The request to send. Its headers are updated in place.
            retry: Per-call override of the dispatcher's retry configuration.
            stream: When True the successful response is returned open with
                its body unread; the caller must close it. Otherwise the body
                is read and the connection released before returning.
            log_ctx: Optional structured logging context for emitted events.

        Raises:
            CancelledError: The context was cancelled (``DeadlineExceededError``
                when its deadline passed). Raised without any attempt when
                the context is already done on entry.
            ProviderError: The call failed; ``ServiceError`` when the service
                returned a structured error payload, ``NonResendableBodyError``
                when a retry was needed but the body cannot be replayed.
        """
        ctx = ctx or CallContext.background()
        cfg = retry or self._retry
        timeouts = self._timeouts or get_timeout_config()

        check_encoding_directives(request)
        token = new_idempotency_token()
        apply_call_headers(
            request,
            client_info=self._client_info,
            idempotency_token=token,
            context_headers=ctx.headers,
        )
        replayable = is_replayable(request)
        lctx = log_ctx or LogContext(method=request.method, path=request.url.path)
        if lctx.request_id is None:
            lctx.request_id = token

        start = time.monotonic()
        attempt = 0
        while True:
            ctx.raise_if_done()
            attempts = attempt + 1
            request.extensions["timeout"] = timeouts.httpx_timeout(
                stream=stream, remaining=ctx.remaining()
            ).as_dict()
            normalized_log_event(
                self._logger,
                "dispatch.attempt",
                lctx,
                phase="start",
                attempt=attempts,
                emitted=False,
                tokens=None,
                level=logging.DEBUG,
                remaining_s=ctx.remaining(),
            )
            response, error = run_interruptibly(
                ctx,
                lambda: self._attempt(request, stream=stream),
                on_abandon=_close_outcome,
                name="genai-dispatch",
            )

            if ctx.done:
                if response is not None:
                    response.close()
                ctx.raise_if_done()

            if response is not None and response.is_success:
                normalized_log_event(
                    self._logger,
                    "dispatch.end",
                    lctx,
                    phase="finalize",
                    attempt=attempts,
                    emitted=True,
                    tokens=None,
                    level=logging.DEBUG,
                    status_code=response.status_code,
                    duration_ms=round((time.monotonic() - start) * 1000.0, 2),
                )
                return response

            status_code = response.status_code if response is not None else None
            retryable = cfg.predicate(response, error)
            if not retryable:
                err = normalize_error(response, error, attempts=attempts)
                self._log_failure(lctx, err, attempts, status_code)
                raise err
            if not replayable:
                cause = normalize_error(response, error, attempts=attempts, retryable=True)
                err = NonResendableBodyError(status_code=status_code, attempts=attempts, retryable=True, raw=cause)
                self._log_failure(lctx, err, attempts, status_code)
                raise err

            delay = cfg.backoff.pause(attempt)
            if cfg.attempt_logger is not None:
                cfg.attempt_logger(attempt=attempts, delay=delay, error=error, status_code=status_code)
            if delay is None:
                err = normalize_error(response, error, attempts=attempts, retryable=True, exhausted=True)
                self._log_failure(lctx, err, attempts, status_code)
                raise err

            normalized_log_event(
                self._logger,
                "dispatch.retry",
                lctx,
                phase="retry",
                attempt=attempts,
                emitted=False,
                tokens=None,
                level=logging.INFO,
                status_code=status_code,
                error=type(error).__name__ if error is not None else None,
                delay_s=delay,
            )
            ctx.sleep(delay)
            attempt += 1

    def _attempt(self, request: httpx.Request, *, stream: bool) -> _Outcome:
        """Run one HTTP attempt; return ``(response, None)`` or ``(None, error)``.

        Failed responses are always read and closed so their body is available
        to the error normalizer. Successful streaming responses stay open.
        """
        try:
            response = self._client.send(request, stream=True)
        except httpx.TransportError as exc:
            return None, exc
        if stream and response.is_success:
            return response, None
        try:
            response.read()
        except httpx.TransportError as exc:
            return None, exc
        finally:
            response.close()
        return response, None

    def _log_failure(
        self,
        lctx: LogContext,
        err: BaseException,
        attempts: int,
        status_code: Optional[int],
    ) -> None:
        code = getattr(err, "code", None)
        normalized_log_event(
            self._logger,
            "dispatch.error",
            lctx,
            phase="finalize",
            attempt=attempts,
            error_code=getattr(code, "value", None),
            emitted=False,
            tokens=None,
            level=logging.WARNING,
            status_code=status_code,
            exhausted=getattr(err, "exhausted", None),
        )


__all__ = ["Dispatcher"]
