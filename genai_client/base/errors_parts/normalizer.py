"""
Error normalizer: turn a failed HTTP attempt into one typed client error.

A failed attempt is either a completed non-2xx ``httpx.Response`` or a
transport exception raised before a response arrived. Responses whose body
carries the service's structured error envelope become :class:`ServiceError`
with reason/domain detail preserved; everything else becomes a generic
:class:`ProviderError` wrapping the original. Cancellation errors and already
normalized errors pass through untouched.
"""
from __future__ import annotations

from typing import Optional

import httpx

from ..cancellation_parts.cancelled_error import CancelledError
from ..dto.error_payload import parse_error_payload
from .classification import classify_exception, classify_status
from .error_code import ErrorCode
from .provider_error import ProviderError, ServiceError


def _from_response(response: httpx.Response, **common) -> ProviderError:
    status = response.status_code
    code = classify_status(status)
    try:
        body = response.content
    except httpx.ResponseNotRead:
        body = b""
    payload = parse_error_payload(body)
    if payload is None:
        raw = httpx.HTTPStatusError(
            f"HTTP {status} {response.reason_phrase}".strip(),
            request=response.request,
            response=response,
        )
        return ProviderError(
            code=code,
            message=f"HTTP {status} {response.reason_phrase}".strip(),
            status_code=status,
            raw=raw,
            **common,
        )
    info = payload.error_info()
    return ServiceError(
        code=code,
        message=payload.message or f"HTTP {status}",
        status_code=status,
        status=payload.status,
        reason=info.reason if info else None,
        domain=info.domain if info else None,
        metadata=dict(info.metadata) if info else {},
        details=[d.model_dump(by_alias=True) for d in payload.details],
        **common,
    )


def normalize_error(
    response: Optional[httpx.Response],
    error: Optional[BaseException],
    *,
    attempts: int = 1,
    retryable: bool = False,
    exhausted: bool = False,
    model: Optional[str] = None,
) -> BaseException:
    """Return the normalized error for a failed attempt.

    Parameters:
        response: The non-2xx response, if the attempt produced one. Its body
            must already be read.
        error: The transport exception, if the attempt raised instead.
        attempts: Total attempts made so far for the logical call.
        retryable: Whether the retry predicate considered the failure transient.
        exhausted: Whether the backoff policy stopped retrying.
        model: Optional model name for diagnostics.

    Returns:
        The error to raise. ``CancelledError`` (including deadline expiry) is
        returned unchanged; existing ``ProviderError`` values are annotated
        with attempt bookkeeping but otherwise kept.
    """
    if isinstance(error, CancelledError):
        return error
    common = {
        "attempts": attempts,
        "retryable": retryable,
        "exhausted": exhausted,
        "model": model,
    }
    if isinstance(error, ProviderError):
        error.attempts = attempts
        error.exhausted = exhausted
        return error
    if response is not None:
        return _from_response(response, **common)
    if error is None:
        return ProviderError(code=ErrorCode.INTERNAL, message="attempt failed without a response or error", **common)
    return ProviderError(code=classify_exception(error), message=str(error) or type(error).__name__, raw=error, **common)


__all__ = ["normalize_error"]
