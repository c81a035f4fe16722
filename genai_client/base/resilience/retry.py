from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol

import httpx

from ..errors import ProviderError
from .backoff import DEFAULT_BACKOFF, BackoffPolicy

RetryPredicate = Callable[[Optional[httpx.Response], Optional[BaseException]], bool]


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(
        self,
        *,
        attempt: int,
        delay: float | None,
        error: BaseException | None,
        status_code: int | None,
    ) -> None: ...


# Transport failures that happened before (or while) a response arrived and
# are worth another attempt.
_RETRYABLE_TRANSPORT_ERRORS = (
    httpx.ConnectError,
    httpx.ReadError,
    httpx.WriteError,
    httpx.RemoteProtocolError,
    httpx.ConnectTimeout,
    httpx.ReadTimeout,
    httpx.WriteTimeout,
    httpx.PoolTimeout,
    ConnectionResetError,
)


def default_retry_predicate(
    response: Optional[httpx.Response], error: Optional[BaseException]
) -> bool:
    """Return True for 5xx responses and connection-level failures.

    4xx responses and malformed requests are never retried.
    """
    if error is not None:
        if isinstance(error, ProviderError):
            return error.retryable
        return isinstance(error, _RETRYABLE_TRANSPORT_ERRORS)
    if response is not None:
        return 500 <= response.status_code < 600
    return False


@dataclass(frozen=True)
class RetryConfig:
    """Retry behaviour for one logical call.

    Attributes:
        backoff: Policy deciding the pause before each retry (or stop).
        predicate: Classifies a failed attempt as retryable.
        attempt_logger: Optional hook invoked after every failed attempt.
    """

    backoff: BackoffPolicy = DEFAULT_BACKOFF
    predicate: RetryPredicate = default_retry_predicate
    attempt_logger: AttemptLogger | None = None


DEFAULT_RETRY_CONFIG = RetryConfig()


__all__ = [
    "RetryConfig",
    "RetryPredicate",
    "AttemptLogger",
    "DEFAULT_RETRY_CONFIG",
    "default_retry_predicate",
]
