"""
Client infrastructure package

Service-agnostic building blocks used by the ``gemini`` client surface:

- Errors: normalized error taxonomy and the error normalizer
- Cancellation: tokens and per-call contexts (deadline, headers)
- Resilience: backoff policies and retry configuration
- HTTP: pooled clients, header contract and the resilient dispatcher
- Streaming: SSE framing, merge rules and the response iterator
- Models: dataclass DTOs and the wire codec
"""

from .cancellation import CallContext, CancellationToken, CancelledError, DeadlineExceededError
from .errors import (
    BlockedError,
    ErrorCode,
    NonResendableBodyError,
    ProviderError,
    ServiceError,
    UnrecognizedPartKind,
    normalize_error,
)
from .http import ClientInfo, Dispatcher, close_all_clients, get_httpx_client
from .resilience import (
    BackoffPolicy,
    ExponentialBackoff,
    NoPauseBackoff,
    PauseOneSecond,
    RetryConfig,
)
from .streaming import GenerateContentResponseIterator, StreamMetrics, join_responses, merge_texts
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    # Cancellation
    "CallContext",
    "CancellationToken",
    "CancelledError",
    "DeadlineExceededError",
    # Errors
    "ErrorCode",
    "ProviderError",
    "ServiceError",
    "NonResendableBodyError",
    "UnrecognizedPartKind",
    "BlockedError",
    "normalize_error",
    # HTTP
    "ClientInfo",
    "Dispatcher",
    "get_httpx_client",
    "close_all_clients",
    # Resilience
    "BackoffPolicy",
    "ExponentialBackoff",
    "NoPauseBackoff",
    "PauseOneSecond",
    "RetryConfig",
    # Streaming
    "GenerateContentResponseIterator",
    "StreamMetrics",
    "join_responses",
    "merge_texts",
    # Timeouts
    "TimeoutConfig",
    "get_timeout_config",
]
