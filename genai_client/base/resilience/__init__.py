"""Retry and backoff primitives."""

from .backoff import (
    DEFAULT_BACKOFF,
    BackoffPolicy,
    ExponentialBackoff,
    NoPauseBackoff,
    PauseOneSecond,
)
from .retry import DEFAULT_RETRY_CONFIG, RetryConfig, default_retry_predicate

__all__ = [
    "BackoffPolicy",
    "ExponentialBackoff",
    "NoPauseBackoff",
    "PauseOneSecond",
    "DEFAULT_BACKOFF",
    "RetryConfig",
    "DEFAULT_RETRY_CONFIG",
    "default_retry_predicate",
]
