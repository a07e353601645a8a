"""Resilience – retry with exponential backoff and jitter."""
from todo_service.resilience.retry.backoff import BackoffStrategy, ExponentialBackoff
from todo_service.resilience.retry.classify import RETRYABLE_KINDS, failure_kind, is_retryable
from todo_service.resilience.retry.jitter import AdditiveJitter, JitterStrategy, NoJitter
from todo_service.resilience.retry.policy import RetryPolicy

__all__ = [
    "AdditiveJitter", "BackoffStrategy", "ExponentialBackoff", "JitterStrategy",
    "NoJitter", "RETRYABLE_KINDS", "RetryPolicy", "failure_kind", "is_retryable",
]
