"""Resilience – retry, circuit breaker and their composition."""

from todo_service.resilience.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerPolicy,
    CircuitBreakerState,
    CircuitOpenError,
)
from todo_service.resilience.pipeline import ResiliencePipeline
from todo_service.resilience.retry import RetryPolicy, is_retryable

__all__ = [
    "CircuitBreaker",
    "CircuitBreakerPolicy",
    "CircuitBreakerState",
    "CircuitOpenError",
    "ResiliencePipeline",
    "RetryPolicy",
    "is_retryable",
]
