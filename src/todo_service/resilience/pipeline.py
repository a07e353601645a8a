"""Resilience – ResiliencePipeline: retry (outer) around circuit breaker (inner).

Every attempt made by the retry policy is one call through the breaker, so
the breaker records each attempt exactly once.  An open circuit raises
:class:`CircuitOpenError`, which the retry classifier treats as
non-retryable: the call fails immediately instead of sleeping through a
backoff sequence of rejected attempts.
"""
from __future__ import annotations

from typing import Awaitable, Callable, TypeVar

from todo_service.resilience.circuit_breaker import CircuitBreaker
from todo_service.resilience.retry import RetryPolicy

T = TypeVar("T")


class ResiliencePipeline:
    def __init__(self, breaker: CircuitBreaker, retry: RetryPolicy) -> None:
        self.breaker = breaker
        self.retry = retry

    async def execute(self, func: Callable[[], Awaitable[T]]) -> T:
        return await self.retry.execute_async(lambda: self.breaker.call(func))


__all__ = ["ResiliencePipeline"]
