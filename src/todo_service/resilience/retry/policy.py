"""Resilience – RetryPolicy backed by ``tenacity``.

Retries transient failures (see :mod:`.classify`) with exponential backoff
plus additive jitter::

    delay(attempt) = base_delay * 2**attempt + uniform(0, 1)    # seconds, attempt 0-based

Example::

    policy = RetryPolicy(max_attempts=3, base_delay=1.0)
    rows = await policy.execute_async(lambda: database.execute(stmt))
"""
from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, TypeVar

import tenacity

from todo_service.observability.logging import get_logger
from todo_service.resilience.retry.backoff import BackoffStrategy, ExponentialBackoff
from todo_service.resilience.retry.classify import is_retryable
from todo_service.resilience.retry.jitter import AdditiveJitter, JitterStrategy

T = TypeVar("T")
logger = get_logger(__name__)

Sleep = Callable[[float], Awaitable[Any]]


class RetryPolicy:
    """Bounded retry with exponential backoff and jitter.

    Parameters
    ----------
    max_attempts:
        Total number of attempts including the first one.  Values below 1
        still run the operation exactly once.
    base_delay:
        Seconds; first retry waits ``base_delay`` plus jitter.  Ignored when
        *backoff* is given.
    backoff / jitter:
        Strategy overrides; defaults are :class:`ExponentialBackoff` and
        :class:`AdditiveJitter` (``[0, 1)`` s).
    retryable:
        Predicate deciding whether an exception is worth another attempt.
    sleep:
        Awaitable used between attempts (injected by tests).
    """

    def __init__(
        self,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        backoff: BackoffStrategy | None = None,
        jitter: JitterStrategy | None = None,
        retryable: Callable[[BaseException], bool] = is_retryable,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.max_attempts = max(1, max_attempts)
        self.backoff = backoff or ExponentialBackoff(base_delay)
        self.jitter = jitter or AdditiveJitter()
        self.retryable = retryable
        self._sleep = sleep

    def compute_delay(self, attempt: int) -> float:
        """Delay in seconds after the failed *attempt* (0-based); never negative."""
        return max(0.0, self.jitter.apply(self.backoff.compute(attempt)))

    def _wait(self, retry_state: tenacity.RetryCallState) -> float:
        return self.compute_delay(retry_state.attempt_number - 1)

    def _before_sleep(self, retry_state: tenacity.RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            "retry.attempt",
            attempt=retry_state.attempt_number,
            max_attempts=self.max_attempts,
            delay=retry_state.upcoming_sleep,
            error=str(exc),
            error_type=type(exc).__name__,
        )

    def _build_async_retrying(self) -> tenacity.AsyncRetrying:
        return tenacity.AsyncRetrying(
            stop=tenacity.stop_after_attempt(self.max_attempts),
            wait=self._wait,
            retry=tenacity.retry_if_exception(self.retryable),
            before_sleep=self._before_sleep,
            sleep=self._sleep,
            reraise=True,
        )

    async def execute_async(self, func: Callable[[], Awaitable[T]]) -> T:
        """Execute *func* with retry; the last failure propagates unchanged."""
        async for attempt in self._build_async_retrying():
            with attempt:
                result = await func()
        return result  # type: ignore[return-value]


__all__ = ["RetryPolicy", "Sleep"]
