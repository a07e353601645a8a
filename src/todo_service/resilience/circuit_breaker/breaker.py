"""Resilience – CircuitBreaker implementation.

State machine::

    CLOSED ──(error % >= threshold in rolling window)──▶ OPEN
    OPEN ──(reset timeout elapsed)──▶ HALF_OPEN
    HALF_OPEN ──(trial succeeds)──▶ CLOSED   (window reset)
    HALF_OPEN ──(trial fails)──▶ OPEN        (reset timer restarts)
"""
from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable, TypeVar

from todo_service.kernel.errors import InfrastructureTimeoutError
from todo_service.observability.logging import get_logger
from todo_service.resilience.circuit_breaker.errors import CircuitOpenError
from todo_service.resilience.circuit_breaker.policy import CircuitBreakerPolicy
from todo_service.resilience.circuit_breaker.state import CircuitBreakerState
from todo_service.resilience.circuit_breaker.window import RollingWindow, WindowStats

T = TypeVar("T")
logger = get_logger(__name__)


class CircuitBreaker:
    """asyncio-safe circuit breaker guarding one named dependency.

    One instance is shared by every concurrent call to the dependency; the
    rolling window and the phase are only mutated while holding ``_lock``.
    Each call made through :meth:`call` is bounded by
    ``policy.timeout_seconds`` and its outcome is recorded exactly once.
    """

    def __init__(
        self,
        name: str,
        policy: CircuitBreakerPolicy | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.name = name
        self._policy = policy or CircuitBreakerPolicy()
        self._clock = clock
        self._window = RollingWindow(
            self._policy.rolling_window_seconds,
            self._policy.rolling_window_buckets,
            clock,
        )
        self._state = CircuitBreakerState.CLOSED
        self._opened_at: float | None = None
        self._trial_in_flight = False
        self._lock = asyncio.Lock()

    @property
    def policy(self) -> CircuitBreakerPolicy:
        return self._policy

    @property
    def state(self) -> CircuitBreakerState:
        self._maybe_transition_half_open()
        return self._state

    @property
    def stats(self) -> WindowStats:
        return self._window.snapshot()

    async def call(self, func: Callable[[], Awaitable[T]]) -> T:
        async with self._lock:
            self._maybe_transition_half_open()
            if self._state == CircuitBreakerState.OPEN or (
                self._state == CircuitBreakerState.HALF_OPEN and self._trial_in_flight
            ):
                raise CircuitOpenError(self.name)
            trial = self._state == CircuitBreakerState.HALF_OPEN
            if trial:
                self._trial_in_flight = True

        try:
            result = await self._invoke(func)
        except Exception as exc:
            async with self._lock:
                if trial:
                    self._trial_in_flight = False
                if not isinstance(exc, self._policy.excluded_exceptions):
                    self._on_failure(trial, exc)
            raise
        except BaseException:
            # cancelled: nothing is recorded, the next call becomes the trial
            if trial:
                self._trial_in_flight = False
            raise

        async with self._lock:
            if trial:
                self._trial_in_flight = False
            self._on_success(trial)
        return result

    async def reset(self) -> None:
        """Force the breaker closed with an empty window."""
        async with self._lock:
            self._close()

    async def _invoke(self, func: Callable[[], Awaitable[T]]) -> T:
        timeout = self._policy.timeout_seconds
        if timeout <= 0:
            return await func()
        try:
            return await asyncio.wait_for(func(), timeout=timeout)
        except asyncio.TimeoutError as exc:
            raise InfrastructureTimeoutError(
                f"Call through circuit breaker '{self.name}' timed out after {timeout}s"
            ) from exc

    def _maybe_transition_half_open(self) -> None:
        if (
            self._state == CircuitBreakerState.OPEN
            and self._opened_at is not None
            and self._clock() - self._opened_at >= self._policy.reset_timeout_seconds
        ):
            self._state = CircuitBreakerState.HALF_OPEN
            self._trial_in_flight = False
            logger.warning("circuit_breaker.half_open", breaker=self.name)

    def _on_success(self, trial: bool) -> None:
        if trial:
            self._close()
            return
        self._window.record_success()

    def _on_failure(self, trial: bool, exc: Exception) -> None:
        self._window.record_failure()
        if trial:
            self._open(exc)
            return
        if self._state != CircuitBreakerState.CLOSED:
            return
        stats = self._window.snapshot()
        if (
            stats.total >= self._policy.volume_threshold
            and stats.error_percentage >= self._policy.error_threshold_percentage
        ):
            self._open(exc)

    def _open(self, exc: Exception) -> None:
        self._state = CircuitBreakerState.OPEN
        self._opened_at = self._clock()
        logger.error(
            "circuit_breaker.opened",
            breaker=self.name,
            stats=self._window.snapshot().to_dict(),
            error=str(exc),
        )

    def _close(self) -> None:
        self._state = CircuitBreakerState.CLOSED
        self._opened_at = None
        self._trial_in_flight = False
        self._window.reset()
        logger.info("circuit_breaker.closed", breaker=self.name)


__all__ = ["CircuitBreaker"]
