"""Unit tests for ResiliencePipeline: retry (outer) around the breaker (inner)."""

from __future__ import annotations

import asyncio

import pytest

from todo_service.kernel.errors import FailureKind, InfrastructureTimeoutError, PersistenceError
from todo_service.resilience import (
    CircuitBreaker,
    CircuitBreakerPolicy,
    CircuitBreakerState,
    CircuitOpenError,
    ResiliencePipeline,
    RetryPolicy,
)
from todo_service.testing.chaos import HANG, FailureScript
from todo_service.testing.fakes import ManualMonotonic, RecordingSleep


def make_pipeline(
    *, max_attempts: int = 3, sleep: RecordingSleep | None = None, **breaker: object
) -> ResiliencePipeline:
    options: dict[str, object] = {"timeout_seconds": 0.01}
    options.update(breaker)
    return ResiliencePipeline(
        CircuitBreaker("database", CircuitBreakerPolicy(**options), clock=ManualMonotonic()),  # type: ignore[arg-type]
        RetryPolicy(max_attempts=max_attempts, sleep=sleep or RecordingSleep()),
    )


async def ok() -> str:
    return "ok"


class TestResiliencePipeline:
    def test_transient_failure_recovered_by_retry(self) -> None:
        script = FailureScript([PersistenceError("reset", kind=FailureKind.CONNECTION_RESET)])
        pipeline = make_pipeline(volume_threshold=5)
        assert asyncio.run(pipeline.execute(script.wrap(ok))) == "ok"
        assert script.calls == 2
        stats = pipeline.breaker.stats
        assert (stats.failures, stats.successes) == (1, 1)

    def test_default_policy_single_timeout_opens_then_fails_fast(self) -> None:
        script = FailureScript([HANG, HANG, HANG])
        sleep = RecordingSleep()
        pipeline = make_pipeline(sleep=sleep)
        with pytest.raises(CircuitOpenError):
            asyncio.run(pipeline.execute(script.wrap(ok)))
        assert script.calls == 1
        assert len(sleep.delays) == 1
        assert pipeline.breaker.state == CircuitBreakerState.OPEN
        assert pipeline.breaker.stats.failures == 1

    def test_volume_threshold_five_timeouts_exhaust_retries(self) -> None:
        script = FailureScript([HANG] * 5)
        pipeline = make_pipeline(volume_threshold=5)
        with pytest.raises(InfrastructureTimeoutError):
            asyncio.run(pipeline.execute(script.wrap(ok)))
        assert script.calls == 3
        assert pipeline.breaker.stats.failures == 3
        assert pipeline.breaker.state == CircuitBreakerState.CLOSED

    def test_open_circuit_not_retried_and_not_invoked(self) -> None:
        sleep = RecordingSleep()
        pipeline = make_pipeline(sleep=sleep)
        script = FailureScript([PersistenceError("boom")])
        with pytest.raises(PersistenceError):
            asyncio.run(pipeline.execute(script.wrap(ok)))
        assert pipeline.breaker.state == CircuitBreakerState.OPEN

        calls_before = script.calls
        with pytest.raises(CircuitOpenError):
            asyncio.run(pipeline.execute(script.wrap(ok)))
        assert script.calls == calls_before
        assert sleep.delays == []

    def test_non_retryable_failure_single_attempt(self) -> None:
        script = FailureScript([ValueError("bad statement")])
        pipeline = make_pipeline(volume_threshold=5)
        with pytest.raises(ValueError):
            asyncio.run(pipeline.execute(script.wrap(ok)))
        assert script.calls == 1
        assert pipeline.breaker.stats.failures == 1
