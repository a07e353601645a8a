"""Process wiring – builds every long-lived collaborator exactly once.

The circuit breaker and retry policy are shared by all requests; nothing
here is constructed per call.
"""
from __future__ import annotations

import asyncio
import dataclasses
import time
from typing import Any, Awaitable, Callable

from todo_service.adapters.sqlalchemy import Database, SqlAlchemyTodoRepository
from todo_service.application.todos import TodoService
from todo_service.config import TodoServiceSettings
from todo_service.kernel.time import Clock, SystemClock
from todo_service.observability.events import EventNotifier, InMemoryEventBus
from todo_service.observability.health import (
    CircuitBreakerHealthCheck,
    DatabaseHealthCheck,
    HealthRegistry,
)
from todo_service.resilience import (
    CircuitBreaker,
    CircuitBreakerPolicy,
    ResiliencePipeline,
    RetryPolicy,
)


@dataclasses.dataclass
class Container:
    settings: TodoServiceSettings
    clock: Clock
    database: Database
    breaker: CircuitBreaker
    retry: RetryPolicy
    pipeline: ResiliencePipeline
    repository: SqlAlchemyTodoRepository
    bus: InMemoryEventBus
    notifier: EventNotifier
    service: TodoService
    health: HealthRegistry


def _engine_options(settings: TodoServiceSettings) -> dict[str, Any]:
    if settings.database_url.startswith("sqlite"):
        return {}
    return {"pool_size": settings.database_pool_size, "pool_pre_ping": True}


def build_container(
    settings: TodoServiceSettings,
    *,
    database: Database | None = None,
    clock: Clock | None = None,
    monotonic: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> Container:
    clock = clock or SystemClock()
    database = database or Database(settings.database_url, **_engine_options(settings))

    breaker = CircuitBreaker(
        "database",
        CircuitBreakerPolicy(
            timeout_seconds=settings.breaker_timeout_seconds,
            error_threshold_percentage=settings.breaker_error_threshold_percentage,
            reset_timeout_seconds=settings.breaker_reset_timeout_seconds,
            rolling_window_seconds=settings.breaker_rolling_window_seconds,
            rolling_window_buckets=settings.breaker_rolling_window_buckets,
            volume_threshold=settings.breaker_volume_threshold,
        ),
        clock=monotonic,
    )
    retry = RetryPolicy(
        max_attempts=settings.retry_max_attempts,
        base_delay=settings.retry_base_delay_seconds,
        sleep=sleep,
    )
    pipeline = ResiliencePipeline(breaker, retry)
    repository = SqlAlchemyTodoRepository(database, pipeline)

    bus = InMemoryEventBus()
    notifier = EventNotifier(bus, source=f"/{settings.service_name}", clock=clock)
    service = TodoService(repository, notifier, clock)

    health = HealthRegistry()
    health.register(DatabaseHealthCheck(database))
    health.register(CircuitBreakerHealthCheck(breaker))

    return Container(
        settings=settings,
        clock=clock,
        database=database,
        breaker=breaker,
        retry=retry,
        pipeline=pipeline,
        repository=repository,
        bus=bus,
        notifier=notifier,
        service=service,
        health=health,
    )


__all__ = ["Container", "build_container"]
