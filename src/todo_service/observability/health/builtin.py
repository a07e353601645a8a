from __future__ import annotations

from typing import Any

from todo_service.observability.health.check import HealthCheck, HealthStatus
from todo_service.observability.logging import get_logger
from todo_service.resilience.circuit_breaker import CircuitBreaker, CircuitBreakerState

__all__ = [
    "CircuitBreakerHealthCheck",
    "DatabaseHealthCheck",
]

logger = get_logger(__name__)


class DatabaseHealthCheck(HealthCheck):
    """Checks DB connectivity by running a lightweight query.

    Goes straight to the database, bypassing the circuit breaker, so the
    probe reports the dependency itself.
    """

    def __init__(self, database: Any) -> None:
        self._database = database

    @property
    def name(self) -> str:
        return "database"

    async def check(self) -> HealthStatus:
        try:
            await self._database.ping()
            return HealthStatus(healthy=True)
        except Exception as exc:  # noqa: BLE001
            logger.error("health.database_failed", error=str(exc))
            return HealthStatus(healthy=False, detail=str(exc))


class CircuitBreakerHealthCheck(HealthCheck):
    """Unhealthy while the breaker sheds load (``open``)."""

    def __init__(self, breaker: CircuitBreaker) -> None:
        self._breaker = breaker

    @property
    def name(self) -> str:
        return f"circuit_breaker:{self._breaker.name}"

    async def check(self) -> HealthStatus:
        state = self._breaker.state
        return HealthStatus(
            healthy=state != CircuitBreakerState.OPEN,
            detail=state.value,
        )
