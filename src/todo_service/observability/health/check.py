"""Observability – HealthCheck base and its result type."""
from __future__ import annotations

import dataclasses
import time
from abc import ABC, abstractmethod

from todo_service.observability.logging import get_logger

__all__ = ["HealthCheck", "HealthStatus"]

logger = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class HealthStatus:
    healthy: bool
    detail: str | None = None
    latency_ms: float = 0.0


class HealthCheck(ABC):
    """One readiness probe; subclasses implement :meth:`check`."""

    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    async def check(self) -> HealthStatus: ...

    async def run(self) -> HealthStatus:
        """Run :meth:`check`, timing it; an escaping exception counts as unhealthy."""
        started = time.perf_counter()
        try:
            status = await self.check()
        except Exception as exc:  # noqa: BLE001
            logger.warning("health.check_failed", check=self.name, error=str(exc))
            status = HealthStatus(healthy=False, detail=f"exception: {exc}")
        return dataclasses.replace(status, latency_ms=(time.perf_counter() - started) * 1000)
