"""Observability – HealthRegistry and the aggregated readiness report."""
from __future__ import annotations

import dataclasses
from typing import Any

from todo_service.observability.health.check import HealthCheck, HealthStatus

__all__ = ["HealthReport", "HealthRegistry"]


@dataclasses.dataclass(frozen=True)
class HealthReport:
    results: dict[str, HealthStatus]

    @property
    def overall(self) -> bool:
        return all(status.healthy for status in self.results.values())

    def to_dict(self) -> dict[str, Any]:
        """Per-check entries as served by the readiness route."""
        return {
            name: {
                "status": "ok" if status.healthy else "fail",
                "detail": status.detail,
                "responseTime": round(status.latency_ms, 2),
            }
            for name, status in self.results.items()
        }


class HealthRegistry:
    def __init__(self) -> None:
        self._checks: list[HealthCheck] = []

    def register(self, check: HealthCheck) -> None:
        self._checks.append(check)

    async def run_all(self) -> HealthReport:
        return HealthReport({check.name: await check.run() for check in self._checks})
