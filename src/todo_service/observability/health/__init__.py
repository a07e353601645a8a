"""Observability – Health Checks."""
from todo_service.observability.health.builtin import (
    CircuitBreakerHealthCheck,
    DatabaseHealthCheck,
)
from todo_service.observability.health.check import HealthCheck, HealthStatus
from todo_service.observability.health.registry import HealthRegistry, HealthReport

__all__ = [
    "CircuitBreakerHealthCheck",
    "DatabaseHealthCheck",
    "HealthCheck",
    "HealthRegistry",
    "HealthReport",
    "HealthStatus",
]
