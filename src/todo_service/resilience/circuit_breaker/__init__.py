"""Resilience – Circuit Breaker pattern."""
from todo_service.resilience.circuit_breaker.errors import CircuitOpenError
from todo_service.resilience.circuit_breaker.state import CircuitBreakerState
from todo_service.resilience.circuit_breaker.policy import CircuitBreakerPolicy
from todo_service.resilience.circuit_breaker.window import RollingWindow, WindowStats
from todo_service.resilience.circuit_breaker.breaker import CircuitBreaker

__all__ = [
    "CircuitBreaker",
    "CircuitBreakerPolicy",
    "CircuitBreakerState",
    "CircuitOpenError",
    "RollingWindow",
    "WindowStats",
]
