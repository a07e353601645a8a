"""Resilience – CircuitBreakerPolicy."""
from __future__ import annotations

import dataclasses


@dataclasses.dataclass
class CircuitBreakerPolicy:
    """Configuration for a circuit breaker.

    ``volume_threshold`` is the number of calls the rolling window must hold
    before the error percentage is allowed to open the circuit.
    """
    timeout_seconds: float = 5.0
    error_threshold_percentage: float = 50.0
    reset_timeout_seconds: float = 30.0
    rolling_window_seconds: float = 10.0
    rolling_window_buckets: int = 10
    volume_threshold: int = 0
    excluded_exceptions: tuple[type[Exception], ...] = ()

    def __post_init__(self) -> None:
        if not 0 <= self.error_threshold_percentage <= 100:
            raise ValueError("error_threshold_percentage must be within 0..100")
        if self.rolling_window_buckets < 1:
            raise ValueError("rolling_window_buckets must be >= 1")
        if self.rolling_window_seconds <= 0:
            raise ValueError("rolling_window_seconds must be > 0")


__all__ = ["CircuitBreakerPolicy"]
