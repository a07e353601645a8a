"""Resilience – backoff strategies."""
from __future__ import annotations

import abc


class BackoffStrategy(abc.ABC):
    """Compute wait duration (seconds) after the failed *attempt* (0-based)."""

    @abc.abstractmethod
    def compute(self, attempt: int) -> float: ...


class ExponentialBackoff(BackoffStrategy):
    """Delay grows exponentially: ``base_delay * 2^attempt``.

    ``max_delay`` of ``None`` leaves the growth uncapped.
    """

    def __init__(self, base_delay: float = 1.0, max_delay: float | None = None) -> None:
        self._base = max(0.0, base_delay)
        self._max = max_delay

    def compute(self, attempt: int) -> float:
        delay = self._base * (2 ** max(0, attempt))
        if self._max is not None:
            delay = min(delay, self._max)
        return delay


__all__ = ["BackoffStrategy", "ExponentialBackoff"]
