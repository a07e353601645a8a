"""Resilience – jitter strategies."""
from __future__ import annotations

import abc
import random


class JitterStrategy(abc.ABC):
    """Apply randomness to a backoff delay to desynchronise concurrent retries."""

    @abc.abstractmethod
    def apply(self, delay: float) -> float: ...


class NoJitter(JitterStrategy):
    def apply(self, delay: float) -> float:
        return delay


class AdditiveJitter(JitterStrategy):
    """Add uniform random in ``[0, max_jitter)`` seconds on top of the delay."""

    def __init__(self, max_jitter: float = 1.0) -> None:
        self._max = max(0.0, max_jitter)

    def apply(self, delay: float) -> float:
        return delay + random.random() * self._max


__all__ = ["AdditiveJitter", "JitterStrategy", "NoJitter"]
