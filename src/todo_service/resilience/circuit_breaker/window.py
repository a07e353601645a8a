"""Resilience – bucketed rolling window of call outcomes."""
from __future__ import annotations

import dataclasses
import math
import time
from typing import Callable


@dataclasses.dataclass(frozen=True)
class WindowStats:
    successes: int
    failures: int

    @property
    def total(self) -> int:
        return self.successes + self.failures

    @property
    def error_percentage(self) -> float:
        if self.total == 0:
            return 0.0
        return self.failures * 100.0 / self.total

    def to_dict(self) -> dict[str, float | int]:
        return {
            "successes": self.successes,
            "failures": self.failures,
            "total": self.total,
            "error_percentage": round(self.error_percentage, 2),
        }


@dataclasses.dataclass
class _Bucket:
    index: int
    successes: int = 0
    failures: int = 0


class RollingWindow:
    """Success/failure counts over the last ``window_seconds``.

    The span is split into ``buckets`` slots of equal width; a slot is
    recycled once its time has rolled out of the window, so aggregation is
    incremental and memory stays bounded.
    """

    def __init__(
        self,
        window_seconds: float = 10.0,
        buckets: int = 10,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._bucket_width = window_seconds / buckets
        self._size = buckets
        self._clock = clock
        self._buckets: list[_Bucket | None] = [None] * buckets

    def _current(self) -> _Bucket:
        index = math.floor(self._clock() / self._bucket_width)
        slot = index % self._size
        bucket = self._buckets[slot]
        if bucket is None or bucket.index != index:
            bucket = _Bucket(index)
            self._buckets[slot] = bucket
        return bucket

    def record_success(self) -> None:
        self._current().successes += 1

    def record_failure(self) -> None:
        self._current().failures += 1

    def snapshot(self) -> WindowStats:
        newest = self._current().index
        live = [b for b in self._buckets if b is not None and newest - b.index < self._size]
        return WindowStats(
            successes=sum(b.successes for b in live),
            failures=sum(b.failures for b in live),
        )

    def reset(self) -> None:
        self._buckets = [None] * self._size


__all__ = ["RollingWindow", "WindowStats"]
