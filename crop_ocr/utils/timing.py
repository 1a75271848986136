"""Timing helpers used for inference statistics."""
from __future__ import annotations

import math
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Generator


@dataclass
class InferenceStats:
    """Cumulative invocation count and elapsed seconds, safe to share between threads."""

    _count: int = 0
    _total: float = 0.0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record(self, elapsed: float) -> None:
        with self._lock:
            self._count += 1
            self._total += elapsed

    @property
    def count(self) -> int:
        return self._count

    @property
    def total(self) -> float:
        return self._total

    @property
    def average(self) -> float:
        """Mean elapsed seconds; ``nan`` until something has been recorded."""

        with self._lock:
            if self._count == 0:
                return math.nan
            return self._total / self._count


@contextmanager
def time_block(stats: InferenceStats | None = None) -> Generator[None, None, None]:
    """Measure a code block and record it in ``stats`` if it completes."""

    start = time.perf_counter()
    yield
    if stats is not None:
        stats.record(time.perf_counter() - start)


__all__ = ["InferenceStats", "time_block"]
