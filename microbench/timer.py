"""Timing primitive used by the sampling loop."""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable

_NS_PER_MS = 1_000_000


@runtime_checkable
class Timer(Protocol):
    """Monotonic clock reporting milliseconds."""

    def now(self) -> float: ...


class PerfCounterTimer:
    """Default timer backed by ``time.perf_counter_ns``.

    Integer nanoseconds keep sub-millisecond precision even after long
    process uptimes, where float seconds start losing low digits.
    """

    def now(self) -> float:
        return time.perf_counter_ns() / _NS_PER_MS


__all__ = ["PerfCounterTimer", "Timer"]
