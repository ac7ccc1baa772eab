"""Exception hierarchy for benchmark runs.

Every failure a run can surface derives from ``BenchmarkError`` so callers can
decide in one place whether to abort a suite or move on to the next
configuration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from microbench.hooks import Hook


class BenchmarkError(Exception):
    """Base class for all harness failures."""


class EmptyConfigurationError(BenchmarkError, ValueError):
    """Raised when a configuration query yields nothing to run."""

    def __init__(self, benchmark_name: str) -> None:
        self.benchmark_name = benchmark_name
        super().__init__(f"{benchmark_name}.configurations() returned no configurations")


class HookError(BenchmarkError):
    """A lifecycle hook raised; the original exception is chained as ``__cause__``."""

    def __init__(
        self,
        hook: Hook,
        *,
        label: str = "",
        sample_index: int | None = None,
    ) -> None:
        self.hook = hook
        self.label = label
        self.sample_index = sample_index
        where = f" at sample {sample_index}" if sample_index is not None else ""
        variant = f" (label={label!r})" if label else ""
        super().__init__(f"{hook} failed{where}{variant}")


class ClockSkewError(BenchmarkError):
    """The timer went backwards across a single ``bench`` call."""

    def __init__(self, sample_index: int, start: float, end: float) -> None:
        self.sample_index = sample_index
        self.start = start
        self.end = end
        super().__init__(
            f"non-monotonic timer at sample {sample_index}: end {end!r} < start {start!r}"
        )


class SamplingLimitError(BenchmarkError):
    """``max_samples`` bench calls were made before the stopping rule held."""

    def __init__(self, max_samples: int, elapsed: float) -> None:
        self.max_samples = max_samples
        self.elapsed = elapsed
        super().__init__(
            f"sampling ceiling of {max_samples} reached after {elapsed:.3f} ms "
            "without satisfying the stopping rule"
        )


__all__ = [
    "BenchmarkError",
    "ClockSkewError",
    "EmptyConfigurationError",
    "HookError",
    "SamplingLimitError",
]
