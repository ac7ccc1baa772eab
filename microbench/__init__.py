"""Micro-benchmark harness.

Define a ``Benchmark`` subclass, optionally fan it out into variants with
``configurations()``, and collect raw per-call timings with ``run()``. The
sampling loop stops once both the time budget and the sample floor of its
``SamplingPolicy`` are met.
"""

from microbench.benchmark import Benchmark, BenchmarkConfiguration
from microbench.errors import (
    BenchmarkError,
    ClockSkewError,
    EmptyConfigurationError,
    HookError,
    SamplingLimitError,
)
from microbench.hooks import Hook
from microbench.runner import BenchmarkRun, BenchmarkRunner
from microbench.sampling import ClockSkewPolicy, SamplingPolicy, collect_samples
from microbench.timer import PerfCounterTimer, Timer

__all__ = [
    "Benchmark",
    "BenchmarkConfiguration",
    "BenchmarkError",
    "BenchmarkRun",
    "BenchmarkRunner",
    "ClockSkewError",
    "ClockSkewPolicy",
    "EmptyConfigurationError",
    "Hook",
    "HookError",
    "PerfCounterTimer",
    "SamplingLimitError",
    "SamplingPolicy",
    "Timer",
    "collect_samples",
]
