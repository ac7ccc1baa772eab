"""Runs every configuration of a benchmark class and collects raw samples.

Instances are run one after another, never interleaved. Whether a failing
variant aborts the rest is the caller's choice via ``continue_on_error``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from microbench.benchmark import Benchmark
from microbench.errors import BenchmarkError
from microbench.sampling import SamplingPolicy
from microbench.timer import Timer

if TYPE_CHECKING:
    from microbench.config import MicrobenchSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BenchmarkRun:
    """Outcome of running one benchmark instance."""

    name: str
    label: str
    options: Any
    samples: tuple[float, ...]
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def elapsed_ms(self) -> float:
        return sum(self.samples)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "label": self.label,
            "options": self.options,
            "samples": list(self.samples),
            "error": self.error,
        }


class BenchmarkRunner:
    """Builds one instance per configuration and runs each to completion."""

    def __init__(
        self,
        policy: SamplingPolicy | None = None,
        timer: Timer | None = None,
        *,
        continue_on_error: bool = False,
    ) -> None:
        self._policy = policy or SamplingPolicy()
        self._timer = timer
        self._continue_on_error = continue_on_error
        self._results: list[BenchmarkRun] = []

    @classmethod
    def from_settings(
        cls,
        settings: MicrobenchSettings,
        timer: Timer | None = None,
        *,
        configure_logging: bool = False,
    ) -> BenchmarkRunner:
        """Build a runner from loaded settings, optionally installing its log handler."""
        if configure_logging:
            settings.configure_logging()
        return cls(
            settings.sampling,
            timer,
            continue_on_error=settings.continue_on_error,
        )

    @property
    def results(self) -> list[BenchmarkRun]:
        return list(self._results)

    async def run(self, benchmark_cls: type[Benchmark]) -> list[BenchmarkRun]:
        """Run all variants of ``benchmark_cls`` and return their results.

        Results accumulate across calls so one runner can cover a suite.
        """

        name = benchmark_cls.__qualname__
        runs: list[BenchmarkRun] = []
        for instance in benchmark_cls.instances():
            run = await self._run_one(name, instance)
            runs.append(run)
            self._results.append(run)
        return runs

    async def _run_one(self, name: str, instance: Benchmark) -> BenchmarkRun:
        try:
            samples = await instance.run(policy=self._policy, timer=self._timer)
        except BenchmarkError as exc:
            if not self._continue_on_error:
                raise
            logger.warning("benchmark %s label=%r failed: %s", name, instance.label, exc)
            return BenchmarkRun(
                name=name,
                label=instance.label,
                options=instance.options,
                samples=(),
                error=str(exc),
            )
        logger.info(
            "benchmark %s label=%r: %d samples, %.3f ms",
            name,
            instance.label,
            len(samples),
            sum(samples),
        )
        return BenchmarkRun(
            name=name,
            label=instance.label,
            options=instance.options,
            samples=samples,
        )

    def to_json(self) -> str:
        """Serialize collected results to a JSON string."""
        return json.dumps(
            {
                "timestamp": datetime.now(UTC).isoformat(),
                "policy": self._policy.model_dump(mode="json"),
                "benchmarks": [r.to_dict() for r in self._results],
            },
            indent=2,
            default=str,
        )


__all__ = ["BenchmarkRun", "BenchmarkRunner"]
