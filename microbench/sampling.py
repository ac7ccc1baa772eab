"""Adaptive sampling loop.

``collect_samples`` keeps timing ``bench`` until the accumulated time reaches
the policy's budget *and* more than ``min_samples`` observations exist. The
defaults (300 ms, more than 210 samples) give roughly 20 observations for a
downstream regression at a batching factor of ~10.
"""

from __future__ import annotations

import logging
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from microbench.errors import ClockSkewError, HookError, SamplingLimitError
from microbench.hooks import Hook, HookFn, invoke_hook
from microbench.timer import PerfCounterTimer, Timer

logger = logging.getLogger(__name__)

DEFAULT_TIME_BUDGET_MS = 300.0
DEFAULT_MIN_SAMPLES = 210


class ClockSkewPolicy(StrEnum):
    raise_ = "raise"
    resample = "resample"


class SamplingPolicy(BaseModel):
    """Stopping rule for one run.

    ``min_samples`` is a strict floor: the count condition holds once the
    sample count is *greater than* it. ``max_samples`` caps the number of
    ``bench`` calls, counting readings discarded under ``resample``.
    """

    model_config = ConfigDict(frozen=True)

    time_budget_ms: float = Field(default=DEFAULT_TIME_BUDGET_MS, ge=0)
    min_samples: int = Field(default=DEFAULT_MIN_SAMPLES, ge=0)
    max_samples: int | None = Field(default=None, ge=1)
    clock_skew: ClockSkewPolicy = ClockSkewPolicy.raise_

    @model_validator(mode="after")
    def _validate_ceiling_above_floor(self) -> SamplingPolicy:
        if self.max_samples is not None and self.max_samples <= self.min_samples:
            raise ValueError("max_samples must be greater than min_samples")
        return self

    def is_satisfied(self, count: int, elapsed: float) -> bool:
        return elapsed >= self.time_budget_ms and count > self.min_samples


async def collect_samples(
    bench: HookFn,
    *,
    policy: SamplingPolicy | None = None,
    timer: Timer | None = None,
    label: str = "",
) -> tuple[float, ...]:
    """Time ``bench`` repeatedly and return the samples in collection order.

    Each call settles completely before the next one starts. A failing call
    ends sampling at once; there are no retries and no partial results.
    """

    policy = policy or SamplingPolicy()
    timer = timer or PerfCounterTimer()

    samples: list[float] = []
    elapsed = 0.0
    # Every bench call, including discarded ones.
    attempts = 0
    while not policy.is_satisfied(len(samples), elapsed):
        index = len(samples)
        if policy.max_samples is not None and attempts >= policy.max_samples:
            raise SamplingLimitError(policy.max_samples, elapsed)

        attempts += 1
        start = timer.now()
        try:
            await invoke_hook(bench)
        except Exception as exc:
            raise HookError(Hook.bench, label=label, sample_index=index) from exc
        end = timer.now()

        sample = end - start
        if sample < 0:
            if policy.clock_skew is ClockSkewPolicy.resample:
                logger.warning(
                    "discarding sample %d: timer went backwards by %.6f ms", index, -sample
                )
                continue
            raise ClockSkewError(index, start, end)

        samples.append(sample)
        elapsed += sample

    logger.debug("collected %d samples in %.3f ms", len(samples), elapsed)
    return tuple(samples)


__all__ = [
    "DEFAULT_MIN_SAMPLES",
    "DEFAULT_TIME_BUDGET_MS",
    "ClockSkewPolicy",
    "SamplingPolicy",
    "collect_samples",
]
