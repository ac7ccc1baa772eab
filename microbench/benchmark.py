"""Base class for user-defined micro-benchmarks.

Subclasses override ``bench`` (and optionally ``setup``, ``teardown`` and
``configurations``). A separate instance is created and run for each
configuration; the instance reads its variant through ``self.options``.

    class SortBench(Benchmark):
        @classmethod
        def configurations(cls):
            return [
                BenchmarkConfiguration(label="small", options={"n": 10}),
                BenchmarkConfiguration(label="large", options={"n": 1000}),
            ]

        def setup(self):
            self.data = list(range(self.options["n"], 0, -1))

        def bench(self):
            sorted(self.data)
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Sequence
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field

from microbench.errors import EmptyConfigurationError, HookError
from microbench.hooks import Hook, invoke_hook
from microbench.logging import running
from microbench.sampling import SamplingPolicy, collect_samples
from microbench.timer import Timer

logger = logging.getLogger(__name__)


class BenchmarkConfiguration(BaseModel):
    """One variant of a benchmark. ``options`` is passed through untouched."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    label: str = ""
    options: Any = Field(default_factory=dict)


class Benchmark:
    label: str
    options: Any

    @classmethod
    def configurations(cls) -> Sequence[BenchmarkConfiguration]:
        """Variants to run. Must not depend on instance state."""
        return [BenchmarkConfiguration(label="", options={})]

    @classmethod
    def instances(cls) -> list[Self]:
        """Build one instance per configuration, in configuration order."""
        configs = list(cls.configurations())
        if not configs:
            raise EmptyConfigurationError(cls.__qualname__)
        return [cls(config) for config in configs]

    def __init__(self, config: BenchmarkConfiguration | None = None) -> None:
        if config is None:
            config = BenchmarkConfiguration()
        self.label = config.label
        # Shallow copy; nested values are still shared with the configuration.
        options = config.options
        self.options = dict(options) if isinstance(options, dict) else options

    def __repr__(self) -> str:
        return f"{type(self).__qualname__}(label={self.label!r})"

    def setup(self) -> Awaitable[None] | None:
        """Called once before sampling. May set state that ``bench`` reads."""
        return None

    def bench(self) -> Awaitable[None] | None:
        """The code being measured.

        Called many times; must not modify state set by ``setup``.
        """
        return None

    def teardown(self) -> Awaitable[None] | None:
        """Called once after the last sample."""
        return None

    async def run(
        self,
        *,
        policy: SamplingPolicy | None = None,
        timer: Timer | None = None,
    ) -> tuple[float, ...]:
        """Run ``setup``, sample ``bench`` and run ``teardown``.

        Returns the per-call durations in milliseconds, in collection order.
        Teardown is skipped when setup fails and attempted once when sampling
        fails; in that case the sampling error is the one raised.
        """

        with running(type(self).__qualname__, self.label):
            logger.debug("running setup")
            try:
                await invoke_hook(self.setup)
            except Exception as exc:
                raise HookError(Hook.setup, label=self.label) from exc

            try:
                samples = await collect_samples(
                    self.bench, policy=policy, timer=timer, label=self.label
                )
            except Exception as exc:
                await self._teardown_after_failure(exc)
                raise

            logger.debug("running teardown after %d samples", len(samples))
            try:
                await invoke_hook(self.teardown)
            except Exception as exc:
                raise HookError(Hook.teardown, label=self.label) from exc
            return samples

    def run_sync(
        self,
        *,
        policy: SamplingPolicy | None = None,
        timer: Timer | None = None,
    ) -> tuple[float, ...]:
        """Drive ``run`` on a fresh event loop. Not usable inside a running loop."""
        return asyncio.run(self.run(policy=policy, timer=timer))

    async def _teardown_after_failure(self, error: Exception) -> None:
        try:
            await invoke_hook(self.teardown)
        except Exception as exc:
            logger.exception("teardown failed while cleaning up after: %s", error)
            error.add_note(f"teardown also failed: {exc!r}")


__all__ = ["Benchmark", "BenchmarkConfiguration"]
