"""Log records tagged with the benchmark variant currently being run.

``Benchmark.run`` marks the running ``(benchmark, label)`` pair; the formatter
reads it when a record is rendered, so modules keep plain
``logging.getLogger(__name__)`` calls.
"""

from __future__ import annotations

import contextvars
import json
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime

_RUNNING: contextvars.ContextVar[tuple[str, str] | None] = contextvars.ContextVar(
    "microbench_running",
    default=None,
)


def current_benchmark() -> tuple[str, str] | None:
    """The ``(benchmark, label)`` pair being run in this context, if any."""
    return _RUNNING.get()


@contextmanager
def running(benchmark: str, label: str) -> Iterator[None]:
    token = _RUNNING.set((benchmark, label))
    try:
        yield
    finally:
        _RUNNING.reset(token)


class BenchmarkFormatter(logging.Formatter):
    """Plain text with a ``[benchmark:label]`` tag, or one JSON object per line."""

    def __init__(self, *, json_output: bool = False) -> None:
        super().__init__("%(asctime)s %(levelname)s %(name)s%(benchmark_tag)s %(message)s")
        self.json_output = json_output

    def format(self, record: logging.LogRecord) -> str:
        current = _RUNNING.get()
        if self.json_output:
            return self._format_json(record, current)
        record.benchmark_tag = "" if current is None else f" [{current[0]}:{current[1]}]"
        return super().format(record)

    def _format_json(self, record: logging.LogRecord, current: tuple[str, str] | None) -> str:
        benchmark, label = current or (None, None)
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "benchmark": benchmark,
            "label": label,
        }
        if record.exc_info is not None:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True)


def setup_logging(level: int | str = logging.INFO, json_output: bool = False) -> None:
    """Replace the root handlers with a single stderr handler."""

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(BenchmarkFormatter(json_output=json_output))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)


__all__ = ["BenchmarkFormatter", "current_benchmark", "running", "setup_logging"]
