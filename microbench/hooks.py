"""Lifecycle hook names and the helper that settles a hook call."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from enum import StrEnum

HookFn = Callable[[], Awaitable[None] | None]


class Hook(StrEnum):
    setup = "setup"
    bench = "bench"
    teardown = "teardown"


async def invoke_hook(fn: HookFn) -> None:
    """Call ``fn`` and, if it handed back an awaitable, wait for it to settle.

    Hooks may be plain functions or coroutine functions; checking the return
    value rather than the function also covers sync callables that return a
    future or task.
    """

    result = fn()
    if inspect.isawaitable(result):
        await result


__all__ = ["Hook", "HookFn", "invoke_hook"]
