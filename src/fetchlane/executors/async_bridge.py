from __future__ import annotations

import asyncio
from collections.abc import Callable
from concurrent.futures import Executor
from functools import partial
from typing import ParamSpec, TypeVar

from ..errors import SubstrateError

T = TypeVar("T")
P = ParamSpec("P")


def submit_blocking(
    executor: Executor,
    func: Callable[P, T],
    /,
    *args: P.args,
    **kwargs: P.kwargs,
) -> asyncio.Future[T]:
    """Hand *func* to *executor* and return a future bound to the running loop.

    The call itself never blocks the loop. An executor that refuses new work
    (typically because it was shut down) raises :class:`SubstrateError` here,
    at submission time, rather than when the future is awaited.
    """

    loop = asyncio.get_running_loop()
    caller = partial(func, *args, **kwargs)
    try:
        return loop.run_in_executor(executor, caller)
    except RuntimeError as exc:
        raise SubstrateError(f"blocking lane refused work: {exc}") from exc
