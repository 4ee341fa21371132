"""Execution substrate: an async lane for I/O and a blocking lane for CPU work.

The async lane is a single asyncio event loop owned by :class:`Runtime`. The
blocking lane is a pool of worker threads; routines submitted there never
occupy the loop while they compute. Both lanes hand back :class:`TaskHandle`
objects which are awaited exactly once.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine, Generator, Iterable
from concurrent.futures import Executor
from dataclasses import dataclass
from typing import Any, Generic, ParamSpec, TypeVar

from .capabilities import RuntimeCapabilities, detect_capabilities
from .config import LaneConfig
from .errors import HandleConsumedError, LaneError, SubstrateError
from .executors.async_bridge import submit_blocking
from .executors.threading import BlockingLane

T = TypeVar("T")
P = ParamSpec("P")

logger = logging.getLogger(__name__)


class TaskHandle(Generic[T]):
    """Owned token for one unit of spawned work.

    Awaiting the handle consumes it; a second ``await`` raises
    :class:`HandleConsumedError`. Dropping a handle without awaiting it
    detaches the work, which still runs to completion.
    """

    __slots__ = ("_future", "_name", "_awaited")

    def __init__(self, future: asyncio.Future[T], *, name: str) -> None:
        self._future = future
        self._name = name
        self._awaited = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def awaited(self) -> bool:
        return self._awaited

    def done(self) -> bool:
        """Report completion without consuming the handle."""

        return self._future.done()

    def __await__(self) -> Generator[Any, None, T]:
        if self._awaited:
            raise HandleConsumedError(f"task handle {self._name!r} was already awaited")
        self._awaited = True
        return self._join().__await__()

    async def _join(self) -> T:
        try:
            # Cancelling the awaiter must not cancel the spawned work.
            return await asyncio.shield(self._future)
        except LaneError:
            raise
        except asyncio.CancelledError as exc:
            if not self._future.cancelled():
                raise
            raise SubstrateError(f"task {self._name!r} was cancelled") from exc
        except Exception as exc:
            raise SubstrateError(f"task {self._name!r} failed: {exc!r}") from exc

    def __repr__(self) -> str:  # pragma: no cover - convenience
        state = "awaited" if self._awaited else "unawaited"
        return f"TaskHandle(name={self._name!r}, state={state})"


@dataclass(frozen=True)
class Outcome(Generic[T]):  # noqa: UP046
    """Settled result of one member of a fan-in join.

    Attributes:
        value: Result produced by the task when it succeeded.
        error: Failure raised by the task, ``None`` on success.
    """

    value: T | None = None
    error: LaneError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value or raise the recorded failure."""

        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


async def join_all(handles: Iterable[TaskHandle[T]]) -> list[Outcome[T]]:
    """Wait for every handle, whatever its outcome, preserving input order.

    >>> import asyncio
    >>> async def main() -> list[bool]:
    ...     with Runtime(config=LaneConfig(max_workers=1)) as runtime:
    ...         handles = [runtime.spawn_blocking(abs, -2), runtime.spawn_blocking(int, "x")]
    ...         return [outcome.ok for outcome in await join_all(handles)]
    >>> asyncio.run(main())
    [True, False]
    """

    async def _settle(handle: TaskHandle[T]) -> Outcome[T]:
        try:
            return Outcome(value=await handle)
        except LaneError as exc:
            return Outcome(error=exc)

    return list(await asyncio.gather(*(_settle(handle) for handle in handles)))


class Runtime:
    """Owns the event loop of the async lane and the blocking-lane executor.

    ``block_on`` reuses one loop across calls, so work detached by an earlier
    call keeps making progress while later calls run. ``close`` cancels
    whatever is still pending and shuts the blocking lane down. Once closed,
    ``block_on``, ``spawn_async`` and ``spawn_blocking`` all raise
    :class:`SubstrateError`.

    Each runtime owns its blocking lane, sized once from the config or the
    capability snapshot; the worker threads start on the first
    ``spawn_blocking``.
    """

    def __init__(
        self,
        *,
        config: LaneConfig | None = None,
        capabilities: RuntimeCapabilities | None = None,
        executor: Executor | None = None,
    ) -> None:
        self._config = config or LaneConfig.from_env()
        self._capabilities = capabilities or detect_capabilities()
        self._provided_executor = executor
        self._lane = BlockingLane(self.blocking_workers) if executor is None else None
        self._runner: asyncio.Runner | None = None
        self._tasks: set[asyncio.Future[Any]] = set()
        self._closed = False

    @property
    def config(self) -> LaneConfig:
        return self._config

    @property
    def capabilities(self) -> RuntimeCapabilities:
        return self._capabilities

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def blocking_workers(self) -> int:
        return self._config.max_workers or self._capabilities.suggested_blocking_workers

    @property
    def executor(self) -> Executor:
        """Executor backing the blocking lane."""

        if self._lane is None:
            return self._provided_executor  # type: ignore[return-value]
        return self._lane.executor

    @property
    def active_tasks(self) -> int:
        """Number of spawned units of work that have not finished yet."""

        return len(self._tasks)

    def block_on(self, main: Coroutine[Any, Any, T]) -> T:
        """Drive *main* to completion on the async lane and return its result."""

        if self._closed:
            main.close()
            raise SubstrateError("runtime is closed")
        if self._runner is None:
            self._runner = asyncio.Runner()
        return self._runner.run(main)

    def spawn_async(
        self, coro: Coroutine[Any, Any, T], *, name: str | None = None
    ) -> TaskHandle[T]:
        """Start *coro* concurrently with the caller; must run inside a loop."""

        if self._closed:
            coro.close()
            raise SubstrateError("runtime is closed")
        loop = asyncio.get_running_loop()
        task = loop.create_task(coro, name=name or getattr(coro, "__qualname__", None))
        self._track(task)
        logger.debug("spawned %s on the async lane", task.get_name())
        return TaskHandle(task, name=task.get_name())

    def spawn_blocking(
        self, func: Callable[P, T], /, *args: P.args, **kwargs: P.kwargs
    ) -> TaskHandle[T]:
        """Run *func* on the blocking lane; the handle is awaitable from the loop."""

        if self._closed:
            raise SubstrateError("runtime is closed")
        name = getattr(func, "__qualname__", repr(func))
        future = submit_blocking(self.executor, func, *args, **kwargs)
        self._track(future)
        logger.debug("spawned %s on the blocking lane", name)
        return TaskHandle(future, name=name)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._runner is not None:
            self._runner.close()
            self._runner = None
        if self._lane is not None:
            self._lane.shutdown(cancel_futures=True)

    def __enter__(self) -> Runtime:
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False

    # ------------------------------------------------------------------

    def _track(self, future: asyncio.Future[Any]) -> None:
        self._tasks.add(future)
        future.add_done_callback(self._forget)

    def _forget(self, future: asyncio.Future[Any]) -> None:
        self._tasks.discard(future)
        if future.cancelled():
            return
        # Retrieving the exception keeps detached failures out of the
        # loop's "never retrieved" warnings.
        exc = future.exception()
        if exc is not None:
            logger.debug("spawned work finished with %s: %s", type(exc).__name__, exc)

    def __repr__(self) -> str:  # pragma: no cover - convenience
        return f"Runtime(blocking_workers={self.blocking_workers}, closed={self._closed})"


__all__ = ["Outcome", "Runtime", "TaskHandle", "join_all"]
