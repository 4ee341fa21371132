from __future__ import annotations

import atexit
import weakref
from concurrent.futures import ThreadPoolExecutor
from threading import Lock

from ..errors import SubstrateError

THREAD_NAME_PREFIX = "fetchlane-blocking"

_LIVE_LANES: weakref.WeakSet[BlockingLane] = weakref.WeakSet()
_ATEXIT_REGISTERED = False
_REGISTRY_LOCK = Lock()


class BlockingLane:
    """Worker threads for synchronous CPU-bound routines.

    The underlying :class:`ThreadPoolExecutor` is created on first use with a
    size fixed for the lane's lifetime; it is never rebuilt, so work queued
    by one caller cannot be cancelled by another asking for a different size.
    Lanes still alive at interpreter exit are shut down without waiting.
    """

    def __init__(self, max_workers: int) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._max_workers = max_workers
        self._pool: ThreadPoolExecutor | None = None
        self._lock = Lock()
        self._shut_down = False

    @property
    def max_workers(self) -> int:
        return self._max_workers

    @property
    def started(self) -> bool:
        return self._pool is not None

    @property
    def shut_down(self) -> bool:
        return self._shut_down

    @property
    def executor(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._shut_down:
                raise SubstrateError("blocking lane has been shut down")
            if self._pool is None:
                self._pool = ThreadPoolExecutor(
                    max_workers=self._max_workers,
                    thread_name_prefix=THREAD_NAME_PREFIX,
                )
                _register(self)
            return self._pool

    def shutdown(self, *, wait: bool = True, cancel_futures: bool = False) -> None:
        with self._lock:
            self._shut_down = True
            pool, self._pool = self._pool, None
        if pool is not None:
            pool.shutdown(wait=wait, cancel_futures=cancel_futures)

    def __repr__(self) -> str:  # pragma: no cover - convenience
        return f"BlockingLane(max_workers={self._max_workers}, started={self.started})"


def _register(lane: BlockingLane) -> None:
    global _ATEXIT_REGISTERED
    with _REGISTRY_LOCK:
        _LIVE_LANES.add(lane)
        if not _ATEXIT_REGISTERED:
            atexit.register(_shutdown_live_lanes)
            _ATEXIT_REGISTERED = True


def _shutdown_live_lanes() -> None:
    for lane in list(_LIVE_LANES):
        lane.shutdown(wait=False, cancel_futures=True)


__all__ = ["BlockingLane", "THREAD_NAME_PREFIX"]
