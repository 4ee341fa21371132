"""Executors backing the blocking lane.

Module names follow `concurrent.futures` vocabulary so the stdlib
documentation applies verbatim.
"""

from . import async_bridge, threading

__all__ = [
    "async_bridge",
    "threading",
]
