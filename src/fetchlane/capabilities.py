from __future__ import annotations

import os
import sys
import sysconfig
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RuntimeCapabilities:
    """Snapshot of the interpreter features that shape the blocking lane."""

    cpu_count: int
    gil_enabled: bool
    suggested_blocking_workers: int


def detect_capabilities() -> RuntimeCapabilities:
    cpu_count = os.cpu_count() or 1
    free_threading_build = bool(sysconfig.get_config_var("Py_GIL_DISABLED"))
    gil_enabled = _is_gil_enabled()

    if free_threading_build and not gil_enabled:
        suggested_blocking_workers = cpu_count
    else:
        # Blocking workers hand the GIL back at every switch interval, so a
        # wider pool keeps CPU routines from queueing behind each other.
        suggested_blocking_workers = max(4, min(32, cpu_count * 5))

    return RuntimeCapabilities(
        cpu_count=cpu_count,
        gil_enabled=gil_enabled,
        suggested_blocking_workers=suggested_blocking_workers,
    )


def _is_gil_enabled() -> bool:
    checker = getattr(sys, "_is_gil_enabled", None)
    if checker is None:
        return True
    try:
        return bool(checker())
    except RuntimeError:
        return True
