from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

LogLevel = Literal["off", "error", "warn", "info", "debug", "trace"]

_LEVEL_ALIASES: dict[str, LogLevel] = {
    "off": "off",
    "error": "error",
    "warn": "warn",
    "warning": "warn",
    "info": "info",
    "debug": "debug",
    "trace": "trace",
}


def parse_log_level(value: str | None) -> LogLevel | None:
    """Normalise a severity name, returning ``None`` when it is not recognised."""

    if value is None:
        return None
    return _LEVEL_ALIASES.get(value.strip().lower())


@dataclass(slots=True)
class LaneConfig:
    """Settings for the execution substrate and the diagnostic sink.

    Work-item counts and the simulated delay are fixed; only the ambient
    knobs live here.
    """

    log_level: LogLevel = "off"
    max_workers: int | None = None

    @classmethod
    def from_env(cls) -> LaneConfig:
        """Load overrides from environment variables.

        Supported variables (all optional):

        ``FETCHLANE_LOG``
            Minimum severity: ``off``, ``error``, ``warn``, ``info``, ``debug``
            or ``trace``. Unset or unknown values keep diagnostics off.
        ``FETCHLANE_MAX_WORKERS``
            Positive integer sizing the blocking lane's worker pool.
        """

        def _parse_int(value: str | None) -> int | None:
            if value is None:
                return None
            try:
                parsed = int(value)
            except ValueError:
                return None
            return parsed if parsed > 0 else None

        env = os.environ

        log_level = parse_log_level(env.get("FETCHLANE_LOG")) or "off"
        max_workers = _parse_int(env.get("FETCHLANE_MAX_WORKERS"))

        return cls(log_level=log_level, max_workers=max_workers)
