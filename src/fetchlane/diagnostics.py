"""Diagnostic sink: stdlib logging with an elapsed-time prefix.

Every entry renders as ``"<seconds>.<millis> [<LEVEL>] - <message>"`` where the
seconds are measured from a start instant captured once per process.
"""

from __future__ import annotations

import logging
import sys
import time
from typing import TextIO

from .config import LogLevel

LOGGER_NAME = "fetchlane"

# ``off`` sits above CRITICAL so nothing passes the threshold.
_OFF = logging.CRITICAL + 10
TRACE = 5

_THRESHOLDS: dict[str, int] = {
    "off": _OFF,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": TRACE,
}

_LABELS: dict[int, str] = {logging.WARNING: "WARN"}

_START: float | None = None
_HANDLER: logging.Handler | None = None

logging.addLevelName(TRACE, "TRACE")


def process_start() -> float:
    """Return the captured start instant, capturing it on first use."""

    global _START
    if _START is None:
        _START = time.time()
    return _START


class ElapsedFormatter(logging.Formatter):
    """Prefix each record with the seconds elapsed since *start*.

    The elapsed time is taken from ``record.created``, so *start* must be a
    :func:`time.time` instant.
    """

    def __init__(self, start: float | None = None) -> None:
        super().__init__()
        self._start = start if start is not None else process_start()

    def format(self, record: logging.LogRecord) -> str:
        seconds = record.created - self._start
        label = _LABELS.get(record.levelno, record.levelname)
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return f"{seconds:.3f} [{label}] - {message}"


def threshold(level: LogLevel) -> int:
    return _THRESHOLDS.get(level, _OFF)


def configure(
    level: LogLevel = "off",
    *,
    stream: TextIO | None = None,
    start: float | None = None,
) -> logging.Logger:
    """Install the diagnostic handler on the ``fetchlane`` logger.

    Calling it again replaces the handler installed previously, so tests and
    the CLI can re-target the sink without stacking duplicates.
    """

    global _HANDLER
    reset()
    logger = logging.getLogger(LOGGER_NAME)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(ElapsedFormatter(start))
    logger.addHandler(handler)
    logger.setLevel(threshold(level))
    _HANDLER = handler
    return logger


def reset() -> None:
    """Remove the installed handler and restore the logger's default level."""

    global _HANDLER
    logger = logging.getLogger(LOGGER_NAME)
    if _HANDLER is not None:
        logger.removeHandler(_HANDLER)
        _HANDLER.close()
        _HANDLER = None
    logger.setLevel(logging.NOTSET)


__all__ = ["ElapsedFormatter", "LOGGER_NAME", "TRACE", "configure", "process_start", "reset", "threshold"]
