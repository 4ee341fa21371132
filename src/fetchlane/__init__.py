"""Concurrent fetch-and-analyze pipelines over an async lane and a blocking lane.

`fetchlane` runs network fetches as asyncio tasks and hands CPU-heavy
analysis to a pool of worker threads so the event loop never stalls. See
individual modules for details.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .analysis import Aggregate, AnalysisResult, aggregate, analyze
from .capabilities import RuntimeCapabilities, detect_capabilities
from .config import LaneConfig
from .errors import (
    DecodeError,
    FetchError,
    HandleConsumedError,
    LaneError,
    NetworkError,
    StatusError,
    SubstrateError,
)
from .pipelines import analyze_pipeline, fetch_pipeline, get_and_analyze, request
from .runtime import Outcome, Runtime, TaskHandle, join_all

__all__ = [
    "Aggregate",
    "AnalysisResult",
    "DecodeError",
    "FetchError",
    "HandleConsumedError",
    "LaneConfig",
    "LaneError",
    "NetworkError",
    "Outcome",
    "Runtime",
    "RuntimeCapabilities",
    "StatusError",
    "SubstrateError",
    "TaskHandle",
    "aggregate",
    "analyze",
    "analyze_pipeline",
    "detect_capabilities",
    "fetch_pipeline",
    "get_and_analyze",
    "join_all",
    "request",
]

try:
    __version__ = version("fetchlane")
except PackageNotFoundError:  # pragma: no cover - during local dev
    __version__ = "0.0.0"
