"""The two orchestration pipelines built on the execution substrate.

``fetch_pipeline`` starts its fetches eagerly and then joins them one at a
time, stopping at the first failure. ``analyze_pipeline`` fans in every
fetch-and-analyze chain before looking at any result, then scans the
outcomes in order and stops at the first failure. Work left behind by an
early stop is detached and keeps running.
"""

from __future__ import annotations

import logging

import httpx

from .analysis import Aggregate, AnalysisResult, aggregate, analyze
from .http import decode_text, fetch, slowly
from .runtime import Runtime, TaskHandle, join_all

logger = logging.getLogger(__name__)

FETCH_COUNT = 2
ANALYZE_COUNT = 10


async def request(label: int, client: httpx.AsyncClient) -> None:
    """Fetch the slow endpoint once and discard the body."""

    await fetch(client, slowly())
    logger.info("got response %d", label)


async def fetch_pipeline(runtime: Runtime, client: httpx.AsyncClient) -> None:
    handles: list[TaskHandle[None]] = [
        runtime.spawn_async(request(label, client), name=f"request-{label}")
        for label in range(1, FETCH_COUNT + 1)
    ]
    # Sequential join: a failure here leaves the later handles detached.
    for handle in handles:
        await handle


async def get_and_analyze(
    label: int, runtime: Runtime, client: httpx.AsyncClient
) -> AnalysisResult:
    """Fetch a dataset, then analyze it on the blocking lane."""

    response = await fetch(client, slowly())
    logger.info("Dataset %d", label)

    text = decode_text(response)

    # The loop stays free for the other chains while the bits are counted.
    result = await runtime.spawn_blocking(analyze, text)
    logger.info("Processed %d", label)
    return result


async def analyze_pipeline(runtime: Runtime, client: httpx.AsyncClient) -> Aggregate:
    handles = [
        runtime.spawn_async(get_and_analyze(label, runtime, client), name=f"analyze-{label}")
        for label in range(1, ANALYZE_COUNT + 1)
    ]

    outcomes = await join_all(handles)

    results = [outcome.unwrap() for outcome in outcomes]
    totals = aggregate(results)

    logger.info("Ratio of ones/zeros: %.2f", totals.ratio)
    return totals


__all__ = [
    "ANALYZE_COUNT",
    "FETCH_COUNT",
    "analyze_pipeline",
    "fetch_pipeline",
    "get_and_analyze",
    "request",
]
