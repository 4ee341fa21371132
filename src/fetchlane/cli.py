"""Command line driver running both pipelines back to back."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from . import diagnostics
from .config import LaneConfig, LogLevel, parse_log_level
from .errors import LaneError
from .http import open_client
from .pipelines import analyze_pipeline, fetch_pipeline
from .runtime import Runtime

logger = logging.getLogger("fetchlane.cli")

Pipeline = Callable[[Runtime, httpx.AsyncClient], Awaitable[Any]]


def _log_level(value: str) -> LogLevel:
    level = parse_log_level(value)
    if level is None:
        raise argparse.ArgumentTypeError(f"unknown log level '{value}'")
    return level


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fetchlane",
        description=(
            "Fetch a slow endpoint concurrently, then fetch and analyze ten "
            "datasets with the analysis offloaded to worker threads."
        ),
    )
    parser.add_argument(
        "--log",
        type=_log_level,
        default=None,
        metavar="LEVEL",
        help="Minimum severity to print (off, error, warn, info, debug, trace). "
        "Overrides FETCHLANE_LOG.",
    )
    return parser


def run_program(
    runtime: Runtime, client: httpx.AsyncClient, pipeline: Pipeline
) -> bool:
    """Run one pipeline to completion and log its outcome."""

    try:
        runtime.block_on(pipeline(runtime, client))
    except LaneError as exc:
        logger.error("Error %s", exc)
        return False
    logger.info("Done")
    return True


def run_programs(runtime: Runtime, client: httpx.AsyncClient) -> list[bool]:
    outcomes: list[bool] = []

    logger.info("starting simple concurrent program")
    outcomes.append(run_program(runtime, client, fetch_pipeline))
    logger.info("finished concurrent program")

    logger.info("starting cpu intensive concurrent program")
    outcomes.append(run_program(runtime, client, analyze_pipeline))
    logger.info("finished concurrent program")

    return outcomes


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    diagnostics.process_start()
    config = LaneConfig.from_env()
    if args.log is not None:
        config.log_level = args.log
    diagnostics.configure(config.log_level)

    with Runtime(config=config) as runtime:
        client = open_client()
        try:
            run_programs(runtime, client)
        finally:
            runtime.block_on(client.aclose())
    # Pipeline failures are reported in the log, never in the exit status.
    return 0


__all__ = ["build_parser", "main", "run_program", "run_programs"]
