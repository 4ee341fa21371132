from __future__ import annotations

import io
import logging
import re
import time

from fetchlane import diagnostics

ENTRY = re.compile(r"^\d+\.\d{3} \[(?P<level>[A-Z]+)\] - (?P<message>.*)$")


def test_entries_carry_elapsed_prefix() -> None:
    stream = io.StringIO()
    logger = diagnostics.configure("info", stream=stream)
    logger.info("got response %d", 1)
    logger.error("Error %s", "boom")

    lines = stream.getvalue().splitlines()
    assert len(lines) == 2
    first, second = (ENTRY.match(line) for line in lines)
    assert first is not None and second is not None
    assert first.group("level") == "INFO"
    assert first.group("message") == "got response 1"
    assert second.group("level") == "ERROR"
    assert second.group("message") == "Error boom"


def test_elapsed_measured_from_start() -> None:
    stream = io.StringIO()
    logger = diagnostics.configure("info", stream=stream, start=time.time() - 2.5)
    logger.info("late")
    seconds = float(stream.getvalue().split(" ", 1)[0])
    assert 2.5 <= seconds < 5.0


def test_elapsed_taken_when_the_record_is_created() -> None:
    start = 1_000.0
    formatter = diagnostics.ElapsedFormatter(start)
    record = logging.LogRecord(
        "fetchlane", logging.WARNING, __file__, 1, "slow %s", ("disk",), None
    )
    record.created = start + 1.234
    assert formatter.format(record) == "1.234 [WARN] - slow disk"


def test_warnings_render_short_label() -> None:
    stream = io.StringIO()
    logger = diagnostics.configure("warn", stream=stream)
    logger.info("skipped")
    logger.warning("careful")
    assert stream.getvalue().endswith("[WARN] - careful\n")
    assert "WARNING" not in stream.getvalue()


def test_off_suppresses_everything() -> None:
    stream = io.StringIO()
    logger = diagnostics.configure("off", stream=stream)
    logger.error("hidden")
    logging.getLogger("fetchlane.pipelines").critical("hidden too")
    assert stream.getvalue() == ""


def test_threshold_filters_lower_severities() -> None:
    stream = io.StringIO()
    logger = diagnostics.configure("error", stream=stream)
    logger.info("skipped")
    logger.error("kept")
    assert "skipped" not in stream.getvalue()
    assert "[ERROR] - kept" in stream.getvalue()


def test_child_loggers_share_the_sink() -> None:
    stream = io.StringIO()
    diagnostics.configure("debug", stream=stream)
    logging.getLogger("fetchlane.runtime").debug("spawned")
    assert "[DEBUG] - spawned" in stream.getvalue()


def test_reconfigure_replaces_handler() -> None:
    first = io.StringIO()
    second = io.StringIO()
    diagnostics.configure("info", stream=first)
    logger = diagnostics.configure("info", stream=second)
    logger.info("once")
    assert first.getvalue() == ""
    assert second.getvalue().count("once") == 1


def test_process_start_is_captured_once() -> None:
    assert diagnostics.process_start() == diagnostics.process_start()


def test_threshold_mapping() -> None:
    assert diagnostics.threshold("trace") == diagnostics.TRACE
    assert diagnostics.threshold("warn") == logging.WARNING
    assert diagnostics.threshold("off") > logging.CRITICAL
