from __future__ import annotations

import os
from unittest import mock

from fetchlane import LaneConfig
from fetchlane.config import parse_log_level


def test_lane_config_defaults() -> None:
    config = LaneConfig()
    assert config.log_level == "off"
    assert config.max_workers is None


def test_lane_config_from_env() -> None:
    with mock.patch.dict(
        os.environ,
        {
            "FETCHLANE_LOG": "INFO",
            "FETCHLANE_MAX_WORKERS": "3",
        },
        clear=True,
    ):
        config = LaneConfig.from_env()

    assert config.log_level == "info"
    assert config.max_workers == 3


def test_lane_config_from_env_unset() -> None:
    with mock.patch.dict(os.environ, {}, clear=True):
        config = LaneConfig.from_env()

    assert config.log_level == "off"
    assert config.max_workers is None


def test_lane_config_from_env_invalid_values() -> None:
    with mock.patch.dict(
        os.environ,
        {
            "FETCHLANE_LOG": "chatty",
            "FETCHLANE_MAX_WORKERS": "bogus",
        },
        clear=True,
    ):
        config = LaneConfig.from_env()

    assert config.log_level == "off"
    assert config.max_workers is None


def test_lane_config_rejects_zero_workers() -> None:
    with mock.patch.dict(os.environ, {"FETCHLANE_MAX_WORKERS": "0"}, clear=True):
        assert LaneConfig.from_env().max_workers is None


def test_parse_log_level_aliases() -> None:
    assert parse_log_level("warning") == "warn"
    assert parse_log_level(" Trace ") == "trace"
    assert parse_log_level(None) is None
    assert parse_log_level("loud") is None
