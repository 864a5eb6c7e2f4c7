"""Tests for the structlog/stdlib logging configuration builder."""

from __future__ import annotations

import logging

import structlog
from uvicorn.config import LOGGING_CONFIG

from orionzb.infrastructure.config import AppConfig
from orionzb.infrastructure.logging.setup import (
    _add_record_created_timestamp_utc,
    _drop_color_message,
    _LevelRangeFilter,
    build_logging_config,
)


def _config(**overrides) -> AppConfig:
    data = {"orionoid": {"token": "T"}, "newznab": {"api_key": "k"}}
    data.update(overrides)
    return AppConfig.model_validate(data)


class TestBuildLoggingConfig:
    def test_level_applies_to_all_loggers(self) -> None:
        cfg = build_logging_config(_config(log_level="DEBUG"))

        assert cfg["root"]["level"] == "DEBUG"
        assert {c["level"] for c in cfg["loggers"].values()} == {"DEBUG"}

    def test_handlers_use_structlog_formatter(self) -> None:
        cfg = build_logging_config(_config())

        assert cfg["handlers"]["default"]["formatter"] == "structlog"
        assert cfg["handlers"]["access"]["formatter"] == "structlog"
        assert cfg["formatters"]["structlog"]["()"] is structlog.stdlib.ProcessorFormatter

    def test_json_renderer_in_prod(self) -> None:
        cfg = build_logging_config(_config(environment="prod"))
        renderer = cfg["formatters"]["structlog"]["processors"][-1]
        assert isinstance(renderer, structlog.processors.JSONRenderer)

    def test_console_renderer_in_dev(self) -> None:
        cfg = build_logging_config(_config(environment="dev"))
        renderer = cfg["formatters"]["structlog"]["processors"][-1]
        assert isinstance(renderer, structlog.dev.ConsoleRenderer)

    def test_uvicorn_config_not_mutated(self) -> None:
        build_logging_config(_config(log_level="ERROR"))
        assert LOGGING_CONFIG["loggers"]["uvicorn"]["level"] == "INFO"
        assert "structlog" not in LOGGING_CONFIG["formatters"]


class TestProcessors:
    def test_drop_color_message(self) -> None:
        event = {"event": "x", "color_message": "\x1b[32mx"}
        assert _drop_color_message(None, None, event) == {"event": "x"}

    def test_record_timestamp_is_utc(self) -> None:
        record = logging.LogRecord("n", logging.INFO, __file__, 1, "msg", None, None)
        record.created = 0.0

        event = _add_record_created_timestamp_utc(None, None, {"_record": record})

        assert event["timestamp"] == "1970-01-01T00:00:00Z"

    def test_level_range_filter(self) -> None:
        flt = _LevelRangeFilter(max_level=logging.WARNING)
        info = logging.LogRecord("n", logging.INFO, __file__, 1, "m", None, None)
        error = logging.LogRecord("n", logging.ERROR, __file__, 1, "m", None, None)

        assert flt.filter(info)
        assert not flt.filter(error)
