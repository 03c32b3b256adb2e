"""Tests for the structlog/dictConfig logging setup."""

from __future__ import annotations

import logging

import structlog

from showflix.infrastructure.config.schema import AppConfig
from showflix.infrastructure.logging.setup import (
    _add_record_created_timestamp_utc,
    _drop_color_message,
    _LevelRangeFilter,
    _StructlogPreservingQueueHandler,
    build_logging_config,
)


def _record(level: int = logging.INFO, msg: object = "hello") -> logging.LogRecord:
    return logging.LogRecord("test", level, __file__, 1, msg, None, None)


class TestBuildLoggingConfig:
    def test_level_applied_to_uvicorn_loggers(self) -> None:
        cfg = build_logging_config(AppConfig(log_level="DEBUG"))

        assert cfg["loggers"]["uvicorn"]["level"] == "DEBUG"
        assert cfg["loggers"]["uvicorn.access"]["level"] == "DEBUG"
        assert cfg["root"]["level"] == "DEBUG"

    def test_httpx_stays_at_warning(self) -> None:
        cfg = build_logging_config(AppConfig(log_level="DEBUG"))

        assert cfg["loggers"]["httpx"]["level"] == "WARNING"

    def test_handlers_use_structlog_formatter(self) -> None:
        cfg = build_logging_config(AppConfig())

        assert cfg["handlers"]["default"]["formatter"] == "structlog"
        assert cfg["handlers"]["access"]["formatter"] == "structlog"
        assert cfg["formatters"]["structlog"]["()"] is (
            structlog.stdlib.ProcessorFormatter
        )

    def test_json_renderer_in_prod(self) -> None:
        cfg = build_logging_config(AppConfig(environment="prod"))

        renderer = cfg["formatters"]["structlog"]["processors"][-1]
        assert isinstance(renderer, structlog.processors.JSONRenderer)

    def test_console_renderer_in_dev(self) -> None:
        cfg = build_logging_config(AppConfig(environment="dev"))

        renderer = cfg["formatters"]["structlog"]["processors"][-1]
        assert isinstance(renderer, structlog.dev.ConsoleRenderer)

    def test_base_config_not_mutated(self) -> None:
        build_logging_config(AppConfig(log_level="ERROR"))
        cfg = build_logging_config(AppConfig(log_level="INFO"))

        assert cfg["loggers"]["uvicorn"]["level"] == "INFO"


class TestProcessors:
    def test_drop_color_message(self) -> None:
        event = {"event": "x", "color_message": "\x1b[31mx"}

        assert _drop_color_message(None, None, event) == {"event": "x"}

    def test_record_timestamp_from_created(self) -> None:
        record = _record()
        record.created = 0.0

        event = _add_record_created_timestamp_utc(None, None, {"_record": record})

        assert event["timestamp"] == "1970-01-01T00:00:00Z"

    def test_no_record_no_timestamp(self) -> None:
        assert _add_record_created_timestamp_utc(None, None, {}) == {}


class TestQueueHelpers:
    def test_level_range_filter(self) -> None:
        f = _LevelRangeFilter(logging.NOTSET, logging.WARNING)

        assert f.filter(_record(logging.INFO))
        assert f.filter(_record(logging.WARNING))
        assert not f.filter(_record(logging.ERROR))

    def test_prepare_keeps_dict_msg(self) -> None:
        import queue

        handler = _StructlogPreservingQueueHandler(queue.Queue())
        msg = {"event": "catalog_listed", "category": "Tamil"}
        record = _record(msg=msg)

        prepared = handler.prepare(record)

        assert prepared is not record
        assert prepared.msg is msg
