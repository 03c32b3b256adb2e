"""structlog + stdlib logging setup.

structlog events and foreign stdlib records (uvicorn, httpx) share one
``ProcessorFormatter``. Emission happens on a ``QueueListener`` thread so
the event loop never blocks on stream I/O.
"""

from __future__ import annotations

import atexit
import copy
import logging
import logging.config
import queue
import sys
from datetime import datetime, timezone
from logging.handlers import QueueHandler, QueueListener
from typing import Any, Optional

import structlog

from showflix.infrastructure.config.schema import AppConfig

log = structlog.get_logger(__name__)

# Loggers that keep their own level regardless of config.log_level.
_PINNED_LEVELS: dict[str, str] = {"httpx": "WARNING"}

BASE_LOGGING_CONFIG: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "default": {"class": "logging.StreamHandler", "stream": "ext://sys.stderr"},
        "access": {"class": "logging.StreamHandler", "stream": "ext://sys.stdout"},
    },
    "loggers": {
        "uvicorn": {"handlers": ["default"], "propagate": False},
        "uvicorn.error": {},
        "uvicorn.access": {"handlers": ["access"], "propagate": False},
        **{name: {"level": level} for name, level in _PINNED_LEVELS.items()},
    },
}

_QUEUE_LISTENER: Optional[QueueListener] = None


def _drop_color_message(_: Any, __: Any, event_dict: dict[str, Any]) -> dict[str, Any]:
    # uvicorn duplicates the message as "color_message"
    event_dict.pop("color_message", None)
    return event_dict


def _add_record_created_timestamp_utc(
    _: Any, __: Any, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Stamp foreign records with ``LogRecord.created``, not format time."""
    record = event_dict.get("_record")
    if isinstance(record, logging.LogRecord):
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        event_dict["timestamp"] = dt.isoformat().replace("+00:00", "Z")
    return event_dict


def _formatter_kwargs(config: AppConfig) -> dict[str, Any]:
    renderer: structlog.typing.Processor = (
        structlog.processors.JSONRenderer()
        if config.log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )
    return {
        "foreign_pre_chain": [
            _drop_color_message,
            structlog.contextvars.merge_contextvars,
            _add_record_created_timestamp_utc,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
        ],
        "processors": [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    }


def build_logging_config(config: AppConfig) -> dict[str, Any]:
    """uvicorn-compatible dictConfig rendering everything through structlog."""
    cfg = copy.deepcopy(BASE_LOGGING_CONFIG)
    cfg["formatters"] = {
        "structlog": {
            "()": structlog.stdlib.ProcessorFormatter,
            **_formatter_kwargs(config),
        }
    }
    for handler in cfg["handlers"].values():
        handler["formatter"] = "structlog"

    for name, logger_cfg in cfg["loggers"].items():
        if name not in _PINNED_LEVELS:
            logger_cfg["level"] = config.log_level
    cfg["root"] = {"handlers": ["default"], "level": config.log_level}
    return cfg


class _StructlogPreservingQueueHandler(QueueHandler):
    """QueueHandler that keeps structlog's dict ``record.msg`` intact."""

    def prepare(self, record: logging.LogRecord) -> logging.LogRecord:
        # The base implementation flattens msg via getMessage().
        return copy.copy(record)


class _LevelRangeFilter(logging.Filter):
    def __init__(self, min_level: int, max_level: int) -> None:
        super().__init__()
        self._min_level = min_level
        self._max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return self._min_level <= record.levelno <= self._max_level


def _stop_async_listener() -> None:
    global _QUEUE_LISTENER
    if _QUEUE_LISTENER is not None:
        try:
            _QUEUE_LISTENER.stop()
        finally:
            _QUEUE_LISTENER = None


def _stream_handler(
    stream: Any, formatter: logging.Formatter, min_level: int, max_level: int
) -> logging.Handler:
    handler = logging.StreamHandler(stream=stream)
    handler.setFormatter(formatter)
    handler.addFilter(_LevelRangeFilter(min_level, max_level))
    return handler


def _enable_async_logging(config: AppConfig) -> None:
    """Send every record through one queue; DEBUG..WARNING to stdout, ERROR+ to stderr."""
    global _QUEUE_LISTENER

    _stop_async_listener()

    formatter = structlog.stdlib.ProcessorFormatter(**_formatter_kwargs(config))
    records: queue.Queue[logging.LogRecord] = queue.Queue()

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_StructlogPreservingQueueHandler(records))
    root.setLevel(config.log_level)

    for name in list(logging.root.manager.loggerDict):
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.propagate = True

    _QUEUE_LISTENER = QueueListener(
        records,
        _stream_handler(sys.stdout, formatter, logging.NOTSET, logging.WARNING),
        _stream_handler(sys.stderr, formatter, logging.ERROR, logging.CRITICAL),
        respect_handler_level=True,
    )
    _QUEUE_LISTENER.start()
    atexit.register(_stop_async_listener)


def configure_logging(config: AppConfig) -> dict[str, Any]:
    """Configure structlog and stdlib logging.

    Returns the dictConfig handed to uvicorn; actual emission goes through
    the queue listener.
    """
    structlog.configure(
        processors=[
            _drop_color_message,
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    cfg = build_logging_config(config)
    logging.config.dictConfig(cfg)
    _enable_async_logging(config)

    log.info(
        "logging_configured", log_format=config.log_format, log_level=config.log_level
    )
    return cfg
