"""structlog on top of stdlib logging, shared with uvicorn.

Application code logs through ``structlog.get_logger``; uvicorn and httpx
log through stdlib. Both end up in the same ProcessorFormatter so every
line has one shape (console in dev/test, JSON in prod).
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
from typing import Any

import structlog
from uvicorn.config import LOGGING_CONFIG as UVICORN_LOGGING_CONFIG

from orionzb.infrastructure.config.schema import AppConfig

log = structlog.get_logger(__name__)


def _drop_color_message(_: Any, __: Any, event_dict: dict[str, Any]) -> dict[str, Any]:
    # uvicorn repeats the message with ANSI colours under this key.
    event_dict.pop("color_message", None)
    return event_dict


def _add_record_created_timestamp_utc(
    _: Any, __: Any, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Stamp stdlib records with their creation time, not formatting time."""
    record = event_dict.get("_record")
    if isinstance(record, logging.LogRecord):
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        event_dict["timestamp"] = created.isoformat().replace("+00:00", "Z")
    return event_dict


def _make_formatter_kwargs(config: AppConfig) -> dict[str, Any]:
    renderer: structlog.typing.Processor
    if config.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

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
    """Return uvicorn's dictConfig with its formatters replaced by structlog.

    The configured level is applied to the uvicorn loggers and to the root
    logger, which covers every other library.
    """
    cfg = copy.deepcopy(UVICORN_LOGGING_CONFIG)

    cfg["formatters"]["structlog"] = {
        "()": structlog.stdlib.ProcessorFormatter,
        **_make_formatter_kwargs(config),
    }
    for handler in cfg["handlers"].values():
        handler["formatter"] = "structlog"
    for logger in cfg["loggers"].values():
        logger["level"] = config.log_level
    cfg["root"] = {"handlers": ["default"], "level": config.log_level}
    return cfg


class _LevelRangeFilter(logging.Filter):
    def __init__(
        self, min_level: int = logging.NOTSET, max_level: int = logging.CRITICAL
    ) -> None:
        super().__init__()
        self._min_level = min_level
        self._max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return self._min_level <= record.levelno <= self._max_level


class _RecordQueueHandler(QueueHandler):
    """QueueHandler that enqueues the record as-is.

    The stock ``prepare`` renders ``msg`` to a string, which would lose the
    event dict structlog put there.
    """

    def prepare(self, record: logging.LogRecord) -> logging.LogRecord:
        return copy.copy(record)


class _QueueSink:
    """Background thread that owns stdout/stderr writes.

    DEBUG..WARNING go to stdout, ERROR and above to stderr.
    """

    def __init__(self) -> None:
        self._listener: QueueListener | None = None

    def start(self, config: AppConfig) -> None:
        self.stop()

        formatter = structlog.stdlib.ProcessorFormatter(**_make_formatter_kwargs(config))
        out = logging.StreamHandler(stream=sys.stdout)
        out.setFormatter(formatter)
        out.addFilter(_LevelRangeFilter(max_level=logging.WARNING))
        err = logging.StreamHandler(stream=sys.stderr)
        err.setFormatter(formatter)
        err.addFilter(_LevelRangeFilter(min_level=logging.ERROR))

        records: queue.Queue[logging.LogRecord] = queue.Queue()
        root = logging.getLogger()
        root.handlers.clear()
        root.addHandler(_RecordQueueHandler(records))
        root.setLevel(config.log_level)

        # Named loggers (uvicorn.*) got their own handlers from dictConfig;
        # funnel them through the root queue instead.
        for name in list(logging.root.manager.loggerDict):
            named = logging.getLogger(name)
            named.handlers.clear()
            named.propagate = True
            named.setLevel(config.log_level)

        self._listener = QueueListener(records, out, err, respect_handler_level=True)
        self._listener.start()

    def stop(self) -> None:
        if self._listener is None:
            return
        try:
            self._listener.stop()
        finally:
            self._listener = None


_sink = _QueueSink()
atexit.register(_sink.stop)


def configure_logging(config: AppConfig) -> dict[str, Any]:
    """Configure structlog and stdlib logging for the process.

    Returns the dictConfig to hand to ``uvicorn.run(log_config=...)``.
    Emission afterwards runs through the queue sink.
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
    _sink.start(config)

    log.info("logging_configured", log_format=config.log_format, log_level=config.log_level)
    return cfg
