"""
Structured logging for the accommodation services.

Loggers accept keyword context next to the message:

    logger.warning("Repository save failed", entity="Gift", error="...")

The context travels on the record as ``extra_data`` and is rendered as a
JSON ``data`` object in production or as a ``(k=v | ...)`` suffix in
development.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Mapping

from accommodation_shared.config.settings import settings

# Chatty third-party loggers kept at WARNING
NOISY_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite", "asyncio")


def record_context(record: logging.LogRecord) -> Mapping[str, Any]:
    return getattr(record, "extra_data", None) or {}


class StructuredFormatter(logging.Formatter):
    """One JSON object per line, for log aggregation in production."""

    def __init__(self, include_source: bool | None = None):
        super().__init__()
        self.include_source = settings.debug if include_source is None else include_source

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = record_context(record)
        if context:
            payload["data"] = dict(context)

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        if self.include_source:
            payload["source"] = f"{record.filename}:{record.lineno} in {record.funcName}"

        return json.dumps(payload, default=str)


class DevelopmentFormatter(logging.Formatter):
    """Single readable line, level coloured when writing to a terminal."""

    LEVEL_COLOURS = {
        logging.DEBUG: "36",
        logging.INFO: "32",
        logging.WARNING: "33",
        logging.ERROR: "31",
        logging.CRITICAL: "35",
    }

    def __init__(self, use_colour: bool = True):
        super().__init__()
        self.use_colour = use_colour

    def _level(self, record: logging.LogRecord) -> str:
        label = f"{record.levelname:8}"
        code = self.LEVEL_COLOURS.get(record.levelno)
        if not self.use_colour or code is None:
            return label
        return f"\033[{code}m{label}\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        clock = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        line = f"[{clock}] {self._level(record)} {record.name}: {record.getMessage()}"

        context = record_context(record)
        if context:
            line += " (" + " | ".join(f"{k}={v}" for k, v in context.items()) + ")"

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)

        return line


class StructuredLogger(logging.Logger):
    """
    Logger whose level methods take keyword context.

    logger.info("Airport created", entity_id="a1")
    """

    def _log(
        self,
        level: int,
        msg: object,
        args: Any,
        exc_info: Any = None,
        extra: Mapping[str, object] | None = None,
        stack_info: bool = False,
        stacklevel: int = 1,
        **context: Any,
    ) -> None:
        merged = dict(extra or {})
        merged["extra_data"] = context or None
        super()._log(
            level,
            msg,
            args,
            exc_info=exc_info,
            extra=merged,
            stack_info=stack_info,
            stacklevel=stacklevel + 1,
        )


logging.setLoggerClass(StructuredLogger)


def setup_logging(level: int | None = None, json_output: bool | None = None) -> None:
    """
    Configure the root logger. Call once at startup.

    Defaults come from settings: DEBUG when ``debug`` is on, JSON output
    when ``environment`` is production.
    """
    if level is None:
        level = logging.DEBUG if settings.debug else logging.INFO
    if json_output is None:
        json_output = settings.environment == "production"

    handler = logging.StreamHandler(sys.stdout)
    if json_output:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(DevelopmentFormatter(use_colour=sys.stdout.isatty()))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> StructuredLogger:
    """
    Structured logger for a module.

    Usage:
        from accommodation_shared.config.logging import get_logger
        logger = get_logger(__name__)

        logger.info("Gift created", entity_id="g1")
    """
    return logging.getLogger(name)  # type: ignore[return-value]
