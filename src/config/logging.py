"""Structured logging configuration using structlog."""
import logging
import sys
from typing import Any, Optional

import structlog
from pythonjsonlogger import jsonlogger

from src.config.settings import LoggingSettings, settings

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Libraries whose request chatter drowns out booking events
QUIET_LOGGERS = ("httpcore", "httpx")


def add_booking_id_prefix(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Prefix the event with [BOOKING_ID] when a booking id is bound.

    Runs before the renderer so the prefix shows up in JSON and console output.
    """
    booking_id = event_dict.get("booking_id")
    if booking_id:
        event_dict["event"] = f"[{booking_id}] {event_dict.get('event', '')}"
    return event_dict


def _build_handler(logging_settings: LoggingSettings) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    if logging_settings.format == "json":
        handler.setFormatter(jsonlogger.JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    handler.setLevel(logging_settings.level)
    return handler


def _renderer(logging_settings: LoggingSettings) -> Any:
    if logging_settings.format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def configure_logging(logging_settings: Optional[LoggingSettings] = None) -> None:
    """Route structlog through the stdlib root logger.

    Args:
        logging_settings: Level and output format, LOG_* settings when omitted
    """
    logging_settings = logging_settings or settings.logging

    root_logger = logging.getLogger()
    root_logger.setLevel(logging_settings.level)
    root_logger.handlers.clear()
    root_logger.addHandler(_build_handler(logging_settings))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            add_booking_id_prefix,
            _renderer(logging_settings),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger for the given module name."""
    return structlog.get_logger(name)
