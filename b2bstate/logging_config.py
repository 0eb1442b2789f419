"""
Structured logging configuration for b2bstate.

Provides JSON-formatted logs with trace_id support for correlating the
records written while one action is dispatched or one journal replayed.

Environment Variables:
    B2BSTATE_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR) - default: INFO
    B2BSTATE_LOG_FORMAT: Log format (json, text) - default: json

Usage:
    from b2bstate.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__, trace_id="cart-42")
    logger.info("Replaying journal", extra={"path": "/tmp/b2bstate/actions.log"})
"""

import logging
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger

from .config import Settings

JSON_FIELDS = "%(asctime)s %(name)s %(levelname)s %(message)s %(trace_id)s"
TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s [trace_id=%(trace_id)s]"


def build_formatter(log_format: str) -> logging.Formatter:
    if log_format == "json":
        return jsonlogger.JsonFormatter(
            JSON_FIELDS,
            rename_fields={
                "asctime": "timestamp",
                "name": "logger",
                "levelname": "level",
            },
        )
    return logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def setup_logging(settings: Optional[Settings] = None, stream=None) -> logging.Handler:
    """
    Configure root logger with structured logging.

    Settings default to Settings.from_env(). Existing root handlers are
    replaced by one stream handler carrying a TraceIDFilter, which is
    returned so callers can detach it.
    """
    settings = settings or Settings.from_env()
    level = getattr(logging, settings.log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(build_formatter(settings.log_format))
    # Filters on the handler also see records propagated from child loggers
    handler.addFilter(TraceIDFilter())
    root_logger.addHandler(handler)
    return handler


def get_logger(name: str, trace_id: Optional[str] = None) -> logging.LoggerAdapter:
    """
    Get a logger with optional trace_id for correlation.

    Example:
        logger = get_logger(__name__, trace_id="cart-42")
        logger.info("Dispatching action")
        # Output (JSON): {"timestamp": "...", "level": "INFO", "message": "Dispatching action", "trace_id": "cart-42"}
    """
    logger = logging.getLogger(name)
    return logging.LoggerAdapter(logger, {"trace_id": trace_id or "N/A"})


class TraceIDFilter(logging.Filter):
    """
    Logging filter that adds trace_id to all log records.

    Ensures all logs have a trace_id field, even if not set via LoggerAdapter.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "trace_id"):
            record.trace_id = "N/A"  # type: ignore
        return True
