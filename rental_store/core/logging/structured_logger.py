"""
JSON log records for the rental store.

Every record carries the operation id, its source location and the store's
service metadata, plus any ``extra`` fields such as collection and key.
"""

import logging
import sys
import traceback
from datetime import datetime
from typing import Any

from pythonjsonlogger.json import JsonFormatter

from .context import get_operation_id

SERVICE = {"name": "rental-store", "version": "0.1.0"}

# LogRecord attributes that only duplicate the fields added below
_DROPPED_FIELDS = ("msg", "args", "created", "msecs", "relativeCreated", "pathname")

JSON_FORMAT = "%(timestamp)s %(level)s %(operation_id)s %(message)s"
TEXT_FORMAT = "%(asctime)s | %(levelname)s | %(operation_id)s | %(name)s:%(lineno)d | %(message)s"


def resolve_level(log_level: str) -> int:
    """Map a level name such as "debug" to its logging constant."""
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")
    return level


class StructuredFormatter(JsonFormatter):
    """JSON formatter adding correlation, location and service fields."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record.update(
            timestamp=datetime.now().astimezone().isoformat(),
            operation_id=getattr(record, "operation_id", None) or get_operation_id(),
            level=record.levelname,
            logger_name=record.name,
            module=record.module,
            function=record.funcName,
            line=record.lineno,
            service=SERVICE,
        )

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc, tb = record.exc_info
            log_record["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc),
                "details": getattr(exc, "details", None),
                "stacktrace": traceback.format_exception(exc_type, exc, tb),
            }

        for field in _DROPPED_FIELDS:
            log_record.pop(field, None)


def build_formatter(use_json_format: bool) -> logging.Formatter:
    """JSON formatter, or a one-line text format for local runs."""
    if use_json_format:
        return StructuredFormatter(fmt=JSON_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S")
    return logging.Formatter(TEXT_FORMAT)


def setup_structured_logging(
    log_level: str = "INFO", use_json_format: bool = True
) -> logging.Logger:
    """
    Log the store's records to stdout.

    Args:
        log_level: Level name (DEBUG, INFO, WARNING, ERROR)
        use_json_format: Emit JSON lines instead of text

    Returns:
        The package's root logger
    """
    level = resolve_level(log_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(build_formatter(use_json_format))

    logger = logging.getLogger("rental_store")
    logger.setLevel(level)
    logger.handlers = [console_handler]

    # Engine chatter only when something is wrong
    for name in ("sqlalchemy", "aiosqlite"):
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger
