"""Logging infrastructure for the rental store."""

from .context import (
    OperationIdFilter,
    get_operation_id,
    operation_scope,
    set_operation_id,
)
from .file_logger import FileLogger, setup_file_logging
from .logger_config import get_logger, setup_logging, shutdown_logging
from .structured_logger import StructuredFormatter

__all__ = [
    "FileLogger",
    "setup_file_logging",
    "get_logger",
    "setup_logging",
    "shutdown_logging",
    "StructuredFormatter",
    "OperationIdFilter",
    "get_operation_id",
    "set_operation_id",
    "operation_scope",
]
