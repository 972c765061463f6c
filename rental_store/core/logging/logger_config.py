"""
Logging setup for the rental store.

Omitted arguments to setup_logging fall back to the LOG_* settings.
"""

import logging

from ...config import settings
from .context import OperationIdFilter
from .file_logger import FileLogger, setup_file_logging
from .structured_logger import setup_structured_logging


class LoggingConfig:
    """Owns the handlers installed by setup_logging until shutdown."""

    def __init__(self):
        self.file_logger: FileLogger | None = None
        self.operation_filter = OperationIdFilter()
        self._is_configured = False

    @property
    def is_configured(self) -> bool:
        return self._is_configured

    def setup(
        self,
        log_to_file: bool,
        log_level: str,
        log_file_path: str,
        use_json_format: bool,
        max_bytes: int,
        backup_count: int,
    ) -> logging.Logger:
        """
        Install handlers once; later calls return the configured logger.

        File logging that cannot be opened falls back to stdout.
        """
        if self._is_configured:
            return get_logger()

        if log_to_file:
            self.file_logger = setup_file_logging(
                log_file_path=log_file_path,
                log_level=log_level,
                use_json_format=use_json_format,
                max_bytes=max_bytes,
                backup_count=backup_count,
            )

        if self.file_logger:
            self.file_logger.queue_handler.addFilter(self.operation_filter)
        else:
            logger = setup_structured_logging(log_level, use_json_format)
            for handler in logger.handlers:
                handler.addFilter(self.operation_filter)

        self._is_configured = True
        main_logger = get_logger()
        main_logger.debug(
            "Logging configured",
            extra={"log_file": self.file_logger.log_file_path if self.file_logger else None},
        )
        return main_logger

    def shutdown(self) -> None:
        """Flush and detach file logging; setup may run again afterwards."""
        if self.file_logger:
            self.file_logger.stop()
            self.file_logger = None
        self._is_configured = False


# Global logging configuration instance
_logging_config = LoggingConfig()


def setup_logging(
    log_to_file: bool | None = None,
    log_level: str | None = None,
    log_file_path: str | None = None,
    use_json_format: bool | None = None,
) -> logging.Logger:
    """
    Set up logging for the store.

    Args:
        log_to_file: Enable the rotating log file (LOG_TO_FILE)
        log_level: Level name (LOG_LEVEL)
        log_file_path: Log file location (LOG_FILE_PATH)
        use_json_format: JSON lines rather than text (LOG_FORMAT=json)

    Returns:
        The package's root logger
    """
    if use_json_format is None:
        use_json_format = settings.log_format.lower() == "json"

    return _logging_config.setup(
        log_to_file=settings.log_to_file if log_to_file is None else log_to_file,
        log_level=log_level or settings.log_level,
        log_file_path=log_file_path or settings.log_file_path,
        use_json_format=use_json_format,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger under the rental_store namespace."""
    if not name:
        return logging.getLogger("rental_store")
    if name == "rental_store" or name.startswith("rental_store."):
        return logging.getLogger(name)
    return logging.getLogger(f"rental_store.{name}")


def shutdown_logging() -> None:
    """Flush queued records and release log files."""
    _logging_config.shutdown()
