"""
Queue-backed log output for the rental store.

Store coroutines only put records on a queue; a listener thread writes them
to stdout and to a size-rotated log file.
"""

import logging
import os
import queue
import sys
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler

from .structured_logger import build_formatter, resolve_level

# Library loggers routed through the queue, capped at WARNING
LIBRARY_LOGGERS = ("sqlalchemy", "aiosqlite", "passlib")


class FileLogger:
    """Console and rotating-file output behind a single QueueHandler."""

    def __init__(
        self,
        log_file_path: str = "logs/rental_store.log",
        max_bytes: int = 50 * 1024 * 1024,
        backup_count: int = 5,
        log_level: str = "INFO",
        use_json_format: bool = True,
    ):
        self.log_file_path = log_file_path
        self.max_bytes = max_bytes
        self.backup_count = backup_count
        self.level = resolve_level(log_level)
        self.use_json_format = use_json_format

        self.queue_handler = QueueHandler(queue.Queue())
        self.queue_handler.setLevel(self.level)
        self._outputs: list[logging.Handler] = []
        self._listener: QueueListener | None = None

    @property
    def is_running(self) -> bool:
        return self._listener is not None

    def _open_outputs(self) -> list[logging.Handler]:
        log_dir = os.path.dirname(self.log_file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        outputs = [
            logging.StreamHandler(sys.stdout),
            RotatingFileHandler(
                self.log_file_path,
                maxBytes=self.max_bytes,
                backupCount=self.backup_count,
                encoding="utf-8",
            ),
        ]
        formatter = build_formatter(self.use_json_format)
        for output in outputs:
            output.setLevel(self.level)
            output.setFormatter(formatter)
        return outputs

    def start(self) -> None:
        """Open the outputs and start the listener thread.

        Raises:
            OSError: If the log file cannot be opened
        """
        if self.is_running:
            return
        self._outputs = self._open_outputs()
        self._listener = QueueListener(
            self.queue_handler.queue, *self._outputs, respect_handler_level=True
        )
        self._listener.start()

    def attach(self) -> None:
        """Route the store's loggers and the library loggers into the queue."""
        levels = {"rental_store": self.level}
        levels.update((name, logging.WARNING) for name in LIBRARY_LOGGERS)

        for name, level in levels.items():
            target = logging.getLogger(name)
            target.handlers = [self.queue_handler]
            target.setLevel(level)
            target.propagate = False

    def stop(self) -> None:
        """Flush queued records, close the outputs and detach from the loggers."""
        if self._listener is not None:
            self._listener.stop()
            self._listener = None

        for output in self._outputs:
            output.close()
        self._outputs = []

        for name in ("rental_store", *LIBRARY_LOGGERS):
            target = logging.getLogger(name)
            if self.queue_handler in target.handlers:
                target.removeHandler(self.queue_handler)
                target.propagate = True


def setup_file_logging(
    log_file_path: str = "logs/rental_store.log",
    log_level: str = "INFO",
    use_json_format: bool = True,
    max_bytes: int = 50 * 1024 * 1024,
    backup_count: int = 5,
) -> FileLogger | None:
    """
    Start queue-based console and file logging.

    Returns:
        The running FileLogger, or None if the log file cannot be opened
    """
    file_logger = FileLogger(
        log_file_path=log_file_path,
        max_bytes=max_bytes,
        backup_count=backup_count,
        log_level=log_level,
        use_json_format=use_json_format,
    )
    try:
        file_logger.start()
    except OSError as e:
        logging.getLogger("rental_store").error(
            f"Failed to set up file logging at {log_file_path}: {e}"
        )
        return None

    file_logger.attach()
    return file_logger
