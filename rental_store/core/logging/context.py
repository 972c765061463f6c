"""
Operation tracking for logging correlation.
Provides operation ID generation and propagation through a context variable.
"""

import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

# Context variable for operation ID
_operation_id: ContextVar[str | None] = ContextVar("operation_id", default=None)


def generate_operation_id() -> str:
    """Generate a unique operation ID for store call tracking."""
    return str(uuid.uuid4())[:8]


def get_operation_id() -> str:
    """Get the current operation ID or generate a new one."""
    op_id = _operation_id.get()
    if op_id is None:
        op_id = generate_operation_id()
        _operation_id.set(op_id)
    return op_id


def set_operation_id(op_id: str) -> None:
    """Set the operation ID for the current context."""
    _operation_id.set(op_id)


@contextmanager
def operation_scope(op_id: str | None = None) -> Iterator[str]:
    """Run a block under its own operation ID, restoring the previous one after."""
    token = _operation_id.set(op_id or generate_operation_id())
    try:
        yield _operation_id.get()
    finally:
        _operation_id.reset(token)


class OperationIdFilter(logging.Filter):
    """Logging filter that adds operation ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Add operation ID to the log record."""
        if not getattr(record, "operation_id", None):
            record.operation_id = get_operation_id()
        return True
