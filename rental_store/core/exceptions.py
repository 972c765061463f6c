"""
Custom exception classes for consistent error handling across the store
and the modules built on it.
"""

from typing import Any


class RentalStoreException(Exception):
    """Base exception for all rental store errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class StorageUnavailableError(RentalStoreException):
    """Raised when the underlying storage engine cannot be opened or used."""

    def __init__(
        self,
        message: str = "Storage engine is unavailable",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)


class DuplicateKeyError(RentalStoreException):
    """Raised when a write collides with an existing id or unique index value."""

    def __init__(
        self,
        collection: str,
        key: Any,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        message = message or f"{collection} record with key '{key}' already exists"
        super().__init__(message, details)
        self.collection = collection
        self.key = key


class ValidationError(RentalStoreException):
    """Raised when data validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        details: dict[str, Any] | None = None,
    ):
        if field:
            full_message = f"Validation error for field '{field}': {message}"
        else:
            full_message = message
        super().__init__(full_message, details)
        self.field = field
        self.value = value


class BusinessLogicError(RentalStoreException):
    """Raised when business logic constraints are violated."""

    pass


class PermissionError(RentalStoreException):
    """Raised when an account lacks permission to perform an action."""

    def __init__(
        self, action: str, resource_type: str, details: dict[str, Any] | None = None
    ):
        message = f"Permission denied: cannot {action} {resource_type}"
        super().__init__(message, details)
        self.action = action
        self.resource_type = resource_type


class DatabaseError(RentalStoreException):
    """Raised when an engine-level operation fails."""

    pass


class AuthenticationError(RentalStoreException):
    """Raised when authentication fails."""

    def __init__(
        self,
        message: str = "Authentication failed",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)


class NotFoundError(RentalStoreException):
    """Raised when a required record is not found."""

    def __init__(
        self, message: str = "Record not found", details: dict[str, Any] | None = None
    ):
        super().__init__(message, details)
