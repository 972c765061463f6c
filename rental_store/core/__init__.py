"""Core infrastructure for the rental store."""

from .base_crud import BaseCollection, IndexSpec
from .database_types import UTCDateTime, enum_values_type
from .exceptions import (
    AuthenticationError,
    BusinessLogicError,
    DatabaseError,
    DuplicateKeyError,
    NotFoundError,
    PermissionError,
    RentalStoreException,
    StorageUnavailableError,
    ValidationError,
)
from .utils import generate_record_id, utc_now

__all__ = [
    "BaseCollection",
    "IndexSpec",
    "UTCDateTime",
    "enum_values_type",
    "RentalStoreException",
    "StorageUnavailableError",
    "DuplicateKeyError",
    "NotFoundError",
    "ValidationError",
    "BusinessLogicError",
    "PermissionError",
    "AuthenticationError",
    "DatabaseError",
    "generate_record_id",
    "utc_now",
]
