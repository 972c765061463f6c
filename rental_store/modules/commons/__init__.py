"""Common schemas and utilities shared across modules."""

from .schemas import StoreRecord, UTCDatetime

__all__ = [
    "StoreRecord",
    "UTCDatetime",
]
