"""Local record store for a rental-property marketplace."""

from .core.exceptions import (
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
from .modules.accounts import Account, AccountRole, AuthService, SessionAccount
from .modules.listings import Listing, ListingStatus, PropertyType
from .modules.rental_requests import RentalRequest, RequestStatus
from .modules.session import SessionStore
from .store import RecordStore

__version__ = "0.1.0"

__all__ = [
    "RecordStore",
    "SessionStore",
    "AuthService",
    # Records
    "Account",
    "SessionAccount",
    "Listing",
    "RentalRequest",
    # Enums
    "AccountRole",
    "ListingStatus",
    "PropertyType",
    "RequestStatus",
    # Errors
    "RentalStoreException",
    "StorageUnavailableError",
    "DuplicateKeyError",
    "NotFoundError",
    "ValidationError",
    "BusinessLogicError",
    "PermissionError",
    "AuthenticationError",
    "DatabaseError",
]
