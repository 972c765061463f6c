"""Accounts module: the users collection, credentials and sessions."""

from .crud import AccountCollection
from .models import AccountModel, AccountRole
from .schemas import Account, AccountProfileUpdate, AccountRegister, SessionAccount
from .services import AuthService, get_account_or_raise, require_role

__all__ = [
    # Models
    "AccountModel",
    # Enums
    "AccountRole",
    # Schemas
    "Account",
    "SessionAccount",
    "AccountRegister",
    "AccountProfileUpdate",
    # Collection
    "AccountCollection",
    # Services
    "AuthService",
    "get_account_or_raise",
    "require_role",
]
