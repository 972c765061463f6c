"""Authentication and profile business logic."""

from typing import TYPE_CHECKING

import pydantic

from ...core.exceptions import (
    AuthenticationError,
    DuplicateKeyError,
    NotFoundError,
    PermissionError,
    ValidationError,
)
from ...core.logging import get_logger
from ...core.utils import generate_record_id
from .models import AccountRole
from .password_service import hash_password, verify_password
from .schemas import Account, AccountBase, AccountProfileUpdate, AccountRegister, SessionAccount

if TYPE_CHECKING:
    from ...store import RecordStore
    from ..session.session_store import SessionStore

logger = get_logger(__name__)


def require_role(account: AccountBase | None, *allowed_roles: AccountRole | str) -> AccountBase:
    """Role gate for operations restricted to some account roles.

    Raises:
        AuthenticationError: If there is no account
        PermissionError: If the account's role is not allowed
    """
    if account is None:
        raise AuthenticationError("Login required")
    role_values = {AccountRole(r).value for r in allowed_roles}
    if account.role.value not in role_values:
        raise PermissionError(
            "access",
            f"{'/'.join(sorted(role_values))} area",
            details={"role": account.role.value},
        )
    return account


def _validate(schema: type[pydantic.BaseModel], **data) -> pydantic.BaseModel:
    try:
        return schema(**data)
    except pydantic.ValidationError as e:
        raise ValidationError(
            f"Invalid {schema.__name__} data: {e.error_count()} error(s)",
            details={"errors": e.errors(include_url=False, include_context=False)},
        ) from e


async def get_account_or_raise(store: "RecordStore", account_id: str) -> Account:
    """Get an account that must exist."""
    account = await store.accounts.get(account_id)
    if account is None:
        raise NotFoundError(f"Account with ID {account_id} not found")
    return account


class AuthService:
    """Login, registration and profile edits against the users collection.

    The session store is injected so callers decide its lifecycle.
    """

    def __init__(self, store: "RecordStore", sessions: "SessionStore"):
        self.store = store
        self.sessions = sessions

    def current_account(self) -> SessionAccount | None:
        """Get the logged-in account, if any."""
        return self.sessions.get()

    async def register(
        self,
        email: str,
        password: str,
        display_name: str,
        role: AccountRole | str = AccountRole.TENANT,
        phone: str | None = None,
    ) -> SessionAccount:
        """Register an account and start its session.

        Raises:
            DuplicateKeyError: If the email is already registered
        """
        data = _validate(
            AccountRegister,
            email=email,
            password=password,
            display_name=display_name,
            role=role,
            phone=phone,
        )

        existing = await self.store.accounts.get_by_email(data.email)
        if existing:
            raise DuplicateKeyError(
                "users", data.email, message="Email already registered"
            )

        account = Account(
            id=generate_record_id("user"),
            email=data.email,
            password_hash=hash_password(data.password),
            display_name=data.display_name,
            role=data.role,
            phone=data.phone,
        )
        await self.store.accounts.add(account)
        logger.info(
            "Account registered",
            extra={"account_id": account.id, "role": account.role.value},
        )
        return await self.sessions.set(account)

    async def login(self, email: str, password: str) -> SessionAccount:
        """Authenticate by email and password and start a session.

        Raises:
            AuthenticationError: If the credentials are wrong or the account is blocked
        """
        account = await self.store.accounts.get_by_email(email)
        if account is None or not verify_password(password, account.password_hash):
            logger.info("Login rejected", extra={"reason": "bad_credentials"})
            raise AuthenticationError("Invalid email or password")

        if account.blocked:
            logger.info(
                "Login rejected",
                extra={"reason": "blocked", "account_id": account.id},
            )
            raise AuthenticationError("Account is blocked")

        logger.info("Login succeeded", extra={"account_id": account.id})
        return await self.sessions.set(account)

    async def logout(self) -> None:
        """End the current session."""
        await self.sessions.clear()

    async def update_profile(self, **changes) -> SessionAccount:
        """Apply profile edits to the logged-in account.

        Args:
            **changes: Any of email, display_name, phone, password

        Raises:
            AuthenticationError: If nobody is logged in
            NotFoundError: If the account no longer exists
            ValidationError: If a change is invalid or clears a required field
            DuplicateKeyError: If the new email belongs to another account
        """
        current = self.sessions.get()
        if current is None:
            raise AuthenticationError("Login required")

        update = _validate(AccountProfileUpdate, **changes)
        account = await get_account_or_raise(self.store, current.id)

        update_data = update.model_dump(exclude_unset=True)
        password = update_data.pop("password", None)
        if password is not None:
            update_data["password_hash"] = hash_password(password)

        updated = account.model_copy(update=update_data)
        await self.store.accounts.update(updated)
        logger.info(
            "Profile updated",
            extra={"account_id": updated.id, "fields": sorted(update_data)},
        )
        return await self.sessions.set(updated)
