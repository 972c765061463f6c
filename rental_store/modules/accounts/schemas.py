"""Account schemas for the rental store."""

from pydantic import BaseModel, Field, field_validator

from ..commons import StoreRecord
from .models import AccountRole


class AccountBase(StoreRecord):
    """Fields shared by stored accounts and the cached session copy."""

    email: str = Field(..., min_length=3, max_length=255)
    display_name: str = Field(..., min_length=1, max_length=255)
    role: AccountRole = AccountRole.TENANT
    phone: str | None = Field(None, max_length=40)
    blocked: bool = False


class Account(AccountBase):
    """Account record as stored in the users collection."""

    password_hash: str = Field(..., min_length=1)


class SessionAccount(AccountBase):
    """Account as cached for the current session; carries no credential."""

    @classmethod
    def from_account(cls, account: Account) -> "SessionAccount":
        return cls.model_validate(account.model_dump(exclude={"password_hash"}))


class AccountRegister(BaseModel):
    """Schema for registering an account."""

    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)
    display_name: str = Field(..., min_length=1, max_length=255)
    role: AccountRole = AccountRole.TENANT
    phone: str | None = Field(None, max_length=40)


class AccountProfileUpdate(BaseModel):
    """Schema for profile edits; unset fields are left unchanged."""

    email: str | None = Field(None, min_length=3, max_length=255)
    display_name: str | None = Field(None, min_length=1, max_length=255)
    phone: str | None = Field(None, max_length=40)
    password: str | None = Field(None, min_length=1)

    @field_validator("email", "display_name", "password")
    @classmethod
    def _not_cleared(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("cannot be cleared")
        return value
