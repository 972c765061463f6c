"""Account models for the rental store.

The `users` collection: one row per registered tenant, owner or admin.
"""

import enum

from sqlalchemy import Boolean, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ...core.database_types import enum_values_type
from ...database import Base, CreatedAtMixin


class AccountRole(str, enum.Enum):
    """Account roles."""

    TENANT = "tenant"
    OWNER = "owner"
    ADMIN = "admin"


class AccountModel(CreatedAtMixin, Base):
    """Registered account.

    Email is unique across all accounts and compared exactly as stored.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[AccountRole] = mapped_column(
        enum_values_type(AccountRole), nullable=False, default=AccountRole.TENANT
    )
    phone: Mapped[str | None] = mapped_column(String(40), nullable=True)
    blocked: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    __table_args__ = (Index("ix_users_email", "email", unique=True),)

    def __repr__(self) -> str:
        return f"<AccountModel(id={self.id}, email={self.email}, role={self.role})>"
