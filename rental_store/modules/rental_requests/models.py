"""Rental request models for the rental store.

The `requests` collection: a tenant's request to rent a listing.
"""

import enum
from datetime import datetime

from sqlalchemy import Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from ...core.database_types import UTCDateTime, enum_values_type
from ...core.utils import utc_now
from ...database import Base, CreatedAtMixin


class RequestStatus(str, enum.Enum):
    """Rental request status values."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class RentalRequestModel(CreatedAtMixin, Base):
    """Rental request.

    tenant_id, house_id and owner_id are plain references; owner_id is copied
    from the listing when the request is made.
    """

    __tablename__ = "requests"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    tenant_id: Mapped[str] = mapped_column(String(64), nullable=False)
    house_id: Mapped[str] = mapped_column(String(64), nullable=False)
    owner_id: Mapped[str] = mapped_column(String(64), nullable=False)
    status: Mapped[RequestStatus] = mapped_column(
        enum_values_type(RequestStatus), nullable=False, default=RequestStatus.PENDING
    )
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utc_now
    )

    __table_args__ = (
        Index("ix_requests_tenant_id", "tenant_id"),
        Index("ix_requests_owner_id", "owner_id"),
        Index("ix_requests_house_id", "house_id"),
        # At most one pending request per tenant and listing
        Index(
            "uq_requests_pending_tenant_house",
            "tenant_id",
            "house_id",
            unique=True,
            sqlite_where=text("status = 'pending'"),
        ),
    )

    def __repr__(self) -> str:
        return f"<RentalRequestModel(id={self.id}, house_id={self.house_id}, status={self.status})>"
