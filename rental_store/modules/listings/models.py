"""Listing models for the rental store.

The `houses` collection: properties offered by owners.
"""

import enum

from sqlalchemy import JSON, Float, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ...core.database_types import enum_values_type
from ...database import Base, CreatedAtMixin


class PropertyType(str, enum.Enum):
    """Property types."""

    APARTMENT = "apartment"
    HOUSE = "house"
    CONDO = "condo"
    STUDIO = "studio"


class ListingStatus(str, enum.Enum):
    """Listing status values."""

    AVAILABLE = "available"
    RENTED = "rented"
    SOLD = "sold"


class ListingModel(CreatedAtMixin, Base):
    """Property listing.

    owner_id points at users.id but is not a foreign key; a listing outlives
    its owner's account.
    """

    __tablename__ = "houses"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    owner_id: Mapped[str] = mapped_column(String(64), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    price: Mapped[float] = mapped_column(Float, nullable=False)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    property_type: Mapped[PropertyType] = mapped_column(
        enum_values_type(PropertyType), nullable=False, default=PropertyType.APARTMENT
    )
    area: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    bedrooms: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    bathrooms: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    status: Mapped[ListingStatus] = mapped_column(
        enum_values_type(ListingStatus), nullable=False, default=ListingStatus.AVAILABLE
    )

    __table_args__ = (
        Index("ix_houses_owner_id", "owner_id"),
        Index("ix_houses_status", "status"),
    )

    def __repr__(self) -> str:
        return f"<ListingModel(id={self.id}, title={self.title}, status={self.status})>"
