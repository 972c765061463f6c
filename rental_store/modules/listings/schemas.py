"""Listing schemas for the rental store."""

from pydantic import BaseModel, Field

from ..commons import StoreRecord
from .models import ListingStatus, PropertyType


class ListingFields(BaseModel):
    """Editable listing fields."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    price: float = Field(..., ge=0)
    address: str = Field(..., min_length=1, max_length=500)
    property_type: PropertyType = PropertyType.APARTMENT
    area: float = Field(default=0, ge=0)
    bedrooms: int = Field(default=0, ge=0)
    bathrooms: int = Field(default=0, ge=0)
    images: list[str] = Field(default_factory=list)


class Listing(StoreRecord, ListingFields):
    """Listing record as stored in the houses collection."""

    owner_id: str = Field(..., min_length=1, max_length=64)
    status: ListingStatus = ListingStatus.AVAILABLE


class ListingCreate(ListingFields):
    """Schema for creating a listing."""

    pass


class ListingUpdate(BaseModel):
    """Schema for editing a listing; unset fields are left unchanged."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    price: float | None = Field(None, ge=0)
    address: str | None = Field(None, min_length=1, max_length=500)
    property_type: PropertyType | None = None
    area: float | None = Field(None, ge=0)
    bedrooms: int | None = Field(None, ge=0)
    bathrooms: int | None = Field(None, ge=0)
    images: list[str] | None = None
    status: ListingStatus | None = None


class ListingFilters(BaseModel):
    """Tenant-side browse filters, applied in memory."""

    term: str | None = None
    property_type: PropertyType | None = None
    min_price: float | None = Field(None, ge=0)
    max_price: float | None = Field(None, ge=0)
    min_bedrooms: int | None = Field(None, ge=0)
