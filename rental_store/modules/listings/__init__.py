"""Listings module: the houses collection and owner listing management."""

from .crud import ListingCollection
from .models import ListingModel, ListingStatus, PropertyType
from .schemas import Listing, ListingCreate, ListingFilters, ListingUpdate
from .services import (
    browse_available,
    change_listing_status,
    create_listing,
    delete_listing,
    get_listing_or_raise,
    list_owner_listings,
    search_listings,
    update_listing,
)

__all__ = [
    # Models
    "ListingModel",
    # Enums
    "ListingStatus",
    "PropertyType",
    # Schemas
    "Listing",
    "ListingCreate",
    "ListingUpdate",
    "ListingFilters",
    # Collection
    "ListingCollection",
    # Services
    "create_listing",
    "update_listing",
    "change_listing_status",
    "delete_listing",
    "get_listing_or_raise",
    "list_owner_listings",
    "browse_available",
    "search_listings",
]
