"""Listing business logic services."""

from collections.abc import Iterable
from typing import TYPE_CHECKING

from ...core.exceptions import NotFoundError, PermissionError
from ...core.logging import get_logger
from ...core.utils import contains_term, generate_record_id
from ..accounts.models import AccountRole
from ..accounts.schemas import AccountBase
from ..accounts.services import require_role
from .models import ListingStatus
from .schemas import Listing, ListingCreate, ListingFilters, ListingUpdate

if TYPE_CHECKING:
    from ...store import RecordStore

logger = get_logger(__name__)


async def get_listing_or_raise(store: "RecordStore", listing_id: str) -> Listing:
    """Get a listing that must exist."""
    listing = await store.listings.get(listing_id)
    if listing is None:
        raise NotFoundError(f"Listing with ID {listing_id} not found")
    return listing


def _require_listing_access(actor: AccountBase | None, listing: Listing, action: str) -> None:
    """Only the listing's owner or an admin may change it."""
    require_role(actor, AccountRole.OWNER, AccountRole.ADMIN)
    if actor.role != AccountRole.ADMIN and listing.owner_id != actor.id:
        raise PermissionError(action, "listing", details={"listing_id": listing.id})


async def create_listing(
    store: "RecordStore",
    owner: AccountBase | None,
    data: ListingCreate,
) -> Listing:
    """Create a new available listing owned by owner.

    Raises:
        PermissionError: If owner is not an owner or admin account
    """
    require_role(owner, AccountRole.OWNER, AccountRole.ADMIN)

    listing = Listing(
        id=generate_record_id("house"),
        owner_id=owner.id,
        status=ListingStatus.AVAILABLE,
        **data.model_dump(),
    )
    await store.listings.add(listing)
    logger.info(
        "Listing created",
        extra={"listing_id": listing.id, "owner_id": owner.id},
    )
    return listing


async def update_listing(
    store: "RecordStore",
    actor: AccountBase | None,
    listing_id: str,
    data: ListingUpdate,
) -> Listing:
    """Edit a listing by read-modify-write.

    The owner and creation time are always kept from the stored listing.

    Raises:
        NotFoundError: If listing not found
        PermissionError: If actor is neither the owner nor an admin
    """
    listing = await get_listing_or_raise(store, listing_id)
    _require_listing_access(actor, listing, "edit")

    updated = Listing.model_validate(
        {**listing.model_dump(), **data.model_dump(exclude_unset=True, exclude_none=True)}
    )
    await store.listings.update(updated)
    logger.info("Listing updated", extra={"listing_id": listing_id})
    return updated


async def change_listing_status(
    store: "RecordStore",
    actor: AccountBase | None,
    listing_id: str,
    status: ListingStatus | str,
) -> Listing:
    """Set a listing's status (available, rented, sold)."""
    return await update_listing(
        store, actor, listing_id, ListingUpdate(status=ListingStatus(status))
    )


async def delete_listing(
    store: "RecordStore",
    actor: AccountBase | None,
    listing_id: str,
) -> None:
    """Delete a listing. Requests that reference it are left in place.

    Raises:
        NotFoundError: If listing not found
        PermissionError: If actor is neither the owner nor an admin
    """
    listing = await get_listing_or_raise(store, listing_id)
    _require_listing_access(actor, listing, "delete")
    await store.listings.delete(listing_id)
    logger.info(
        "Listing deleted",
        extra={"listing_id": listing_id, "actor_id": actor.id},
    )


async def list_owner_listings(store: "RecordStore", owner_id: str) -> list[Listing]:
    """Get an owner's listings, newest first."""
    listings = await store.listings.get_by_owner(owner_id)
    return sorted(listings, key=lambda listing: listing.created_at, reverse=True)


async def browse_available(store: "RecordStore") -> list[Listing]:
    """Get every listing open to rental requests."""
    return await store.listings.get_by_status(ListingStatus.AVAILABLE)


def search_listings(
    listings: Iterable[Listing],
    filters: ListingFilters | None = None,
    **criteria,
) -> list[Listing]:
    """Filter already loaded listings.

    Args:
        listings: Listings to filter
        filters: Filter set; keyword criteria build one when omitted
        **criteria: term, property_type, min_price, max_price, min_bedrooms

    Returns:
        Listings matching every given criterion, in input order
    """
    if filters is None:
        filters = ListingFilters(**criteria)

    results = []
    for listing in listings:
        if filters.term and not contains_term(
            filters.term, listing.title, listing.address, listing.description
        ):
            continue
        if filters.property_type and listing.property_type != filters.property_type:
            continue
        if filters.min_price is not None and listing.price < filters.min_price:
            continue
        if filters.max_price is not None and listing.price > filters.max_price:
            continue
        if filters.min_bedrooms is not None and listing.bedrooms < filters.min_bedrooms:
            continue
        results.append(listing)
    return results
