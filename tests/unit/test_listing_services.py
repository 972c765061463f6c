"""Tests for owner listing operations and tenant search."""

from datetime import timedelta

import pytest

from rental_store.core.exceptions import NotFoundError, PermissionError
from rental_store.core.utils import utc_now
from rental_store.modules.accounts import AccountRole
from rental_store.modules.listings import (
    ListingCreate,
    ListingFilters,
    ListingStatus,
    ListingUpdate,
    PropertyType,
    browse_available,
    change_listing_status,
    create_listing,
    delete_listing,
    list_owner_listings,
    search_listings,
    update_listing,
)
from tests.factories import make_account, make_listing, make_request

OWNER = make_account("u1", "owner@x.com", role=AccountRole.OWNER)
OTHER_OWNER = make_account("u2", "other@x.com", role=AccountRole.OWNER)
TENANT = make_account("u3", "tenant@x.com")
ADMIN = make_account("u4", "admin@x.com", role=AccountRole.ADMIN)


def listing_data(**fields) -> ListingCreate:
    return ListingCreate(
        title=fields.pop("title", "Sunny flat"),
        address=fields.pop("address", "12 Harbour Rd"),
        price=fields.pop("price", 1200),
        **fields,
    )


class TestCreateListing:

    @pytest.mark.asyncio
    async def test_owner_creates_available_listing(self, store):
        listing = await create_listing(store, OWNER, listing_data(bedrooms=2))

        assert listing.id.startswith("house_")
        assert listing.owner_id == "u1"
        assert listing.status == ListingStatus.AVAILABLE
        assert (await store.listings.get(listing.id)).bedrooms == 2

    @pytest.mark.asyncio
    async def test_tenant_cannot_create(self, store):
        with pytest.raises(PermissionError):
            await create_listing(store, TENANT, listing_data())

    def test_negative_price_rejected(self):
        with pytest.raises(ValueError):
            listing_data(price=-1)


class TestEditListing:

    @pytest.mark.asyncio
    async def test_update_keeps_unset_fields(self, store):
        listing = await create_listing(store, OWNER, listing_data(images=["img1"]))

        updated = await update_listing(store, OWNER, listing.id, ListingUpdate(price=950))

        assert updated.price == 950
        assert updated.images == ["img1"]
        assert updated.created_at == listing.created_at
        assert (await store.listings.get(listing.id)).price == 950

    @pytest.mark.asyncio
    async def test_other_owner_cannot_edit(self, store):
        listing = await create_listing(store, OWNER, listing_data())

        with pytest.raises(PermissionError):
            await update_listing(store, OTHER_OWNER, listing.id, ListingUpdate(price=1))

    @pytest.mark.asyncio
    async def test_admin_can_edit(self, store):
        listing = await create_listing(store, OWNER, listing_data())

        updated = await update_listing(store, ADMIN, listing.id, ListingUpdate(title="Moderated"))

        assert updated.title == "Moderated"
        assert updated.owner_id == "u1"

    @pytest.mark.asyncio
    async def test_missing_listing(self, store):
        with pytest.raises(NotFoundError):
            await update_listing(store, OWNER, "missing", ListingUpdate(price=1))

    @pytest.mark.asyncio
    async def test_change_status(self, store):
        listing = await create_listing(store, OWNER, listing_data())

        rented = await change_listing_status(store, OWNER, listing.id, "rented")

        assert rented.status == ListingStatus.RENTED
        assert await browse_available(store) == []

    @pytest.mark.asyncio
    async def test_delete_leaves_requests(self, store):
        listing = await create_listing(store, OWNER, listing_data())
        await store.requests.add(make_request("r1", "u3", listing.id, "u1"))

        await delete_listing(store, OWNER, listing.id)

        assert await store.listings.get(listing.id) is None
        assert (await store.requests.get("r1")).house_id == listing.id


class TestOwnerAndTenantViews:

    @pytest.mark.asyncio
    async def test_owner_listings_newest_first(self, store):
        now = utc_now()
        await store.listings.add(make_listing("h1", "u1", created_at=now - timedelta(days=2)))
        await store.listings.add(make_listing("h2", "u1", created_at=now))
        await store.listings.add(make_listing("h3", "u2", created_at=now - timedelta(days=1)))

        listings = await list_owner_listings(store, "u1")

        assert [h.id for h in listings] == ["h2", "h1"]

    @pytest.mark.asyncio
    async def test_browse_available(self, store):
        await store.listings.add(make_listing("h1", "u1"))
        await store.listings.add(make_listing("h2", "u1", status=ListingStatus.SOLD))

        assert [h.id for h in await browse_available(store)] == ["h1"]


class TestSearchListings:

    @pytest.fixture
    def listings(self):
        return [
            make_listing(
                "h1", "u1", title="Harbour studio", price=800, bedrooms=0,
                property_type=PropertyType.STUDIO,
            ),
            make_listing(
                "h2", "u1", title="Family home", address="4 Oak Lane", price=2500,
                bedrooms=4, property_type=PropertyType.HOUSE,
            ),
            make_listing(
                "h3", "u2", title="City condo", description="Near the harbour",
                price=1500, bedrooms=2, property_type=PropertyType.CONDO,
            ),
        ]

    def test_no_filters(self, listings):
        assert search_listings(listings) == listings

    def test_term_matches_title_address_description(self, listings):
        assert [h.id for h in search_listings(listings, term="HARBOUR")] == ["h1", "h3"]
        assert [h.id for h in search_listings(listings, term="oak")] == ["h2"]

    def test_price_bounds_are_inclusive(self, listings):
        results = search_listings(listings, min_price=800, max_price=1500)

        assert [h.id for h in results] == ["h1", "h3"]

    def test_combined_filters(self, listings):
        filters = ListingFilters(property_type="condo", min_bedrooms=2)

        assert [h.id for h in search_listings(listings, filters)] == ["h3"]

    def test_min_bedrooms(self, listings):
        assert [h.id for h in search_listings(listings, min_bedrooms=3)] == ["h2"]
