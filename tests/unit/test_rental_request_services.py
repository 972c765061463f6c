"""Tests for submitting and deciding rental requests."""

from datetime import timedelta

import pytest
import pytest_asyncio

from rental_store.core.exceptions import (
    BusinessLogicError,
    DuplicateKeyError,
    NotFoundError,
    PermissionError,
)
from rental_store.core.utils import utc_now
from rental_store.modules.accounts import AccountRole
from rental_store.modules.listings import ListingStatus
from rental_store.modules.rental_requests import (
    RequestStatus,
    approve_request,
    list_owner_requests,
    list_tenant_requests,
    reject_request,
    resolve_request_view,
    submit_request,
)
from tests.factories import make_account, make_listing, make_request

OWNER = make_account("u1", "owner@x.com", role=AccountRole.OWNER)
TENANT = make_account("u2", "tenant@x.com")
OTHER_OWNER = make_account("u3", "other@x.com", role=AccountRole.OWNER)
ADMIN = make_account("u4", "admin@x.com", role=AccountRole.ADMIN)


@pytest_asyncio.fixture
async def marketplace(store):
    for account in (OWNER, TENANT, OTHER_OWNER, ADMIN):
        await store.accounts.add(account)
    await store.listings.add(make_listing("h1", "u1", price=1200))
    await store.listings.add(make_listing("h2", "u1", status=ListingStatus.RENTED))
    return store


class TestSubmitRequest:

    @pytest.mark.asyncio
    async def test_tenant_submits_pending_request(self, marketplace):
        request = await submit_request(marketplace, TENANT, "h1", message="Hi")

        assert request.status == RequestStatus.PENDING
        assert request.owner_id == "u1"
        assert request.updated_at == request.created_at
        stored = await marketplace.requests.get(request.id)
        assert stored.message == "Hi"

    @pytest.mark.asyncio
    async def test_owner_cannot_submit(self, marketplace):
        with pytest.raises(PermissionError):
            await submit_request(marketplace, OWNER, "h1")

    @pytest.mark.asyncio
    async def test_unknown_listing(self, marketplace):
        with pytest.raises(NotFoundError):
            await submit_request(marketplace, TENANT, "missing")

    @pytest.mark.asyncio
    async def test_unavailable_listing(self, marketplace):
        with pytest.raises(BusinessLogicError):
            await submit_request(marketplace, TENANT, "h2")

    @pytest.mark.asyncio
    async def test_repeat_request_rejected(self, marketplace):
        first = await submit_request(marketplace, TENANT, "h1")
        await reject_request(marketplace, OWNER, first.id)

        with pytest.raises(DuplicateKeyError) as exc_info:
            await submit_request(marketplace, TENANT, "h1")
        assert exc_info.value.message == "You have already requested this property"


class TestDecideRequest:

    @pytest_asyncio.fixture
    async def pending(self, marketplace):
        request = make_request("r1", "u2", "h1", "u1", created_at=utc_now() - timedelta(hours=1))
        await marketplace.requests.add(request)
        return request

    @pytest.mark.asyncio
    async def test_owner_approves(self, marketplace, pending):
        approved = await approve_request(marketplace, OWNER, "r1")

        stored = await marketplace.requests.get("r1")
        assert approved.status == RequestStatus.APPROVED
        assert stored.status == RequestStatus.APPROVED
        assert stored.updated_at > stored.created_at
        assert (await marketplace.listings.get("h1")).status == ListingStatus.AVAILABLE

    @pytest.mark.asyncio
    async def test_updated_at_moves_past_future_created_at(self, marketplace):
        created_at = utc_now() + timedelta(seconds=30)
        await marketplace.requests.add(
            make_request("r9", "u2", "h1", "u1", created_at=created_at)
        )

        rejected = await reject_request(marketplace, OWNER, "r9")

        assert rejected.updated_at > created_at

    @pytest.mark.asyncio
    async def test_admin_rejects(self, marketplace, pending):
        rejected = await reject_request(marketplace, ADMIN, "r1")

        assert rejected.status == RequestStatus.REJECTED

    @pytest.mark.asyncio
    async def test_other_owner_cannot_decide(self, marketplace, pending):
        with pytest.raises(PermissionError):
            await approve_request(marketplace, OTHER_OWNER, "r1")
        assert (await marketplace.requests.get("r1")).status == RequestStatus.PENDING

    @pytest.mark.asyncio
    async def test_tenant_cannot_decide(self, marketplace, pending):
        with pytest.raises(PermissionError):
            await approve_request(marketplace, TENANT, "r1")

    @pytest.mark.asyncio
    async def test_only_pending_requests_are_decided(self, marketplace, pending):
        await approve_request(marketplace, OWNER, "r1")

        with pytest.raises(BusinessLogicError):
            await reject_request(marketplace, OWNER, "r1")

    @pytest.mark.asyncio
    async def test_missing_request(self, marketplace):
        with pytest.raises(NotFoundError):
            await approve_request(marketplace, OWNER, "missing")


class TestRequestViews:

    @pytest.mark.asyncio
    async def test_lists_newest_first(self, marketplace):
        now = utc_now()
        await marketplace.requests.add(
            make_request("r1", "u2", "h1", "u1", created_at=now - timedelta(days=1),
                         status=RequestStatus.REJECTED)
        )
        await marketplace.requests.add(make_request("r2", "u2", "h1", "u1", created_at=now))
        await marketplace.requests.add(make_request("r3", "u9", "h5", "u3", created_at=now))

        assert [r.id for r in await list_tenant_requests(marketplace, "u2")] == ["r2", "r1"]
        assert [r.id for r in await list_owner_requests(marketplace, "u1")] == ["r2", "r1"]

    @pytest.mark.asyncio
    async def test_view_joins_listing_and_tenant(self, marketplace):
        request = await submit_request(marketplace, TENANT, "h1")

        view = await resolve_request_view(marketplace, request)

        assert view.listing.id == "h1"
        assert view.tenant.email == "tenant@x.com"
        assert "password_hash" not in view.tenant.model_dump()

    @pytest.mark.asyncio
    async def test_view_tolerates_dangling_references(self, marketplace):
        request = await submit_request(marketplace, TENANT, "h1")
        await marketplace.listings.delete("h1")
        await marketplace.accounts.delete("u2")

        view = await resolve_request_view(marketplace, request)

        assert view.request.id == request.id
        assert view.listing is None
        assert view.tenant is None
