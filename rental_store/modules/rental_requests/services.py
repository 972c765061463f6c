"""Rental request business logic services."""

from datetime import timedelta
from typing import TYPE_CHECKING

from ...core.exceptions import (
    BusinessLogicError,
    DuplicateKeyError,
    NotFoundError,
    PermissionError,
)
from ...core.logging import get_logger
from ...core.utils import generate_record_id, utc_now
from ..accounts.models import AccountRole
from ..accounts.schemas import AccountBase, SessionAccount
from ..accounts.services import require_role
from ..listings.models import ListingStatus
from ..listings.services import get_listing_or_raise
from .models import RequestStatus
from .schemas import RentalRequest, RentalRequestCreate, RentalRequestView

if TYPE_CHECKING:
    from ...store import RecordStore

logger = get_logger(__name__)


async def submit_request(
    store: "RecordStore",
    tenant: AccountBase | None,
    listing_id: str,
    message: str | None = None,
) -> RentalRequest:
    """Submit a tenant's request to rent a listing.

    Args:
        store: Record store
        tenant: Requesting tenant account
        listing_id: Listing to request
        message: Optional note to the owner

    Returns:
        Created pending request

    Raises:
        PermissionError: If the account is not a tenant
        NotFoundError: If the listing does not exist
        BusinessLogicError: If the listing is not available
        DuplicateKeyError: If the tenant already requested this listing
    """
    require_role(tenant, AccountRole.TENANT)
    data = RentalRequestCreate(house_id=listing_id, message=message)

    listing = await get_listing_or_raise(store, data.house_id)
    if listing.status != ListingStatus.AVAILABLE:
        raise BusinessLogicError(
            f"Listing {listing.id} is {listing.status.value} and cannot be requested"
        )

    previous = [
        r for r in await store.requests.get_by_tenant(tenant.id) if r.house_id == listing.id
    ]
    if previous:
        raise DuplicateKeyError(
            "requests",
            (tenant.id, listing.id),
            message="You have already requested this property",
        )

    now = utc_now()
    request = RentalRequest(
        id=generate_record_id("request"),
        tenant_id=tenant.id,
        house_id=listing.id,
        owner_id=listing.owner_id,
        status=RequestStatus.PENDING,
        message=data.message,
        created_at=now,
        updated_at=now,
    )
    await store.requests.add(request)
    logger.info(
        "Rental request submitted",
        extra={"request_id": request.id, "listing_id": listing.id},
    )
    return request


async def _decide(
    store: "RecordStore",
    actor: AccountBase | None,
    request_id: str,
    status: RequestStatus,
) -> RentalRequest:
    request = await store.requests.get(request_id)
    if request is None:
        raise NotFoundError(f"Rental request with ID {request_id} not found")

    require_role(actor, AccountRole.OWNER, AccountRole.ADMIN)
    if actor.role != AccountRole.ADMIN and request.owner_id != actor.id:
        raise PermissionError(
            "decide", "rental request", details={"request_id": request_id}
        )

    if request.status != RequestStatus.PENDING:
        raise BusinessLogicError(
            f"Rental request {request_id} is already {request.status.value}"
        )

    # updated_at must move past created_at even on a coarse clock
    updated_at = max(utc_now(), request.created_at + timedelta(microseconds=1))
    updated = request.model_copy(update={"status": status, "updated_at": updated_at})
    await store.requests.update(updated)
    logger.info(
        f"Rental request {status.value}",
        extra={"request_id": request_id, "actor_id": actor.id},
    )
    return updated


async def approve_request(
    store: "RecordStore", actor: AccountBase | None, request_id: str
) -> RentalRequest:
    """Approve a pending request. The listing's status is left as is."""
    return await _decide(store, actor, request_id, RequestStatus.APPROVED)


async def reject_request(
    store: "RecordStore", actor: AccountBase | None, request_id: str
) -> RentalRequest:
    """Reject a pending request."""
    return await _decide(store, actor, request_id, RequestStatus.REJECTED)


async def list_tenant_requests(store: "RecordStore", tenant_id: str) -> list[RentalRequest]:
    """Get a tenant's requests, newest first."""
    requests = await store.requests.get_by_tenant(tenant_id)
    return sorted(requests, key=lambda r: r.created_at, reverse=True)


async def list_owner_requests(store: "RecordStore", owner_id: str) -> list[RentalRequest]:
    """Get requests for an owner's listings, newest first."""
    requests = await store.requests.get_by_owner(owner_id)
    return sorted(requests, key=lambda r: r.created_at, reverse=True)


async def resolve_request_view(
    store: "RecordStore", request: RentalRequest
) -> RentalRequestView:
    """Join a request with its listing and tenant, tolerating dangling references."""
    listing = await store.listings.get(request.house_id)
    tenant = await store.accounts.get(request.tenant_id)
    return RentalRequestView(
        request=request,
        listing=listing,
        tenant=SessionAccount.from_account(tenant) if tenant else None,
    )
