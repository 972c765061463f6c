"""Admin moderation and reporting services."""

from collections import Counter
from collections.abc import Iterable
from typing import TYPE_CHECKING

from ...core.exceptions import BusinessLogicError
from ...core.logging import get_logger
from ...core.utils import contains_term
from ..accounts.models import AccountRole
from ..accounts.schemas import Account, AccountBase
from ..accounts.services import get_account_or_raise, require_role
from ..listings.models import ListingStatus
from ..listings.schemas import Listing
from ..listings.services import delete_listing
from ..rental_requests.models import RequestStatus
from .schemas import PlatformStats

if TYPE_CHECKING:
    from ...store import RecordStore

logger = get_logger(__name__)


async def toggle_block(
    store: "RecordStore", admin: AccountBase | None, account_id: str
) -> Account:
    """Block an account, or unblock it if already blocked.

    Raises:
        PermissionError: If admin is not an admin account
        BusinessLogicError: If admins target themselves
        NotFoundError: If the account does not exist
    """
    require_role(admin, AccountRole.ADMIN)
    if account_id == admin.id:
        raise BusinessLogicError("You cannot block yourself")

    account = await get_account_or_raise(store, account_id)
    updated = account.model_copy(update={"blocked": not account.blocked})
    await store.accounts.update(updated)
    logger.info(
        "Account blocked" if updated.blocked else "Account unblocked",
        extra={"account_id": account_id, "actor_id": admin.id},
    )
    return updated


async def delete_account(
    store: "RecordStore", admin: AccountBase | None, account_id: str
) -> None:
    """Delete an account. Its listings and requests are left in place."""
    require_role(admin, AccountRole.ADMIN)
    if account_id == admin.id:
        raise BusinessLogicError("You cannot delete yourself")

    await get_account_or_raise(store, account_id)
    await store.accounts.delete(account_id)
    logger.info(
        "Account deleted",
        extra={"account_id": account_id, "actor_id": admin.id},
    )


async def delete_listing_as_admin(
    store: "RecordStore", admin: AccountBase | None, listing_id: str
) -> None:
    """Delete any listing."""
    require_role(admin, AccountRole.ADMIN)
    await delete_listing(store, admin, listing_id)


async def platform_stats(store: "RecordStore") -> PlatformStats:
    """Count users by role, listings by status and requests by status."""
    accounts = await store.accounts.get_all()
    listings = await store.listings.get_all()
    requests = await store.requests.get_all()

    roles = Counter(a.role.value for a in accounts)
    listing_statuses = Counter(h.status.value for h in listings)
    request_statuses = Counter(r.status.value for r in requests)

    return PlatformStats(
        total_users=len(accounts),
        users_by_role={role.value: roles[role.value] for role in AccountRole},
        total_listings=len(listings),
        listings_by_status={s.value: listing_statuses[s.value] for s in ListingStatus},
        total_requests=len(requests),
        requests_by_status={s.value: request_statuses[s.value] for s in RequestStatus},
    )


def search_accounts(accounts: Iterable[AccountBase], term: str | None) -> list[AccountBase]:
    """Filter loaded accounts whose name, email or role contains term."""
    if not term:
        return list(accounts)
    return [
        a for a in accounts if contains_term(term, a.display_name, a.email, a.role.value)
    ]


def search_listings_admin(listings: Iterable[Listing], term: str | None) -> list[Listing]:
    """Filter loaded listings whose title, address or type contains term."""
    if not term:
        return list(listings)
    return [
        h
        for h in listings
        if contains_term(term, h.title, h.address, h.property_type.value)
    ]
