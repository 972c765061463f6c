"""Admin module: account moderation and platform statistics."""

from .schemas import PlatformStats
from .services import (
    delete_account,
    delete_listing_as_admin,
    platform_stats,
    search_accounts,
    search_listings_admin,
    toggle_block,
)

__all__ = [
    "PlatformStats",
    "toggle_block",
    "delete_account",
    "delete_listing_as_admin",
    "platform_stats",
    "search_accounts",
    "search_listings_admin",
]
