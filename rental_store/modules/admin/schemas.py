"""Admin schemas for the rental store."""

from pydantic import BaseModel, Field


class PlatformStats(BaseModel):
    """Record counts across the three collections."""

    total_users: int = 0
    users_by_role: dict[str, int] = Field(default_factory=dict)
    total_listings: int = 0
    listings_by_status: dict[str, int] = Field(default_factory=dict)
    total_requests: int = 0
    requests_by_status: dict[str, int] = Field(default_factory=dict)
