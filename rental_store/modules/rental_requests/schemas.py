"""Rental request schemas for the rental store."""

from pydantic import BaseModel, Field

from ...core.utils import utc_now
from ..accounts.schemas import SessionAccount
from ..commons import StoreRecord, UTCDatetime
from ..listings.schemas import Listing
from .models import RequestStatus


class RentalRequest(StoreRecord):
    """Rental request record as stored in the requests collection."""

    tenant_id: str = Field(..., min_length=1, max_length=64)
    house_id: str = Field(..., min_length=1, max_length=64)
    owner_id: str = Field(..., min_length=1, max_length=64)
    status: RequestStatus = RequestStatus.PENDING
    message: str | None = None
    updated_at: UTCDatetime = Field(default_factory=utc_now)


class RentalRequestCreate(BaseModel):
    """Schema for submitting a rental request."""

    house_id: str = Field(..., min_length=1, max_length=64)
    message: str | None = None


class RentalRequestView(BaseModel):
    """A request joined with its listing and tenant.

    listing or tenant is None when the referenced record no longer exists.
    """

    request: RentalRequest
    listing: Listing | None = None
    tenant: SessionAccount | None = None
