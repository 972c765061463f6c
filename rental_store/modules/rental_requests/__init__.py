"""Rental requests module: the requests collection and request decisions."""

from .crud import RentalRequestCollection
from .models import RentalRequestModel, RequestStatus
from .schemas import RentalRequest, RentalRequestCreate, RentalRequestView
from .services import (
    approve_request,
    list_owner_requests,
    list_tenant_requests,
    reject_request,
    resolve_request_view,
    submit_request,
)

__all__ = [
    # Models
    "RentalRequestModel",
    # Enums
    "RequestStatus",
    # Schemas
    "RentalRequest",
    "RentalRequestCreate",
    "RentalRequestView",
    # Collection
    "RentalRequestCollection",
    # Services
    "submit_request",
    "approve_request",
    "reject_request",
    "list_tenant_requests",
    "list_owner_requests",
    "resolve_request_view",
]
