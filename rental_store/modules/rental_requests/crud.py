"""Collection operations for rental requests."""

from ...core.base_crud import BaseCollection, IndexSpec
from .models import RentalRequestModel
from .schemas import RentalRequest


class RentalRequestCollection(BaseCollection[RentalRequestModel, RentalRequest]):
    """The requests collection, indexed by tenant, owner and listing."""

    name = "requests"
    model = RentalRequestModel
    record_schema = RentalRequest
    indexes = {
        "tenant_id": IndexSpec("tenant_id"),
        "owner_id": IndexSpec("owner_id"),
        "house_id": IndexSpec("house_id"),
    }

    async def get_by_tenant(self, tenant_id: str) -> list[RentalRequest]:
        return await self.get_by_index("tenant_id", tenant_id)

    async def get_by_owner(self, owner_id: str) -> list[RentalRequest]:
        return await self.get_by_index("owner_id", owner_id)

    async def get_by_house(self, house_id: str) -> list[RentalRequest]:
        return await self.get_by_index("house_id", house_id)
