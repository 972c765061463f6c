"""Collection operations for listings."""

from ...core.base_crud import BaseCollection, IndexSpec
from .models import ListingModel, ListingStatus
from .schemas import Listing


class ListingCollection(BaseCollection[ListingModel, Listing]):
    """The houses collection, indexed by owner and by status."""

    name = "houses"
    model = ListingModel
    record_schema = Listing
    indexes = {
        "owner_id": IndexSpec("owner_id"),
        "status": IndexSpec("status"),
    }

    async def get_by_owner(self, owner_id: str) -> list[Listing]:
        return await self.get_by_index("owner_id", owner_id)

    async def get_by_status(self, status: ListingStatus | str) -> list[Listing]:
        return await self.get_by_index("status", ListingStatus(status))
