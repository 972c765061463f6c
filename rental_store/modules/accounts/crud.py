"""Collection operations for accounts."""

from ...core.base_crud import BaseCollection, IndexSpec
from .models import AccountModel
from .schemas import Account


class AccountCollection(BaseCollection[AccountModel, Account]):
    """The users collection, with a unique index on email."""

    name = "users"
    model = AccountModel
    record_schema = Account
    indexes = {"email": IndexSpec("email", unique=True)}

    async def get_by_email(self, email: str) -> Account | None:
        """Get an account by its exact email."""
        return await self.find_one_by_index("email", email)
