"""Current-session cache.

Holds the logged-in account as a single JSON record next to the collections.
The record is read once at init, written on login, registration and profile
edits, and removed on logout.
"""

from typing import TYPE_CHECKING

import pydantic
from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError

from ...config import settings
from ...core.exceptions import DatabaseError, StorageUnavailableError
from ...core.logging import get_logger
from ...core.utils import utc_now
from ..accounts.schemas import Account, SessionAccount
from .models import SessionCacheEntry

if TYPE_CHECKING:
    from ...store import RecordStore

logger = get_logger(__name__)


class SessionStore:
    """Single-record store for the current session, injected where needed."""

    def __init__(self, store: "RecordStore", key: str | None = None):
        self._store = store
        self.key = key or settings.session_cache_key
        self._current: SessionAccount | None = None
        self._initialized = False

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    async def init(self) -> SessionAccount | None:
        """Load the cached session, if any. Idempotent."""
        if self._initialized:
            return self._current

        try:
            async with self._store.session_scope() as db:
                entry = await db.get(SessionCacheEntry, self.key)
        except SQLAlchemyError as e:
            raise DatabaseError(
                "Failed to load session cache", details={"key": self.key}
            ) from e

        if entry is not None:
            try:
                self._current = SessionAccount.model_validate_json(entry.value)
            except pydantic.ValidationError:
                logger.warning(
                    "Discarding unreadable session cache entry",
                    extra={"key": self.key},
                )
                await self._remove()

        self._initialized = True
        logger.debug(
            "Session store initialized",
            extra={"has_session": self._current is not None},
        )
        return self._current

    def _require_init(self) -> None:
        if not self._initialized:
            raise StorageUnavailableError("Session store is not initialized")

    def get(self) -> SessionAccount | None:
        """Get the current session account, or None when logged out."""
        self._require_init()
        return self._current

    async def set(self, account: Account | SessionAccount) -> SessionAccount:
        """Persist account as the current session."""
        self._require_init()
        if isinstance(account, Account):
            cached = SessionAccount.from_account(account)
        else:
            cached = account

        try:
            async with self._store.session_scope() as db:
                await db.merge(
                    SessionCacheEntry(
                        key=self.key,
                        value=cached.model_dump_json(),
                        updated_at=utc_now(),
                    )
                )
                await db.commit()
        except SQLAlchemyError as e:
            raise DatabaseError(
                "Failed to write session cache", details={"key": self.key}
            ) from e

        self._current = cached
        return cached

    async def clear(self) -> None:
        """Remove the current session."""
        self._require_init()
        await self._remove()
        self._current = None

    async def _remove(self) -> None:
        try:
            async with self._store.session_scope() as db:
                await db.execute(
                    delete(SessionCacheEntry).where(SessionCacheEntry.key == self.key)
                )
                await db.commit()
        except SQLAlchemyError as e:
            raise DatabaseError(
                "Failed to clear session cache", details={"key": self.key}
            ) from e

    async def close(self) -> None:
        """Drop the in-memory copy; the persisted record stays for the next init."""
        self._current = None
        self._initialized = False
