"""
Local record store.

Owns the engine lifecycle and exposes the three collections:

    async with RecordStore("sqlite+aiosqlite:///data/rental_store.db") as store:
        await store.accounts.add(account)
        listings = await store.listings.get_by_index("owner_id", account.id)
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from .config import settings
from .core.base_crud import BaseCollection
from .core.exceptions import StorageUnavailableError, ValidationError
from .core.logging import get_logger
from .database import (
    SCHEMA_VERSION,
    create_session_factory,
    create_store_engine,
    init_db,
    uses_shared_connection,
)
from .modules.accounts.crud import AccountCollection
from .modules.listings.crud import ListingCollection
from .modules.rental_requests.crud import RentalRequestCollection

logger = get_logger(__name__)


class RecordStore:
    """Durable store for the users, houses and requests collections."""

    schema_version = SCHEMA_VERSION

    def __init__(self, database_url: str | None = None, echo: bool | None = None):
        self.database_url = database_url or settings.database_url
        self.echo = settings.database_echo if echo is None else echo
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None
        self._init_lock = asyncio.Lock()
        # Held for a whole session when every session shares one connection
        self._connection_lock = asyncio.Lock()
        self._shared_connection = False

        self.accounts = AccountCollection(self)
        self.listings = ListingCollection(self)
        self.requests = RentalRequestCollection(self)
        self._collections: dict[str, BaseCollection] = {
            c.name: c for c in (self.accounts, self.listings, self.requests)
        }

    @property
    def is_initialized(self) -> bool:
        return self._session_factory is not None

    async def init(self) -> None:
        """Open the store, creating collections and indexes on first run.

        Safe to call more than once.

        Raises:
            StorageUnavailableError: If the engine cannot be opened
        """
        async with self._init_lock:
            if self._session_factory is not None:
                return

            engine = None
            try:
                engine = create_store_engine(self.database_url, echo=self.echo)
                await init_db(engine, self.schema_version)
            except StorageUnavailableError:
                await self._dispose(engine)
                raise
            except (SQLAlchemyError, OSError) as e:
                await self._dispose(engine)
                logger.error(
                    "Cannot open record store",
                    extra={"database_url": self.database_url},
                    exc_info=True,
                )
                raise StorageUnavailableError(
                    f"Cannot open record store: {e}",
                    details={"database_url": self.database_url},
                ) from e

            self._engine = engine
            self._shared_connection = uses_shared_connection(engine)
            self._session_factory = create_session_factory(engine)
            logger.info(
                "Record store opened",
                extra={"schema_version": self.schema_version},
            )

    @staticmethod
    async def _dispose(engine: AsyncEngine | None) -> None:
        if engine is not None:
            await engine.dispose()

    def session(self) -> AsyncSession:
        """Create a database session.

        Raises:
            StorageUnavailableError: If init() has not completed
        """
        if self._session_factory is None:
            raise StorageUnavailableError("Record store is not initialized")
        return self._session_factory()

    @asynccontextmanager
    async def session_scope(self) -> AsyncIterator[AsyncSession]:
        """Session for a single store operation.

        In-memory stores share one connection, so a rollback in one session
        would undo the others. Their sessions run one at a time.

        Raises:
            StorageUnavailableError: If init() has not completed
        """
        if not self._shared_connection:
            async with self.session() as db:
                yield db
            return

        async with self._connection_lock:
            async with self.session() as db:
                yield db

    def collection(self, name: str) -> BaseCollection:
        """Get a collection by name (users, houses, requests)."""
        try:
            return self._collections[name]
        except KeyError:
            raise ValidationError(
                f"Unknown collection; available: {sorted(self._collections)}",
                field="collection",
                value=name,
            ) from None

    async def close(self) -> None:
        """Dispose of the engine. init() may be called again afterwards."""
        async with self._init_lock:
            engine, self._engine = self._engine, None
            self._session_factory = None
            self._shared_connection = False
            await self._dispose(engine)
        logger.info("Record store closed")

    async def __aenter__(self) -> "RecordStore":
        await self.init()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
