"""
Database configuration for the rental store.

The store runs on SQLAlchemy's async engine over an embedded SQLite file
(aiosqlite driver). One table per collection, plus bookkeeping tables for
the schema version and the session cache.
"""

import os
from datetime import datetime

from sqlalchemy import Connection, String, Text, event, insert, inspect, select
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import Mapped, declarative_base, mapped_column
from sqlalchemy.pool import StaticPool

from .core.database_types import UTCDateTime
from .core.exceptions import StorageUnavailableError
from .core.logging import get_logger
from .core.utils import utc_now

logger = get_logger(__name__)

# Single supported schema version; no migrations
SCHEMA_VERSION = 1

# Base class
Base = declarative_base()


class CreatedAtMixin:
    """Mixin for records that carry a caller-supplied creation timestamp."""

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utc_now
    )


class StoreMeta(Base):
    """Key/value bookkeeping for the store itself (schema version)."""

    __tablename__ = "store_meta"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<StoreMeta(key={self.key}, value={self.value})>"


def _is_memory_database(database: str | None) -> bool:
    return not database or database == ":memory:" or database.startswith("file::memory:")


def create_store_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create the async engine for a store URL.

    File databases get their parent directory created. In-memory databases
    share one connection so every session sees the same data.

    Raises:
        OSError: If the parent directory cannot be created
    """
    url = make_url(database_url)
    engine_kwargs: dict = {"echo": echo, "future": True}

    if url.get_backend_name() == "sqlite":
        if _is_memory_database(url.database):
            engine_kwargs["poolclass"] = StaticPool
        else:
            parent = os.path.dirname(os.path.abspath(url.database))
            os.makedirs(parent, exist_ok=True)

    engine = create_async_engine(database_url, **engine_kwargs)

    if url.get_backend_name() == "sqlite":

        @event.listens_for(engine.sync_engine, "connect")
        def set_sqlite_pragmas(dbapi_connection, connection_record):
            """Durable writes: commit only after data reaches disk."""
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA synchronous=FULL")
            cursor.close()

    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory bound to engine."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


def uses_shared_connection(engine: AsyncEngine) -> bool:
    """True when every session of engine runs on the same connection."""
    return isinstance(engine.sync_engine.pool, StaticPool)


def _read_schema_version(connection: Connection) -> str | None:
    if not inspect(connection).has_table(StoreMeta.__tablename__):
        return None
    return connection.execute(
        select(StoreMeta.value).where(StoreMeta.key == "schema_version")
    ).scalar_one_or_none()


async def init_db(engine: AsyncEngine, schema_version: int = SCHEMA_VERSION) -> None:
    """Create collections and indexes if absent and pin the schema version.

    A store at another schema version is left untouched.

    Raises:
        StorageUnavailableError: If the store was created with another schema version
    """
    from .modules.accounts import models as account_models  # noqa: F401
    from .modules.listings import models as listing_models  # noqa: F401
    from .modules.rental_requests import models as request_models  # noqa: F401
    from .modules.session import models as session_models  # noqa: F401

    async with engine.begin() as conn:
        found = await conn.run_sync(_read_schema_version)
        if found is not None and found != str(schema_version):
            raise StorageUnavailableError(
                f"Store schema version {found} is not supported "
                f"(expected {schema_version})",
                details={"found": found, "expected": schema_version},
            )

        await conn.run_sync(Base.metadata.create_all)
        if found is None:
            await conn.execute(
                insert(StoreMeta).values(key="schema_version", value=str(schema_version))
            )
            logger.info(f"Created store at schema version {schema_version}")
