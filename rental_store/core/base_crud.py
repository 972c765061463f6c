"""
Base collection operations for consistent data access across all record types.

Every collection exposes the same contract: add, get, get_by_index, get_all,
update (full replace, upsert) and delete (no cascade). Records go in and come
out as pydantic models; the SQLAlchemy rows never leave this layer.
"""

import asyncio
from abc import ABC
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

import pydantic
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .exceptions import DatabaseError, DuplicateKeyError, ValidationError
from .logging import get_logger

if TYPE_CHECKING:
    from ..store import RecordStore

logger = get_logger(__name__)

# Generic type variables for type safety
ModelType = TypeVar("ModelType")
RecordType = TypeVar("RecordType", bound=pydantic.BaseModel)


@dataclass(frozen=True)
class IndexSpec:
    """Secondary lookup on a single column of a collection."""

    column: str
    unique: bool = False


class BaseCollection(Generic[ModelType, RecordType], ABC):
    """
    Base collection class providing the store's per-collection operations.

    Attributes:
        name: Collection name (users, houses, requests)
        model: SQLAlchemy model class backing the collection
        record_schema: pydantic model records are validated into
        indexes: Secondary indexes available to get_by_index
    """

    name: str = ""
    model: type[ModelType]
    record_schema: type[RecordType]
    indexes: dict[str, IndexSpec] = {}

    def __init__(self, store: "RecordStore"):
        """Initialize the collection against its owning store."""
        self._store = store
        # One writer at a time per collection
        self._write_lock = asyncio.Lock()

    # ----- Conversion helpers -----

    def _coerce(self, record: RecordType | Mapping[str, Any]) -> RecordType:
        """Validate a record or mapping into a fresh instance of the record schema."""
        if isinstance(record, pydantic.BaseModel):
            record = record.model_dump()
        try:
            return self.record_schema.model_validate(record)
        except pydantic.ValidationError as e:
            raise ValidationError(
                f"Invalid {self.name} record: {e.error_count()} error(s)",
                details={"errors": e.errors(include_url=False)},
            ) from e

    def _to_row(self, record: RecordType) -> ModelType:
        return self.model(**record.model_dump())

    def _to_record(self, row: ModelType) -> RecordType:
        return self.record_schema.model_validate(row)

    def _index(self, index_name: str) -> IndexSpec:
        try:
            return self.indexes[index_name]
        except KeyError:
            raise ValidationError(
                f"Unknown index on {self.name}; available: {sorted(self.indexes)}",
                field="index_name",
                value=index_name,
            ) from None

    @staticmethod
    def _unique_violation_columns(error: IntegrityError) -> list[str] | None:
        """Columns named by a SQLite UNIQUE/PRIMARY KEY failure, else None."""
        message = str(error.orig)
        marker = "UNIQUE constraint failed:"
        if marker not in message:
            return None
        columns = message.split(marker, 1)[1].split(",")
        return [column.strip().rsplit(".", 1)[-1] for column in columns]

    def _conflict_key(
        self, columns: list[str], key: Any, record: RecordType | None
    ) -> Any:
        """The violated value: the id, or the indexed value(s) of the record."""
        if record is None or columns == ["id"]:
            return key
        values = tuple(getattr(record, column, None) for column in columns)
        return values[0] if len(values) == 1 else values

    @asynccontextmanager
    async def _session(
        self, operation: str, key: Any = None, record: RecordType | None = None
    ) -> AsyncIterator[AsyncSession]:
        """Open a session and translate engine faults into store errors."""
        async with self._store.session_scope() as db:
            try:
                yield db
            except IntegrityError as e:
                await db.rollback()
                columns = self._unique_violation_columns(e)
                if columns is None:
                    logger.warning(
                        f"Constraint violation on {self.name}.{operation}",
                        extra={"collection": self.name, "key": key, "error": str(e.orig)},
                    )
                    raise ValidationError(
                        f"{self.name} record violates a constraint: {e.orig}",
                        value=key,
                        details={"operation": operation, "error": str(e.orig)},
                    ) from e

                conflict = self._conflict_key(columns, key, record)
                logger.warning(
                    f"Duplicate key on {self.name}.{operation}",
                    extra={
                        "collection": self.name,
                        "key": conflict,
                        "columns": columns,
                    },
                )
                raise DuplicateKeyError(
                    self.name,
                    conflict,
                    details={
                        "operation": operation,
                        "columns": columns,
                        "record_id": key,
                        "error": str(e.orig),
                    },
                ) from e
            except SQLAlchemyError as e:
                await db.rollback()
                logger.error(
                    f"Storage failure on {self.name}.{operation}",
                    extra={"collection": self.name, "key": key},
                    exc_info=True,
                )
                raise DatabaseError(
                    f"{operation} on {self.name} failed",
                    details={"collection": self.name, "operation": operation},
                ) from e

    # ----- Operations -----

    async def add(self, record: RecordType | Mapping[str, Any]) -> RecordType:
        """
        Insert a new record.

        Args:
            record: Record to insert

        Returns:
            The stored record

        Raises:
            DuplicateKeyError: If the id or a unique index value already exists
        """
        record = self._coerce(record)
        async with self._write_lock:
            async with self._session("add", record.id, record) as db:
                db.add(self._to_row(record))
                await db.commit()
        logger.debug(f"Added {self.name} record", extra={"key": record.id})
        return record

    async def get(self, record_id: str) -> RecordType | None:
        """Get a record by id, or None if absent."""
        async with self._session("get", record_id) as db:
            row = await db.get(self.model, record_id)
            return self._to_record(row) if row is not None else None

    async def get_by_index(self, index_name: str, value: Any) -> list[RecordType]:
        """
        Get all records whose indexed field equals value.

        Args:
            index_name: Name of a secondary index of this collection
            value: Value to match

        Returns:
            Matching records in no particular order (at most one for a unique index)

        Raises:
            ValidationError: If the index does not exist
        """
        spec = self._index(index_name)
        column = getattr(self.model, spec.column)
        async with self._session("get_by_index", value) as db:
            result = await db.execute(select(self.model).where(column == value))
            return [self._to_record(row) for row in result.scalars().all()]

    async def find_one_by_index(self, index_name: str, value: Any) -> RecordType | None:
        """Get the first record matching an index value, or None."""
        matches = await self.get_by_index(index_name, value)
        return matches[0] if matches else None

    async def get_all(self) -> list[RecordType]:
        """Get every record in the collection, in no particular order."""
        async with self._session("get_all") as db:
            result = await db.execute(select(self.model))
            return [self._to_record(row) for row in result.scalars().all()]

    async def update(self, record: RecordType | Mapping[str, Any]) -> RecordType:
        """
        Replace a record by id, inserting it if absent.

        Fields left at their defaults in the new record are not carried over
        from the old one.

        Raises:
            DuplicateKeyError: If a unique index value belongs to another record
        """
        record = self._coerce(record)
        async with self._write_lock:
            async with self._session("update", record.id, record) as db:
                await db.merge(self._to_row(record))
                await db.commit()
        logger.debug(f"Updated {self.name} record", extra={"key": record.id})
        return record

    async def delete(self, record_id: str) -> None:
        """Delete a record if present. Dependent records are left untouched."""
        async with self._write_lock:
            async with self._session("delete", record_id) as db:
                await db.execute(delete(self.model).where(self.model.id == record_id))
                await db.commit()
        logger.debug(f"Deleted {self.name} record", extra={"key": record_id})

    async def count(self) -> int:
        """Count records in the collection."""
        async with self._session("count") as db:
            result = await db.execute(select(func.count()).select_from(self.model))
            return result.scalar() or 0
