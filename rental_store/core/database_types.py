"""Custom database types for the SQLite engine."""

import enum
from datetime import timezone

from sqlalchemy import DateTime, Enum, TypeDecorator

from .utils import ensure_utc


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC datetime for SQLite.

    SQLite has no timezone storage, so values are normalized to UTC and stored
    naive. Automatically re-attaches UTC when reading back.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        """Convert to naive UTC when saving to database."""
        if value is None:
            return value
        return ensure_utc(value).replace(tzinfo=None)

    def process_result_value(self, value, dialect):
        """Attach UTC when reading from database."""
        if value is None:
            return value
        return value.replace(tzinfo=timezone.utc)


def enum_values_type(enum_cls: type[enum.Enum]) -> Enum:
    """Enum column that stores member values ("pending") rather than names."""
    return Enum(
        enum_cls,
        values_callable=lambda members: [member.value for member in members],
        native_enum=False,
        length=20,
        validate_strings=True,
    )
