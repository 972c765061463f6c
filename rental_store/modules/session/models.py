"""Session cache model: a key to JSON-string table outside the collections."""

from datetime import datetime

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ...core.database_types import UTCDateTime
from ...core.utils import utc_now
from ...database import Base


class SessionCacheEntry(Base):
    """One serialized value per key; no secondary indexes."""

    __tablename__ = "session_cache"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utc_now, onupdate=utc_now
    )

    def __repr__(self) -> str:
        return f"<SessionCacheEntry(key={self.key})>"
