"""Common schemas shared across all collections."""

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field

from ...core.utils import ensure_utc, utc_now

# Datetime normalized to aware UTC; naive input is taken to be UTC
UTCDatetime = Annotated[datetime, AfterValidator(ensure_utc)]


class StoreRecord(BaseModel):
    """Base for records kept in a collection: opaque caller-assigned id plus creation time."""

    id: str = Field(..., min_length=1, max_length=64)
    created_at: UTCDatetime = Field(default_factory=utc_now)

    class Config:
        from_attributes = True
