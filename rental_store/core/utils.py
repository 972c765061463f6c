"""Common utilities for the rental store."""

import secrets
import string
import time
from datetime import datetime, timezone

_ID_ALPHABET = string.digits + string.ascii_lowercase


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def generate_record_id(prefix: str) -> str:
    """Generate an opaque record id like house_1712345678901_k3j9x0a1b."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"{prefix}_{int(time.time() * 1000)}_{suffix}"


def contains_term(term: str, *values: str | None) -> bool:
    """Case-insensitive substring match of term against any of values."""
    needle = term.lower()
    return any(needle in value.lower() for value in values if value)
