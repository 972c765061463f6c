"""Current-session cache module."""

from .models import SessionCacheEntry
from .session_store import SessionStore

__all__ = [
    "SessionCacheEntry",
    "SessionStore",
]
