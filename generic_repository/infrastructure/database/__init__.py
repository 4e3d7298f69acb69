from .base import Base, RecordMixin, UTCDateTime
from .session import (
    async_session_factory,
    get_async_engine,
    get_db_session,
    get_engine,
    session_factory,
    session_scope,
)
from .tracking import PendingChanges
from .validation import RecordValidator

__all__ = [
    "Base",
    "RecordMixin",
    "UTCDateTime",
    "async_session_factory",
    "get_async_engine",
    "get_db_session",
    "get_engine",
    "session_factory",
    "session_scope",
    "PendingChanges",
    "RecordValidator",
]
