"""SQLAlchemy ORM base and the record mixin every repository model uses."""

import uuid
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import DateTime, LargeBinary, String
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column
from sqlalchemy.types import TypeDecorator

from generic_repository.domain.entities import FieldValidationError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _next_version(_current: bytes | None) -> bytes:
    return uuid.uuid4().bytes


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC datetime, also on backends that store it naive (SQLite)."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Any) -> datetime | None:
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value: datetime | None, dialect: Any) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""

    pass


class RecordMixin:
    """Identity, audit columns and optimistic-concurrency token.

    The mapper regenerates ``version`` on every INSERT and UPDATE and adds it
    to the WHERE clause of UPDATE/DELETE, so a row changed by someone else
    since it was loaded raises at flush instead of being overwritten.

    Subclasses may redeclare ``id`` (e.g. a UUID string with a default) but
    must keep ``__mapper_args__`` from this mixin.
    """

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_date: Mapped[datetime] = mapped_column(
        UTCDateTime,
        default=utcnow,
        nullable=False,
    )
    modified_date: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)
    created_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    modified_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    version: Mapped[bytes] = mapped_column(LargeBinary(16), nullable=False)

    @declared_attr.directive
    def __mapper_args__(cls) -> dict[str, Any]:
        # evaluated after the table exists, so the copied column is available
        return {
            "version_id_col": cls.__table__.c.version,
            "version_id_generator": _next_version,
        }

    def validate(self) -> Iterable[FieldValidationError]:
        """Override to add record-level rules checked on save()."""
        return ()

    def __repr__(self) -> str:
        # read the loaded state only; repr must not trigger a lazy load
        state = self.__dict__
        return f"<{type(self).__name__}(id={state.get('id')!r}, name={state.get('name')!r})>"
