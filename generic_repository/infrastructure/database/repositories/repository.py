"""Generic read-write repositories backed by SQLAlchemy sessions.

Writes only touch the session's in-memory tracking; ``save()`` is the single
point where the store is written, as one transaction.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from generic_repository.application.interfaces import AsyncRepository, Repository
from generic_repository.domain.entities import RecordKey, RecordT
from generic_repository.domain.exceptions import (
    ConcurrencyConflictError,
    EntityNotFoundError,
    ValidationFailedError,
)
from generic_repository.infrastructure.database.base import utcnow
from generic_repository.infrastructure.database.tracking import (
    PendingChanges,
    VersionSnapshot,
    conflicting_keys,
    ensure_attached,
    mark_fully_modified,
    pending_changes,
    record_state,
    restore_creation_audit,
    snapshot_versions,
)
from generic_repository.infrastructure.database.validation import RecordValidator

from .read_only_repository import (
    AsyncSQLAlchemyReadOnlyRepository,
    SQLAlchemyReadOnlyRepository,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _stamp_created(record: Any, created_by: str | None, clock: Clock) -> None:
    record_state(record)
    record.created_date = clock()
    record.created_by = created_by


def _stamp_modified(record: Any, modified_by: str | None, clock: Clock) -> None:
    record.modified_date = clock()
    record.modified_by = modified_by


def _log_conflict(conflicts: list[RecordKey]) -> None:
    logger.warning(
        "Save rolled back: concurrency conflict on %s",
        ", ".join(str(key) for key in conflicts),
    )


def _log_invalid(error: ValidationFailedError) -> None:
    logger.warning(
        "Save rejected: %d validation error(s) on %d record(s): %s",
        len(error.errors),
        len(error.entity_validation_errors),
        error.report.message,
    )


class SQLAlchemyRepository(SQLAlchemyReadOnlyRepository, Repository):
    """Implements the Repository port over a blocking Session."""

    def __init__(
        self,
        session: Session,
        validator: RecordValidator | None = None,
        clock: Clock = utcnow,
    ):
        super().__init__(session)
        self._validator = validator or RecordValidator()
        self._clock = clock

    def pending_changes(self) -> PendingChanges:
        return pending_changes(self._session)

    def create(self, record: RecordT, created_by: str | None = None) -> None:
        _stamp_created(record, created_by, self._clock)
        self._session.add(record)

    def update(self, record: RecordT, modified_by: str | None = None) -> None:
        ensure_attached(self._session, record)
        _stamp_modified(record, modified_by, self._clock)
        restore_creation_audit(self._session, record)
        mark_fully_modified(record)

    def delete(self, entity_type: type[RecordT], id: Any) -> None:
        record = self.get_by_id(entity_type, id)
        if record is None:
            raise EntityNotFoundError(entity_type, id)
        self.delete_record(record)

    def delete_record(self, record: RecordT) -> None:
        state = record_state(record)
        if state.pending:
            # never flushed: dropping it from the session is the whole removal
            self._session.expunge(record)
            return
        ensure_attached(self._session, record)
        self._session.delete(record)

    def save(self) -> None:
        report = self._validator.validate_pending(self._session)
        if not report.is_valid:
            error = ValidationFailedError(report)
            _log_invalid(error)
            raise error

        changes = self.pending_changes()
        snapshots = snapshot_versions(self._session)
        try:
            self._session.commit()
        except StaleDataError as exc:
            self._session.rollback()
            conflicts = self._find_conflicts(snapshots)
            _log_conflict(conflicts)
            raise ConcurrencyConflictError(conflicts) from exc

        logger.info(
            "Saved changes: %d new, %d modified, %d deleted",
            changes.new,
            changes.modified,
            changes.deleted,
        )

    def _find_conflicts(self, snapshots: list[VersionSnapshot]) -> list[RecordKey]:
        current = [self._session.scalar(s.current_version_query()) for s in snapshots]
        self._session.rollback()
        return conflicting_keys(snapshots, current)


class AsyncSQLAlchemyRepository(AsyncSQLAlchemyReadOnlyRepository, AsyncRepository):
    """Implements the AsyncRepository port using SQLAlchemy async sessions."""

    def __init__(
        self,
        session: AsyncSession,
        validator: RecordValidator | None = None,
        clock: Clock = utcnow,
    ):
        super().__init__(session)
        self._validator = validator or RecordValidator()
        self._clock = clock

    def pending_changes(self) -> PendingChanges:
        return pending_changes(self._session)

    async def create(self, record: RecordT, created_by: str | None = None) -> None:
        _stamp_created(record, created_by, self._clock)
        self._session.add(record)

    async def update(self, record: RecordT, modified_by: str | None = None) -> None:
        ensure_attached(self._session, record)
        _stamp_modified(record, modified_by, self._clock)
        restore_creation_audit(self._session, record)
        mark_fully_modified(record)

    async def delete(self, entity_type: type[RecordT], id: Any) -> None:
        record = await self.get_by_id(entity_type, id)
        if record is None:
            raise EntityNotFoundError(entity_type, id)
        await self.delete_record(record)

    async def delete_record(self, record: RecordT) -> None:
        state = record_state(record)
        if state.pending:
            self._session.expunge(record)
            return
        ensure_attached(self._session, record)
        await self._session.delete(record)

    async def save(self) -> None:
        report = self._validator.validate_pending(self._session)
        if not report.is_valid:
            error = ValidationFailedError(report)
            _log_invalid(error)
            raise error

        changes = self.pending_changes()
        snapshots = snapshot_versions(self._session)
        try:
            await self._session.commit()
        except StaleDataError as exc:
            await self._session.rollback()
            conflicts = await self._find_conflicts(snapshots)
            _log_conflict(conflicts)
            raise ConcurrencyConflictError(conflicts) from exc

        logger.info(
            "Saved changes: %d new, %d modified, %d deleted",
            changes.new,
            changes.modified,
            changes.deleted,
        )

    async def _find_conflicts(self, snapshots: list[VersionSnapshot]) -> list[RecordKey]:
        current = [await self._session.scalar(s.current_version_query()) for s in snapshots]
        await self._session.rollback()
        return conflicting_keys(snapshots, current)
