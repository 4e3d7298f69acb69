"""Generic read repositories backed by SQLAlchemy sessions."""

import logging
from typing import Any

from sqlalchemy import Result
from sqlalchemy.exc import MultipleResultsFound
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from generic_repository.application.interfaces import (
    AsyncReadOnlyRepository,
    Filter,
    Include,
    OrderBy,
    ReadOnlyRepository,
)
from generic_repository.domain.entities import RecordT
from generic_repository.domain.exceptions import AmbiguousResultError
from generic_repository.infrastructure.database.query import (
    build_count,
    build_exists,
    build_select,
    require_record_type,
)

logger = logging.getLogger(__name__)


class SQLAlchemyReadOnlyRepository(ReadOnlyRepository):
    """Implements the ReadOnlyRepository port over a blocking Session.

    The session is owned by the caller; the repository never opens, commits
    or closes it.

    Reads never flush pending changes: they see the store as of the last
    save(), and nothing reaches the store without passing validation.
    """

    def __init__(self, session: Session):
        self._session = session

    @property
    def session(self) -> Session:
        return self._session

    def _execute(self, stmt: Any) -> Result[Any]:
        # rows and eager loads are fetched inside the block; the result is buffered
        with self._session.no_autoflush:
            frozen = self._session.execute(stmt).freeze()
        return frozen()

    def get_all(
        self,
        entity_type: type[RecordT],
        order_by: OrderBy | None = None,
        include: Include | None = None,
        skip: int | None = None,
        take: int | None = None,
    ) -> list[RecordT]:
        return self.get(entity_type, None, order_by, include, skip, take)

    def get(
        self,
        entity_type: type[RecordT],
        filter: Filter | None = None,
        order_by: OrderBy | None = None,
        include: Include | None = None,
        skip: int | None = None,
        take: int | None = None,
    ) -> list[RecordT]:
        stmt = build_select(entity_type, filter, order_by, include, skip, take)
        logger.debug("get %s skip=%s take=%s", entity_type.__name__, skip, take)
        result = self._execute(stmt)
        return list(result.scalars().all())

    def get_one(
        self,
        entity_type: type[RecordT],
        filter: Filter | None = None,
        include: Include | None = None,
    ) -> RecordT | None:
        stmt = build_select(entity_type, filter, include=include)
        result = self._execute(stmt)
        try:
            return result.scalars().one_or_none()
        except MultipleResultsFound as exc:
            raise AmbiguousResultError(entity_type) from exc

    def get_first(
        self,
        entity_type: type[RecordT],
        filter: Filter | None = None,
        order_by: OrderBy | None = None,
        include: Include | None = None,
    ) -> RecordT | None:
        stmt = build_select(entity_type, filter, order_by, include, take=1)
        result = self._execute(stmt)
        return result.scalars().first()

    def get_by_id(self, entity_type: type[RecordT], id: Any) -> RecordT | None:
        require_record_type(entity_type)
        with self._session.no_autoflush:
            return self._session.get(entity_type, id)

    def get_count(self, entity_type: type[RecordT], filter: Filter | None = None) -> int:
        result = self._execute(build_count(entity_type, filter))
        return result.scalar_one()

    def get_exists(self, entity_type: type[RecordT], filter: Filter | None = None) -> bool:
        result = self._execute(build_exists(entity_type, filter))
        return bool(result.scalar_one())


class AsyncSQLAlchemyReadOnlyRepository(AsyncReadOnlyRepository):
    """Implements the AsyncReadOnlyRepository port using SQLAlchemy async sessions.

    Relationships are not lazy-loadable under asyncio; pass ``include`` for
    every relationship the caller will touch.
    Like the blocking repository, reads never flush pending changes.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    @property
    def session(self) -> AsyncSession:
        return self._session

    async def _execute(self, stmt: Any) -> Result[Any]:
        # async results come back fully buffered
        with self._session.no_autoflush:
            return await self._session.execute(stmt)

    async def get_all(
        self,
        entity_type: type[RecordT],
        order_by: OrderBy | None = None,
        include: Include | None = None,
        skip: int | None = None,
        take: int | None = None,
    ) -> list[RecordT]:
        return await self.get(entity_type, None, order_by, include, skip, take)

    async def get(
        self,
        entity_type: type[RecordT],
        filter: Filter | None = None,
        order_by: OrderBy | None = None,
        include: Include | None = None,
        skip: int | None = None,
        take: int | None = None,
    ) -> list[RecordT]:
        stmt = build_select(entity_type, filter, order_by, include, skip, take)
        logger.debug("get %s skip=%s take=%s", entity_type.__name__, skip, take)
        result = await self._execute(stmt)
        return list(result.scalars().all())

    async def get_one(
        self,
        entity_type: type[RecordT],
        filter: Filter | None = None,
        include: Include | None = None,
    ) -> RecordT | None:
        stmt = build_select(entity_type, filter, include=include)
        result = await self._execute(stmt)
        try:
            return result.scalars().one_or_none()
        except MultipleResultsFound as exc:
            raise AmbiguousResultError(entity_type) from exc

    async def get_first(
        self,
        entity_type: type[RecordT],
        filter: Filter | None = None,
        order_by: OrderBy | None = None,
        include: Include | None = None,
    ) -> RecordT | None:
        stmt = build_select(entity_type, filter, order_by, include, take=1)
        result = await self._execute(stmt)
        return result.scalars().first()

    async def get_by_id(self, entity_type: type[RecordT], id: Any) -> RecordT | None:
        require_record_type(entity_type)
        with self._session.no_autoflush:
            return await self._session.get(entity_type, id)

    async def get_count(self, entity_type: type[RecordT], filter: Filter | None = None) -> int:
        result = await self._execute(build_count(entity_type, filter))
        return result.scalar_one()

    async def get_exists(self, entity_type: type[RecordT], filter: Filter | None = None) -> bool:
        result = await self._execute(build_exists(entity_type, filter))
        return bool(result.scalar_one())
