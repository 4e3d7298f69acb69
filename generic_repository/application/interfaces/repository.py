"""Abstract read-write ports: change tracking and the unit-of-work contract."""

from abc import abstractmethod
from typing import Any

from generic_repository.domain.entities import RecordT

from .read_only_repository import AsyncReadOnlyRepository, ReadOnlyRepository


class Repository(ReadOnlyRepository):
    """Port for generic writes; nothing reaches the store until save()."""

    @abstractmethod
    def create(self, record: RecordT, created_by: str | None = None) -> None:
        """Stamp creation audit fields and register the record for insertion."""
        ...

    @abstractmethod
    def update(self, record: RecordT, modified_by: str | None = None) -> None:
        """Stamp modification audit fields and register a full overwrite.

        Detached records are re-attached first.
        """
        ...

    @abstractmethod
    def delete(self, entity_type: type[RecordT], id: Any) -> None:
        """Register removal of the record with the given identity.

        Raises EntityNotFoundError if there is none.
        """
        ...

    @abstractmethod
    def delete_record(self, record: RecordT) -> None:
        """Register removal of the given record, attaching it if detached."""
        ...

    @abstractmethod
    def save(self) -> None:
        """Flush all registered changes in one transaction.

        Raises ValidationFailedError (nothing flushed) or
        ConcurrencyConflictError (transaction rolled back).
        """
        ...


class AsyncRepository(AsyncReadOnlyRepository):
    """Async twin of Repository."""

    @abstractmethod
    async def create(self, record: RecordT, created_by: str | None = None) -> None:
        ...

    @abstractmethod
    async def update(self, record: RecordT, modified_by: str | None = None) -> None:
        ...

    @abstractmethod
    async def delete(self, entity_type: type[RecordT], id: Any) -> None:
        ...

    @abstractmethod
    async def delete_record(self, record: RecordT) -> None:
        ...

    @abstractmethod
    async def save(self) -> None:
        ...
