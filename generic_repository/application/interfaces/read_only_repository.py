"""Abstract read ports: the query contract, not the implementation."""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from typing import Any, TypeAlias

from generic_repository.domain.entities import RecordT

# Opaque to the repository: handed to the store exactly as given.
Filter: TypeAlias = Any
OrderBy: TypeAlias = Any | Sequence[Any]
Include: TypeAlias = str | Iterable[str]


class ReadOnlyRepository(ABC):
    """Port for generic reads over any record type."""

    @abstractmethod
    def get_all(
        self,
        entity_type: type[RecordT],
        order_by: OrderBy | None = None,
        include: Include | None = None,
        skip: int | None = None,
        take: int | None = None,
    ) -> list[RecordT]:
        """Return every record of ``entity_type``.

        ``include`` names relationships to eager-load; ``skip``/``take`` page
        the ordered result. Without ``order_by`` the store decides the order.
        """
        ...

    @abstractmethod
    def get(
        self,
        entity_type: type[RecordT],
        filter: Filter | None = None,
        order_by: OrderBy | None = None,
        include: Include | None = None,
        skip: int | None = None,
        take: int | None = None,
    ) -> list[RecordT]:
        """Return the records matching ``filter``, ordered and paged."""
        ...

    @abstractmethod
    def get_one(
        self,
        entity_type: type[RecordT],
        filter: Filter | None = None,
        include: Include | None = None,
    ) -> RecordT | None:
        """Return the single match or None. Raises AmbiguousResultError on several."""
        ...

    @abstractmethod
    def get_first(
        self,
        entity_type: type[RecordT],
        filter: Filter | None = None,
        order_by: OrderBy | None = None,
        include: Include | None = None,
    ) -> RecordT | None:
        """Return the first match under ``order_by``, or None."""
        ...

    @abstractmethod
    def get_by_id(self, entity_type: type[RecordT], id: Any) -> RecordT | None:
        """Return the record with the given identity, or None."""
        ...

    @abstractmethod
    def get_count(self, entity_type: type[RecordT], filter: Filter | None = None) -> int:
        """Count the records matching ``filter``."""
        ...

    @abstractmethod
    def get_exists(self, entity_type: type[RecordT], filter: Filter | None = None) -> bool:
        """Check whether any record matches ``filter`` without loading it."""
        ...


class AsyncReadOnlyRepository(ABC):
    """Async twin of ReadOnlyRepository with awaitable results."""

    @abstractmethod
    async def get_all(
        self,
        entity_type: type[RecordT],
        order_by: OrderBy | None = None,
        include: Include | None = None,
        skip: int | None = None,
        take: int | None = None,
    ) -> list[RecordT]:
        ...

    @abstractmethod
    async def get(
        self,
        entity_type: type[RecordT],
        filter: Filter | None = None,
        order_by: OrderBy | None = None,
        include: Include | None = None,
        skip: int | None = None,
        take: int | None = None,
    ) -> list[RecordT]:
        ...

    @abstractmethod
    async def get_one(
        self,
        entity_type: type[RecordT],
        filter: Filter | None = None,
        include: Include | None = None,
    ) -> RecordT | None:
        ...

    @abstractmethod
    async def get_first(
        self,
        entity_type: type[RecordT],
        filter: Filter | None = None,
        order_by: OrderBy | None = None,
        include: Include | None = None,
    ) -> RecordT | None:
        ...

    @abstractmethod
    async def get_by_id(self, entity_type: type[RecordT], id: Any) -> RecordT | None:
        ...

    @abstractmethod
    async def get_count(self, entity_type: type[RecordT], filter: Filter | None = None) -> int:
        ...

    @abstractmethod
    async def get_exists(self, entity_type: type[RecordT], filter: Filter | None = None) -> bool:
        ...
