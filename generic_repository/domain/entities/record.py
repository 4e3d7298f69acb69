"""The record contract every persisted type satisfies."""

from collections.abc import Iterable
from datetime import datetime
from typing import Any, Protocol, TypeVar

from .validation import FieldValidationError

RECORD_ATTRIBUTES = (
    "id",
    "name",
    "created_date",
    "modified_date",
    "created_by",
    "modified_by",
    "version",
)


class Record(Protocol):
    """Identity, audit fields and concurrency token of a persisted entity.

    ``id`` and ``version`` are assigned by the store; ``version`` changes on
    every successful commit that touches the row and is never written by
    repository code.
    """

    id: Any
    name: str | None
    created_date: datetime
    modified_date: datetime | None
    created_by: str | None
    modified_by: str | None
    version: bytes | None

    def validate(self) -> Iterable[FieldValidationError]:
        """Record-level rules checked before save; yields nothing when valid."""
        ...


RecordT = TypeVar("RecordT", bound=Record)
