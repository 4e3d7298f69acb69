"""Validation result types produced at save time."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class FieldValidationError:
    """A single failed rule on one field of one entity."""

    field: str
    message: str


@dataclass(frozen=True)
class RecordKey:
    """Type name and identity of a persisted entity."""

    entity_type: str
    entity_id: Any

    def __str__(self) -> str:
        return f"{self.entity_type}(id={self.entity_id!r})"


@dataclass
class EntityValidationResult:
    """Validation outcome for one pending entity."""

    entity: object
    errors: list[FieldValidationError] = field(default_factory=list)

    @property
    def entity_type(self) -> str:
        return type(self.entity).__name__

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass
class ValidationReport:
    """Aggregated validation outcome of a whole unit of work."""

    results: list[EntityValidationResult] = field(default_factory=list)

    @property
    def failures(self) -> list[EntityValidationResult]:
        return [result for result in self.results if not result.is_valid]

    @property
    def errors(self) -> list[FieldValidationError]:
        return [error for result in self.results for error in result.errors]

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def message(self) -> str:
        """All error messages, in entity order, joined with ``"; "``."""
        return "; ".join(error.message for error in self.errors)
