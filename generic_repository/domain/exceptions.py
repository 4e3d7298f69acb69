"""Domain-specific exceptions — framework-independent."""

from typing import Any

from generic_repository.domain.entities.validation import (
    EntityValidationResult,
    FieldValidationError,
    RecordKey,
    ValidationReport,
)


def _type_name(entity_type: type | str) -> str:
    return entity_type if isinstance(entity_type, str) else entity_type.__name__


class RepositoryError(Exception):
    """Base class for every error raised by the repository layer."""


class EntityNotFoundError(RepositoryError):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: type | str, entity_id: Any):
        self.entity_type = _type_name(entity_type)
        self.entity_id = entity_id
        super().__init__(f"{self.entity_type} with id '{entity_id}' not found")


class AmbiguousResultError(RepositoryError):
    """Raised when a single-result query matches more than one entity."""

    def __init__(self, entity_type: type | str):
        self.entity_type = _type_name(entity_type)
        super().__init__(
            f"Expected at most one {self.entity_type} for the given filter, found several"
        )


class RecordContractError(RepositoryError):
    """Raised when a type or instance does not satisfy the record contract."""

    def __init__(self, entity_type: type | str, reason: str):
        self.entity_type = _type_name(entity_type)
        self.reason = reason
        super().__init__(f"{self.entity_type} violates the record contract: {reason}")


class IncludePathError(RepositoryError):
    """Raised when an eager-load path names something that is not a relationship."""

    def __init__(self, entity_type: type | str, path: str):
        self.entity_type = _type_name(entity_type)
        self.path = path
        super().__init__(f"'{path}' is not a relationship of {self.entity_type}")


class ValidationFailedError(RepositoryError):
    """Raised by ``save()`` when pending entities fail validation.

    All field errors of every failing entity are reported at once; the
    per-entity breakdown stays available on ``report``.
    """

    def __init__(self, report: ValidationReport):
        self.report = report
        super().__init__(
            "Validation failed for one or more entities. "
            f"The validation errors are: {report.message}"
        )

    @property
    def entity_validation_errors(self) -> list[EntityValidationResult]:
        return self.report.failures

    @property
    def errors(self) -> list[FieldValidationError]:
        return self.report.errors


class ConcurrencyConflictError(RepositoryError):
    """Raised when a saved entity's version no longer matches the stored row.

    The unit of work has been rolled back; reload the listed entities and
    reapply the change.
    """

    def __init__(self, conflicts: list[RecordKey]):
        self.conflicts = conflicts
        described = ", ".join(str(key) for key in conflicts) or "unknown entity"
        super().__init__(
            f"Concurrency conflict on {described}: the stored version changed since it was loaded"
        )

    @property
    def entity_type(self) -> str | None:
        return self.conflicts[0].entity_type if self.conflicts else None

    @property
    def entity_id(self) -> Any:
        return self.conflicts[0].entity_id if self.conflicts else None
