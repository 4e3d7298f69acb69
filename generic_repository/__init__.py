"""Generic data repository: uniform CRUD over any SQLAlchemy-mapped record type."""

from generic_repository.application.interfaces import (
    AsyncReadOnlyRepository,
    AsyncRepository,
    ReadOnlyRepository,
    Repository,
)
from generic_repository.domain.entities import (
    EntityValidationResult,
    FieldValidationError,
    Record,
    RecordKey,
    ValidationReport,
)
from generic_repository.domain.exceptions import (
    AmbiguousResultError,
    ConcurrencyConflictError,
    EntityNotFoundError,
    IncludePathError,
    RecordContractError,
    RepositoryError,
    ValidationFailedError,
)
from generic_repository.infrastructure.database.base import Base, RecordMixin, UTCDateTime
from generic_repository.infrastructure.database.repositories import (
    AsyncSQLAlchemyReadOnlyRepository,
    AsyncSQLAlchemyRepository,
    SQLAlchemyReadOnlyRepository,
    SQLAlchemyRepository,
)

__version__ = "0.1.0"

__all__ = [
    "AsyncReadOnlyRepository",
    "AsyncRepository",
    "ReadOnlyRepository",
    "Repository",
    "EntityValidationResult",
    "FieldValidationError",
    "Record",
    "RecordKey",
    "ValidationReport",
    "AmbiguousResultError",
    "ConcurrencyConflictError",
    "EntityNotFoundError",
    "IncludePathError",
    "RecordContractError",
    "RepositoryError",
    "ValidationFailedError",
    "Base",
    "RecordMixin",
    "UTCDateTime",
    "AsyncSQLAlchemyReadOnlyRepository",
    "AsyncSQLAlchemyRepository",
    "SQLAlchemyReadOnlyRepository",
    "SQLAlchemyRepository",
]
