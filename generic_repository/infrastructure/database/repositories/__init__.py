from .read_only_repository import (
    AsyncSQLAlchemyReadOnlyRepository,
    SQLAlchemyReadOnlyRepository,
)
from .repository import AsyncSQLAlchemyRepository, SQLAlchemyRepository

__all__ = [
    "AsyncSQLAlchemyReadOnlyRepository",
    "AsyncSQLAlchemyRepository",
    "SQLAlchemyReadOnlyRepository",
    "SQLAlchemyRepository",
]
