from .read_only_repository import (
    AsyncReadOnlyRepository,
    Filter,
    Include,
    OrderBy,
    ReadOnlyRepository,
)
from .repository import AsyncRepository, Repository

__all__ = [
    "AsyncReadOnlyRepository",
    "AsyncRepository",
    "Filter",
    "Include",
    "OrderBy",
    "ReadOnlyRepository",
    "Repository",
]
