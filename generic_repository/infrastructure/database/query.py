"""Statement composition shared by the blocking and async read repositories.

Filters and orderings are SQLAlchemy expressions supplied by the caller and
are placed into the statement untouched. Composition order is fixed:
filter, then order, then offset, then limit.
"""

import logging
from collections.abc import Iterable, Iterator, Sequence
from functools import lru_cache
from typing import Any

from sqlalchemy import Select, func, inspect, literal, select
from sqlalchemy.orm import Mapper, joinedload, selectinload

from generic_repository.domain.entities import RECORD_ATTRIBUTES
from generic_repository.domain.exceptions import IncludePathError, RecordContractError

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def require_record_type(entity_type: type) -> Mapper:
    """Return the mapper of ``entity_type`` after checking the record contract."""
    if not isinstance(entity_type, type):
        raise RecordContractError(repr(entity_type), "not a class")
    mapper = inspect(entity_type, raiseerr=False)
    if not isinstance(mapper, Mapper):
        raise RecordContractError(entity_type, "not a mapped class")

    missing = [name for name in RECORD_ATTRIBUTES if name not in mapper.column_attrs]
    if missing:
        raise RecordContractError(entity_type, f"missing columns {', '.join(missing)}")
    if mapper.version_id_col is None:
        raise RecordContractError(entity_type, "no version counter configured")
    return mapper


def split_include(include: str | Iterable[str] | None) -> list[str]:
    """Normalise ``"a, b.c"`` or ``["a", "b.c"]`` into a list of paths."""
    if include is None:
        return []
    if isinstance(include, str):
        include = include.split(",")
    return [path.strip() for path in include if path and path.strip()]


def loader_options(entity_type: type, include: str | Iterable[str] | None) -> Iterator[Any]:
    """Yield one eager-load option per include path.

    Collections are loaded with a follow-up SELECT IN, scalar references with
    a JOIN, both inside the same execute call.
    """
    for path in split_include(include):
        option: Any = None
        current = entity_type
        for name in path.split("."):
            mapper = inspect(current)
            if name not in mapper.relationships:
                raise IncludePathError(current, path)
            relationship = mapper.relationships[name]
            attribute = getattr(current, name)
            if option is None:
                option = selectinload(attribute) if relationship.uselist else joinedload(attribute)
            elif relationship.uselist:
                option = option.selectinload(attribute)
            else:
                option = option.joinedload(attribute)
            current = relationship.mapper.class_
        if option is not None:
            yield option


def _order_clauses(order_by: Any) -> Sequence[Any]:
    if order_by is None:
        return ()
    if isinstance(order_by, (list, tuple)):
        return order_by
    return (order_by,)


def _check_window(skip: int | None, take: int | None) -> None:
    if skip is not None and skip < 0:
        raise ValueError(f"skip must be non-negative, got {skip}")
    if take is not None and take < 0:
        raise ValueError(f"take must be non-negative, got {take}")


def build_select(
    entity_type: type,
    filter: Any = None,
    order_by: Any = None,
    include: str | Iterable[str] | None = None,
    skip: int | None = None,
    take: int | None = None,
) -> Select:
    """Compose the SELECT for a collection or single-result read."""
    require_record_type(entity_type)
    _check_window(skip, take)

    stmt = select(entity_type)
    if filter is not None:
        stmt = stmt.where(filter)

    options = list(loader_options(entity_type, include))
    if options:
        stmt = stmt.options(*options)

    clauses = _order_clauses(order_by)
    if clauses:
        stmt = stmt.order_by(*clauses)
    elif skip is not None or take is not None:
        logger.debug(
            "Paging %s without order_by, row order is up to the store",
            entity_type.__name__,
        )

    if skip is not None:
        stmt = stmt.offset(skip)
    if take is not None:
        stmt = stmt.limit(take)
    return stmt


def build_count(entity_type: type, filter: Any = None) -> Select:
    require_record_type(entity_type)
    stmt = select(func.count()).select_from(entity_type)
    if filter is not None:
        stmt = stmt.where(filter)
    return stmt


def build_exists(entity_type: type, filter: Any = None) -> Select:
    """``SELECT EXISTS (SELECT 1 FROM ... WHERE filter)``; no rows are loaded."""
    require_record_type(entity_type)
    inner = select(literal(1)).select_from(entity_type)
    if filter is not None:
        inner = inner.where(filter)
    return select(inner.exists())
