"""Unit tests for repository exceptions."""

from generic_repository.domain.entities import RecordKey
from generic_repository.domain.exceptions import (
    AmbiguousResultError,
    ConcurrencyConflictError,
    EntityNotFoundError,
    RecordContractError,
    RepositoryError,
)
from tests.models import Widget


def test_not_found_names_type_and_id():
    error = EntityNotFoundError(Widget, 42)
    assert error.entity_type == "Widget"
    assert error.entity_id == 42
    assert str(error) == "Widget with id '42' not found"


def test_conflict_exposes_first_conflicting_record():
    error = ConcurrencyConflictError([RecordKey("Widget", 3), RecordKey("Part", 9)])
    assert error.entity_type == "Widget"
    assert error.entity_id == 3
    assert "Widget(id=3), Part(id=9)" in str(error)


def test_conflict_without_keys_still_describes_itself():
    error = ConcurrencyConflictError([])
    assert error.entity_type is None
    assert "unknown entity" in str(error)


def test_all_errors_share_a_base():
    for error in (
        AmbiguousResultError("Widget"),
        RecordContractError(Widget, "reason"),
        EntityNotFoundError("Widget", 1),
    ):
        assert isinstance(error, RepositoryError)
