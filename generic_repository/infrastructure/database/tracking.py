"""Change-tracking helpers shared by the blocking and async repositories.

Everything here works on in-memory session state only; no function in this
module emits SQL.
"""

from dataclasses import dataclass
from typing import Any

from sqlalchemy import Select, inspect, select
from sqlalchemy.orm import InstanceState, Mapper, make_transient_to_detached
from sqlalchemy.orm.attributes import flag_modified, set_committed_value

from generic_repository.domain.entities import RecordKey
from generic_repository.domain.exceptions import RecordContractError

from .query import require_record_type


@dataclass(frozen=True)
class PendingChanges:
    """Counts of what the next save() will flush."""

    new: int
    modified: int
    deleted: int

    @property
    def total(self) -> int:
        return self.new + self.modified + self.deleted


@dataclass(frozen=True)
class VersionSnapshot:
    """The version a modified or deleted record was loaded with."""

    mapper: Mapper
    identity: tuple[Any, ...]
    version: bytes | None

    @property
    def key(self) -> RecordKey:
        entity_id = self.identity[0] if len(self.identity) == 1 else self.identity
        return RecordKey(self.mapper.class_.__name__, entity_id)

    def current_version_query(self) -> Select:
        stmt = select(self.mapper.version_id_col)
        for column, value in zip(self.mapper.primary_key, self.identity):
            stmt = stmt.where(column == value)
        return stmt


_CREATION_AUDIT = ("created_date", "created_by")


def _version_key(mapper: Mapper) -> str:
    return mapper.get_property_by_column(mapper.version_id_col).key


def record_state(record: Any) -> InstanceState:
    """Return the instance state of ``record`` after checking its type's contract."""
    require_record_type(type(record))
    return inspect(record)


def pending_changes(session: Any) -> PendingChanges:
    return PendingChanges(
        new=len(session.new),
        modified=len(session.dirty),
        deleted=len(session.deleted),
    )


def ensure_attached(session: Any, record: Any) -> None:
    """Make ``record`` persistent in ``session`` without loading anything.

    A transient record carrying an identity is treated as reconstructed from
    outside: the values it carries, including its version, become the
    baseline the store checks against at flush.
    """
    state = record_state(record)
    mapper = state.mapper
    version_key = _version_key(mapper)

    if state.persistent and record in session:
        return

    if state.transient:
        identity = mapper.primary_key_from_instance(record)
        if any(value is None for value in identity):
            raise RecordContractError(
                type(record), "cannot attach a record without an identity; use create()"
            )
        if record.__dict__.get(version_key) is None:
            raise RecordContractError(
                type(record), "cannot attach a record without its version token"
            )
        make_transient_to_detached(record)
    elif state.detached and version_key not in state.dict:
        raise RecordContractError(
            type(record), "detached record has no loaded version token; reload it first"
        )

    session.add(record)


def mark_fully_modified(record: Any) -> None:
    """Flag every loaded column except identity, version and creation stamps.

    The next flush then writes the whole row instead of a diff.
    """
    state = inspect(record)
    mapper = state.mapper
    skipped = {_version_key(mapper), *_CREATION_AUDIT}
    skipped.update(mapper.get_property_by_column(column).key for column in mapper.primary_key)
    for prop in mapper.column_attrs:
        if prop.key in skipped or prop.key not in state.dict:
            continue
        flag_modified(record, prop.key)


def snapshot_versions(session: Any) -> list[VersionSnapshot]:
    """Capture the loaded version of every record whose UPDATE/DELETE is version-checked."""
    snapshots: list[VersionSnapshot] = []
    for record in [*session.dirty, *session.deleted]:
        state = inspect(record)
        mapper = state.mapper
        if state.key is None or mapper.version_id_col is None:
            continue
        history = state.attrs[_version_key(mapper)].history
        committed = [*history.deleted, *history.unchanged]
        snapshots.append(
            VersionSnapshot(
                mapper=mapper,
                identity=state.identity,
                version=committed[0] if committed else None,
            )
        )
    return snapshots


def conflicting_keys(
    snapshots: list[VersionSnapshot],
    current_versions: list[bytes | None],
) -> list[RecordKey]:
    """Pair snapshots with stored versions; a missing row counts as a conflict.

    When no mismatch can be identified any more (e.g. the other writer has
    since committed again in a way that matches), every candidate is reported.
    """
    conflicts = [
        snapshot.key
        for snapshot, current in zip(snapshots, current_versions)
        if current is None or current != snapshot.version
    ]
    return conflicts or [snapshot.key for snapshot in snapshots]


def restore_creation_audit(session: Any, record: Any) -> None:
    """Drop in-memory edits of ``created_date`` / ``created_by`` from a stored record.

    Creation stamps are written once, by the INSERT. An edit made while the
    old value was known is reverted in place; an edit made on an expired
    attribute has no old value to go back to, so the attribute is expired
    again and reloads from the store on next access.
    """
    state = inspect(record)
    if state.key is None:
        return
    for key in _CREATION_AUDIT:
        history = state.attrs[key].history
        if history.deleted:
            set_committed_value(record, key, history.deleted[0])
        elif history.added or key in state.committed_state:
            session.expire(record, [key])
