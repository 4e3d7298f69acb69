"""Pre-flush validation of pending records against their mapped columns."""

import logging
from collections.abc import Iterable
from typing import Any

from sqlalchemy import Column, String, inspect

from generic_repository.domain.entities import (
    EntityValidationResult,
    FieldValidationError,
    ValidationReport,
)

logger = logging.getLogger(__name__)


class RecordValidator:
    """Checks column constraints plus each record's own ``validate()`` rules.

    Only state already in memory is inspected, so validating never loads
    anything from the store.
    """

    def validate_pending(self, session: Any) -> ValidationReport:
        """Validate every record the session would insert or update."""
        deleted = set(map(id, session.deleted))
        pending = [
            record
            for record in [*session.new, *session.dirty]
            if id(record) not in deleted
        ]
        return self.validate_records(pending)

    def validate_records(self, records: Iterable[Any]) -> ValidationReport:
        report = ValidationReport()
        for record in records:
            result = EntityValidationResult(entity=record)
            result.errors.extend(self._column_errors(record))
            hook = getattr(record, "validate", None)
            if hook is not None:
                result.errors.extend(hook())
            report.results.append(result)
        if not report.is_valid:
            logger.debug(
                "Validation found %d error(s) on %d record(s)",
                len(report.errors),
                len(report.failures),
            )
        return report

    def _column_errors(self, record: Any) -> Iterable[FieldValidationError]:
        state = inspect(record)
        mapper = state.mapper
        for prop in mapper.column_attrs:
            column = prop.columns[0]
            if not isinstance(column, Column) or column is mapper.version_id_col:
                continue
            if prop.key not in state.dict and not state.transient and not state.pending:
                # expired on a persistent record: nothing in memory to check
                continue

            value = state.dict.get(prop.key)
            if value is None:
                # foreign keys are filled from relationships during flush
                if not column.nullable and not column.foreign_keys and not _store_generated(column):
                    yield FieldValidationError(prop.key, f"The {prop.key} field is required.")
                continue

            length = getattr(column.type, "length", None)
            if isinstance(column.type, String) and length and isinstance(value, str) and len(value) > length:
                yield FieldValidationError(
                    prop.key,
                    f"The field {prop.key} must be a string with a maximum length of {length}.",
                )


def _store_generated(column: Column) -> bool:
    if column.default is not None or column.server_default is not None:
        return True
    return column.primary_key and column.table.autoincrement_column is column
