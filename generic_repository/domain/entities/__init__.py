from .record import RECORD_ATTRIBUTES, Record, RecordT
from .validation import (
    EntityValidationResult,
    FieldValidationError,
    RecordKey,
    ValidationReport,
)

__all__ = [
    "RECORD_ATTRIBUTES",
    "Record",
    "RecordT",
    "EntityValidationResult",
    "FieldValidationError",
    "RecordKey",
    "ValidationReport",
]
