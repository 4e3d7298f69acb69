"""Unit tests for pre-save validation and the aggregated report."""

from types import SimpleNamespace

from generic_repository.domain.entities import (
    EntityValidationResult,
    FieldValidationError,
    ValidationReport,
)
from generic_repository.domain.exceptions import ValidationFailedError
from generic_repository.infrastructure.database.validation import RecordValidator
from tests.models import Part, Widget


def test_report_joins_messages_in_order():
    report = ValidationReport(
        results=[
            EntityValidationResult(entity=Widget(), errors=[FieldValidationError("sku", "first")]),
            EntityValidationResult(entity=Widget()),
            EntityValidationResult(
                entity=Widget(),
                errors=[FieldValidationError("sku", "second"), FieldValidationError("name", "third")],
            ),
        ]
    )

    assert not report.is_valid
    assert report.message == "first; second; third"
    assert len(report.failures) == 2
    assert [e.field for e in report.errors] == ["sku", "sku", "name"]


def test_empty_report_is_valid():
    report = ValidationReport()
    assert report.is_valid
    assert report.message == ""


def test_validation_failed_error_carries_the_report():
    report = ValidationReport(
        results=[
            EntityValidationResult(entity=Widget(), errors=[FieldValidationError("sku", "a")]),
            EntityValidationResult(entity=Part(), errors=[FieldValidationError("name", "b")]),
        ]
    )
    error = ValidationFailedError(report)

    assert str(error) == (
        "Validation failed for one or more entities. The validation errors are: a; b"
    )
    assert error.report is report
    assert [r.entity_type for r in error.entity_validation_errors] == ["Widget", "Part"]
    assert len(error.errors) == 2


def test_required_column_without_default():
    report = RecordValidator().validate_records([Widget(quantity=1)])
    assert report.message == "The sku field is required."


def test_string_length_limit():
    report = RecordValidator().validate_records([Widget(sku="X" * 13)])
    assert report.errors == [
        FieldValidationError(
            "sku", "The field sku must be a string with a maximum length of 12."
        )
    ]


def test_record_hook_errors_follow_column_errors():
    report = RecordValidator().validate_records([Widget(quantity=-1)])
    assert [e.field for e in report.errors] == ["sku", "quantity"]


def test_store_generated_and_foreign_key_columns_are_not_required():
    # id autoincrements, created_date has a default, widget_id comes from the relationship
    report = RecordValidator().validate_records([Part(), Widget(sku="OK")])
    assert report.is_valid


def test_validate_pending_skips_records_marked_for_deletion():
    doomed = Widget(sku="Y" * 40)
    kept = Widget()
    session = SimpleNamespace(new=[kept], dirty=[doomed], deleted=[doomed])

    report = RecordValidator().validate_pending(session)

    assert [r.entity for r in report.results] == [kept]
    assert report.message == "The sku field is required."
