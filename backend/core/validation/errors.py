"""Validation Result Types

A validation run produces a ValidationResult: the ordered list of field
errors raised by every rule. The result never raises; an empty result
means the record is valid.

API shape of a failed result (see ``to_app_error``):
{
    "status": 400,
    "message": "Validation failed. Please check your input.",
    "data": {"Country": ["Country must not be null or empty"]}
}
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from core.errors import AppError, ErrorCode, ErrorContext

VALIDATION_FAILED_MESSAGE = "Validation failed. Please check your input."


@dataclass(frozen=True, slots=True)
class ValidationErrorDetail:
    """A single failed check.

    - field: field name used for grouping (e.g. "ShowType")
    - message: human-readable message attached to the check
    - constraint: name of the predicate that failed
    - actual_value: the extracted value that failed
    """
    field: str
    message: str
    constraint: str | None = None
    actual_value: Any = None


@dataclass
class ValidationResult:
    """Ordered collection of field errors from one validation run."""
    errors: list[ValidationErrorDetail] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def extend(self, details: list[ValidationErrorDetail]) -> None:
        self.errors.extend(details)

    @property
    def fields(self) -> list[str]:
        """Failed field names in first-seen order, without duplicates."""
        return list(dict.fromkeys(d.field for d in self.errors))

    def get_errors_for_field(self, field_name: str) -> list[ValidationErrorDetail]:
        return [d for d in self.errors if d.field == field_name]

    def to_app_error(self, origin: str = "validation") -> AppError:
        """Convert a failed result into the 400 error carried to the client."""
        from .formatting import group_errors

        return AppError(
            code=ErrorCode.E2000_VALIDATION_GENERIC,
            message=VALIDATION_FAILED_MESSAGE,
            context=ErrorContext(origin=origin),
            data=group_errors(self),
            metadata={"error_count": len(self.errors), "fields": self.fields},
        )
