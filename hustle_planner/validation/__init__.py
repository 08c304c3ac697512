"""Input validation package."""

from hustle_planner.validation.validator import (
    RecordValidationError,
    RecordValidator,
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    "RecordValidationError",
    "RecordValidator",
    "ValidationIssue",
    "ValidationResult",
]
