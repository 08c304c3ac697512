"""
Two-Stage Validation Pipeline

DESIGN DECISION: Input validation happens in two distinct stages:

STAGE 1 - SCHEMA VALIDATION:
- The record's pydantic model (types, required fields, ranges)
- Errors here reject the input

STAGE 2 - SEMANTIC VALIDATION:
- Business logic checks (dates in the past or far future,
  follow-ups scheduled before the opportunity existed)
- Produces warnings only; the record is still accepted

IMPORTANT: Validation runs BEFORE any mutation. A rejected input
leaves every stored snapshot unchanged.
"""

from datetime import date, timedelta
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, Field, ValidationError

from hustle_planner.audit import AuditLogger
from hustle_planner.models.records import (
    Appointment,
    Earnings,
    Expense,
    Opportunity,
    StoredModel,
    Visit,
)


M = TypeVar("M", bound=StoredModel)


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(..., description="Field with the issue")
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'string_too_short', 'past_date')"
    )
    message: str
    severity: str = Field(..., pattern="^(error|warning)$")
    suggested_fix: Optional[str] = None


class ValidationResult(BaseModel):
    """Result of the two-stage validation."""

    entity_type: str
    schema_valid: bool
    semantic_valid: bool
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.schema_valid and self.semantic_valid

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def warnings(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == "warning"]


class RecordValidationError(ValueError):
    """Input was rejected before any mutation was applied."""

    def __init__(self, result: ValidationResult):
        self.result = result
        errors = "; ".join(
            f"{issue.field}: {issue.message}"
            for issue in result.issues
            if issue.severity == "error"
        )
        super().__init__(f"Invalid {result.entity_type}: {errors}")


class RecordValidator:
    """
    Validates user input for any stored record type.

    Stage 1: Schema validation (the model itself)
    Stage 2: Semantic validation (warnings only)
    """

    def __init__(
        self,
        audit_logger: Optional[AuditLogger] = None,
        future_date_tolerance_days: int = 365,
    ):
        self._audit = audit_logger or AuditLogger()
        self._future_tolerance = timedelta(days=future_date_tolerance_days)

    def _validate_schema(
        self,
        model: type[M],
        data: dict[str, Any],
    ) -> tuple[Optional[M], list[ValidationIssue]]:
        """Stage 1: build the model, mapping pydantic errors to issues."""
        try:
            return model.model_validate(data), []
        except ValidationError as e:
            issues = [
                ValidationIssue(
                    field=".".join(str(part) for part in error["loc"]) or "record",
                    issue_type=error["type"],
                    message=error["msg"],
                    severity="error",
                )
                for error in e.errors()
            ]
            return None, issues

    def _validate_semantic(
        self,
        record: StoredModel,
        today: date,
    ) -> list[ValidationIssue]:
        """Stage 2: business checks. Warnings only."""
        issues = []

        if isinstance(record, (Expense, Earnings, Visit)):
            if record.date > today + self._future_tolerance:
                issues.append(ValidationIssue(
                    field="date",
                    issue_type="future_date",
                    message=f"Date ({record.date}) is far in the future",
                    severity="warning",
                    suggested_fix="Please verify the date is correct",
                ))

        if isinstance(record, Earnings) and record.total == 0:
            issues.append(ValidationIssue(
                field="total",
                issue_type="empty_entry",
                message="All earnings fields are zero",
                severity="warning",
            ))

        if isinstance(record, Appointment) and record.date < today:
            issues.append(ValidationIssue(
                field="date",
                issue_type="past_date",
                message=f"Appointment date ({record.date}) is in the past",
                severity="warning",
            ))

        if isinstance(record, Opportunity):
            if record.follow_up_date < record.date_created:
                issues.append(ValidationIssue(
                    field="follow_up_date",
                    issue_type="inconsistent",
                    message="Follow-up date is before the opportunity was created",
                    severity="warning",
                    suggested_fix="Please verify the follow-up date",
                ))
            elif record.follow_up_date < today:
                issues.append(ValidationIssue(
                    field="follow_up_date",
                    issue_type="past_date",
                    message="Follow-up date is already overdue",
                    severity="warning",
                ))

        return issues

    def validate(
        self,
        model: type[M],
        data: dict[str, Any],
        today: Optional[date] = None,
    ) -> tuple[Optional[M], ValidationResult]:
        """
        Run full two-stage validation.

        Returns:
            (record, result) where record is None if schema validation failed
        """
        today = today or date.today()
        entity_type = model.__name__.lower()

        record, issues = self._validate_schema(model, data)
        schema_valid = record is not None

        # Only run stage 2 if stage 1 passes
        semantic_valid = False
        if record is not None:
            semantic_issues = self._validate_semantic(record, today)
            issues.extend(semantic_issues)
            semantic_valid = not any(i.severity == "error" for i in semantic_issues)

        return record, ValidationResult(
            entity_type=entity_type,
            schema_valid=schema_valid,
            semantic_valid=semantic_valid,
            issues=issues,
        )

    def parse(
        self,
        model: type[M],
        data: dict[str, Any],
        today: Optional[date] = None,
    ) -> M:
        """
        Validate and return the record.

        Raises:
            RecordValidationError: If any error-level issue was found
        """
        record, result = self.validate(model, data, today)
        if record is None or result.has_errors:
            self._audit.log_validation_failed(
                result.entity_type,
                [issue.model_dump() for issue in result.issues],
            )
            raise RecordValidationError(result)
        return record

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """Generate a plain-language summary of validation results."""
        if result.is_valid and not result.warnings:
            return "All checks passed."

        lines = []

        if result.has_errors:
            lines.append("Some required information is missing or invalid:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"   - {issue.field}: {issue.message}")
                    if issue.suggested_fix:
                        lines.append(f"     {issue.suggested_fix}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("Please double-check:")
            for warning in result.warnings:
                lines.append(f"   - {warning}")

        return "\n".join(lines)
