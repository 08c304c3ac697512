"""Tests for the two-stage record validator."""

from datetime import date

import pytest

from hustle_planner.models import Appointment, Client, Earnings, Opportunity
from hustle_planner.validation import RecordValidationError, RecordValidator


@pytest.fixture
def validator(audit_logger) -> RecordValidator:
    return RecordValidator(audit_logger)


class TestSchemaValidation:
    def test_valid_record(self, validator, today):
        record, result = validator.validate(Client, {"name": "Jordan"}, today)

        assert record is not None
        assert result.is_valid
        assert result.issues == []

    def test_missing_fields_are_errors(self, validator, today):
        record, result = validator.validate(Appointment, {"clientName": "Jordan"}, today)

        assert record is None
        assert not result.schema_valid
        assert result.error_count == 2
        assert {issue.field for issue in result.issues} == {"date", "time"}

    def test_parse_raises(self, validator, today):
        with pytest.raises(RecordValidationError) as exc_info:
            validator.parse(Client, {"name": ""}, today)

        assert exc_info.value.result.entity_type == "client"
        assert "name" in str(exc_info.value)


class TestSemanticValidation:
    """Semantic issues are warnings; the record is still accepted."""

    def test_past_appointment_warns(self, validator, today):
        record, result = validator.validate(
            Appointment,
            {"clientName": "Jordan", "date": "2024-06-01", "time": "20:00"},
            today,
        )
        assert record is not None
        assert not result.has_errors
        assert any("past" in w for w in result.warnings)

    def test_zero_earnings_warns(self, validator, today):
        record, result = validator.validate(Earnings, {"date": "2024-06-01"}, today)
        assert record.total == 0
        assert result.warnings == ["All earnings fields are zero"]

    def test_far_future_date_warns(self, validator, today):
        _, result = validator.validate(Earnings, {"date": "2026-01-01", "tips": 5}, today)
        assert result.warnings

    def test_follow_up_before_creation_warns(self, validator, today):
        _, result = validator.validate(
            Opportunity,
            {"clientId": "c1", "title": "JV", "dateCreated": "2024-06-10", "followUpDate": "2024-06-01"},
            today,
        )
        assert result.issues[0].issue_type == "inconsistent"

    def test_parse_accepts_warnings(self, validator, today):
        record = validator.parse(Earnings, {"date": "2024-06-01"}, today)
        assert record.date == date(2024, 6, 1)


class TestSummary:
    def test_clean_summary(self, validator, today):
        _, result = validator.validate(Client, {"name": "Jordan"}, today)
        assert validator.get_user_friendly_summary(result) == "All checks passed."

    def test_error_summary(self, validator, today):
        _, result = validator.validate(Client, {"name": ""}, today)
        summary = validator.get_user_friendly_summary(result)

        assert summary.startswith("Some required information is missing or invalid:")
        assert "name" in summary
