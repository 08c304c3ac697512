"""
Tests for Hustle Planner models

Test strategy:
1. Unit tests for individual components (models, validators, analyzers)
2. Integration tests for repositories over an in-memory backend
3. No real storage file unless a test asks for tmp_path
"""

import pytest
from datetime import date, datetime

from hustle_planner.audit import AuditLogger
from hustle_planner.models import (
    OPPORTUNITY_TYPE_DEFAULTS,
    Appointment,
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
    Client,
    Earnings,
    Expense,
    ExpenseCategory,
    FinancialSummary,
    Habit,
    HabitCategory,
    Insight,
    InsightType,
    Opportunity,
    OpportunityStatus,
    OpportunityType,
    Priority,
    Shift,
    Visit,
)
from hustle_planner.models.finance import BudgetRecommendation, TaxEstimate


class TestClientModels:
    """Tests for clients and their visits."""

    def test_total_spent_is_sum_of_visits(self):
        """total_spent is derived from the visit amounts."""
        client = Client(
            name="Jordan",
            visits=[
                Visit(date=date(2024, 6, 1), amount=200),
                Visit(date=date(2024, 6, 8), amount=350.5),
            ],
        )
        assert client.total_spent == 550.5

    def test_stored_total_is_ignored_on_input(self):
        """A stale totalSpent in storage never overrides the visits."""
        client = Client.model_validate({
            "id": "c1",
            "name": "Jordan",
            "totalSpent": 99999,
            "visits": [{"id": "v1", "date": "2024-06-01", "amount": 120}],
        })
        assert client.total_spent == 120

    def test_storage_layout_is_camel_case(self):
        """Stored records use the camelCase layout."""
        client = Client(id="c1", name="Jordan", last_visit=date(2024, 6, 1))
        stored = client.to_storage()

        assert stored["lastVisit"] == "2024-06-01"
        assert stored["spendAmount"] == ""
        assert stored["totalSpent"] == 0.0

    def test_blank_last_visit_is_none(self):
        """An empty date string from a form means no date."""
        client = Client.model_validate({"name": "Jordan", "lastVisit": ""})
        assert client.last_visit is None

    def test_name_is_required(self):
        """Whitespace-only names are rejected."""
        with pytest.raises(ValueError):
            Client(name="   ")

    def test_visit_rejects_negative_amount(self):
        with pytest.raises(ValueError):
            Visit(date=date(2024, 6, 1), amount=-5)


class TestEarningsModels:
    """Tests for earnings and expenses."""

    def test_total_is_sum_of_components(self):
        earnings = Earnings(date=date(2024, 6, 1), tips=100, vip_dances=250.25, after_dates=50)
        assert earnings.total == 400.25

    def test_total_is_serialized(self):
        earnings = Earnings(date=date(2024, 6, 1), tips=10, vip_dances=20, after_dates=30)
        stored = earnings.to_storage()

        assert stored["total"] == 60
        assert stored["vipDances"] == 20

    def test_expense_accepts_non_positive_amount(self):
        """Zero and negative amounts are stored; totals ignore them."""
        expense = Expense(date=date(2024, 6, 1), category=ExpenseCategory.OTHER, amount=0)
        assert expense.amount == 0

    def test_expense_category_uses_display_label(self):
        expense = Expense.model_validate({
            "date": "2024-06-01",
            "category": "Outfits & Costumes",
            "amount": 80,
        })
        assert expense.category == ExpenseCategory.OUTFITS


class TestOpportunityModels:
    """Tests for opportunity type defaults."""

    def test_business_partnership_defaults(self):
        opportunity = Opportunity(
            client_id="c1",
            type=OpportunityType.BUSINESS_PARTNERSHIP,
            title="Joint venture",
        )
        assert opportunity.potential_value == 10000
        assert opportunity.priority == Priority.CRITICAL
        assert opportunity.status == OpportunityStatus.NEW

    def test_explicit_values_override_defaults(self):
        opportunity = Opportunity(
            client_id="c1",
            type=OpportunityType.SHOPPING,
            title="Designer bag",
            potential_value=1200,
            priority=Priority.HIGH,
        )
        assert opportunity.potential_value == 1200
        assert opportunity.priority == Priority.HIGH

    def test_every_type_has_defaults(self):
        for opportunity_type in OpportunityType:
            assert opportunity_type in OPPORTUNITY_TYPE_DEFAULTS

    def test_active_statuses(self):
        assert OpportunityStatus.NEW.is_active
        assert OpportunityStatus.IN_PROGRESS.is_active
        assert not OpportunityStatus.COMPLETED.is_active
        assert not OpportunityStatus.MISSED.is_active


class TestSchedulingModels:
    """Tests for appointments, habits and shifts."""

    def test_appointment_requires_valid_time(self):
        with pytest.raises(ValueError):
            Appointment(client_name="Jordan", date=date(2024, 6, 20), time="25:00")

    def test_appointment_start(self):
        appointment = Appointment(client_name="Jordan", date=date(2024, 6, 20), time="21:30")
        assert appointment.starts_at == datetime(2024, 6, 20, 21, 30)

    def test_habit_color_defaults_to_category(self):
        habit = Habit(name="Stretch", category=HabitCategory.HEALTH)
        assert habit.color == HabitCategory.HEALTH.color

    def test_habit_target_range(self):
        with pytest.raises(ValueError):
            Habit(name="Stretch", times_per_week=8)

    def test_shift_hours(self):
        shift = Shift(date=date(2024, 6, 14), start_time="18:00", end_time="23:30")
        assert shift.hours == 5.5

    def test_overnight_shift_wraps(self):
        shift = Shift(date=date(2024, 6, 14), start_time="21:00", end_time="03:00")
        assert shift.hours == 6


class TestInsightModels:
    """Tests for insights and financial summaries."""

    def test_priority_rank(self):
        assert Priority.CRITICAL.rank > Priority.HIGH.rank > Priority.MEDIUM.rank > Priority.LOW.rank

    def test_insight_rank_follows_priority(self):
        insight = Insight(
            id="x",
            type=InsightType.PATTERN,
            priority=Priority.HIGH,
            title="t",
            message="m",
            date_generated=datetime(2024, 6, 15),
        )
        assert insight.rank == 3

    def test_summary_display_rounds_to_cents(self):
        summary = FinancialSummary(
            total_earnings=100.0,
            total_expenses=33.333,
            net_income=66.667,
            taxes=TaxEstimate(
                self_employment_tax=1.23456,
                federal_tax=0,
                state_tax=0,
                total_tax_liability=1.23456,
                quarterly_payment=0.30864,
                recommended_savings=1.358016,
            ),
            budget=BudgetRecommendation(
                monthly_income=5.555583,
                emergency_fund_target=33.3335,
                monthly_savings=1.1111,
                monthly_tax_savings=0.113168,
                monthly_spending_budget=4.331315,
            ),
        )
        display = summary.to_display()

        assert display["total_expenses"] == 33.33
        assert display["taxes"]["self_employment_tax"] == 1.23
        assert display["budget"]["monthly_savings"] == 1.11


class TestAuditModels:
    """Tests for audit event models."""

    def test_record_created_event(self):
        event = AuditEventBuilder.record_created("client", "c1")

        assert event.event_type == AuditEventType.RECORD_CREATED
        assert event.entity_id == "c1"
        assert event.severity == AuditSeverity.INFO

    def test_write_failure_is_an_error(self):
        event = AuditEventBuilder.storage_write_failed("hustle-clients", "disk full")
        assert event.severity == AuditSeverity.ERROR

    def test_to_log_dict(self):
        event = AuditEventBuilder.record_deleted("client", "c1", cascaded=3)
        log_dict = event.to_log_dict()

        assert isinstance(event, AuditEvent)
        assert log_dict["event_type"] == "record_deleted"
        assert log_dict["entity_id"] == "c1"


class TestAuditLogger:
    """The logger never raises into the caller."""

    def test_oversized_description_is_dropped(self):
        logger = AuditLogger()
        logger.log_record_created("x" * 600, "c1")
        logger.log_snapshot_unreadable("k" * 600, "not json")

    def test_failing_builder_is_dropped(self):
        def broken(*args):
            raise RuntimeError("boom")

        AuditLogger()._emit(broken, "client", "c1")
