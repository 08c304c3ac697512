"""
Data Models Package

This package contains all Pydantic models used in Hustle Planner.
All data flowing through the system must conform to these schemas.
"""

from hustle_planner.models.records import (
    OPPORTUNITY_TYPE_DEFAULTS,
    Appointment,
    Client,
    Earnings,
    Expense,
    ExpenseCategory,
    Habit,
    HabitCategory,
    HabitLog,
    Opportunity,
    OpportunityStatus,
    OpportunityType,
    Priority,
    Record,
    Reminder,
    ReminderRepeat,
    Shift,
    StoredModel,
    Visit,
    generate_id,
)
from hustle_planner.models.insight import DataSnapshot, Insight, InsightType
from hustle_planner.models.finance import (
    BudgetRecommendation,
    FinancialSummary,
    TaxEstimate,
)
from hustle_planner.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Records
    "OPPORTUNITY_TYPE_DEFAULTS",
    "Appointment",
    "Client",
    "Earnings",
    "Expense",
    "ExpenseCategory",
    "Habit",
    "HabitCategory",
    "HabitLog",
    "Opportunity",
    "OpportunityStatus",
    "OpportunityType",
    "Priority",
    "Record",
    "Reminder",
    "ReminderRepeat",
    "Shift",
    "StoredModel",
    "Visit",
    "generate_id",
    # Insights
    "DataSnapshot",
    "Insight",
    "InsightType",
    # Finance
    "BudgetRecommendation",
    "FinancialSummary",
    "TaxEstimate",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
