"""Domain record repositories."""

from hustle_planner.repositories.base import (
    RecordRepository,
    SnapshotRepository,
    lock_for,
)
from hustle_planner.repositories.appointments import AppointmentRepository
from hustle_planner.repositories.clients import ClientRepository
from hustle_planner.repositories.finances import EarningsRepository, ExpenseRepository
from hustle_planner.repositories.habits import (
    HabitLogRepository,
    HabitRepository,
    completion_percentage,
    week_start,
    weekly_streak,
)
from hustle_planner.repositories.opportunities import (
    ALLOWED_TRANSITIONS,
    InvalidTransitionError,
    OpportunityRepository,
)
from hustle_planner.repositories.reminders import ReminderRepository, ShiftRepository

__all__ = [
    "ALLOWED_TRANSITIONS",
    "AppointmentRepository",
    "ClientRepository",
    "EarningsRepository",
    "ExpenseRepository",
    "HabitLogRepository",
    "HabitRepository",
    "InvalidTransitionError",
    "OpportunityRepository",
    "RecordRepository",
    "ReminderRepository",
    "ShiftRepository",
    "SnapshotRepository",
    "completion_percentage",
    "lock_for",
    "week_start",
    "weekly_streak",
]
