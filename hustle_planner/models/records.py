"""
Core Data Models for Hustle Planner

These models define the schemas of every persisted record. They are designed to:
1. Enforce type safety and required fields at the boundary
2. Serialize to the camelCase JSON layout used by the stored snapshots
3. Make derived fields impossible to persist out of sync

DESIGN DECISION: Derived totals (Client.total_spent, Earnings.total) are
computed fields. They are emitted on serialization and ignored on input,
so a stored total can never disagree with its components.
"""

from datetime import date, datetime, timedelta
from enum import Enum
from typing import Annotated, Any, NamedTuple, Optional
from uuid import uuid4

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    computed_field,
    model_validator,
)
from pydantic.alias_generators import to_camel


TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


def generate_id() -> str:
    """Generate an opaque unique record id."""
    return uuid4().hex


def _blank_to_none(value: Any) -> Any:
    # Forms store "" for an unset date
    if isinstance(value, str) and not value.strip():
        return None
    return value


OptionalDate = Annotated[Optional[date], BeforeValidator(_blank_to_none)]


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class Priority(str, Enum):
    """Priority shared by opportunities, reminders and insights."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    Priority.LOW: 1,
    Priority.MEDIUM: 2,
    Priority.HIGH: 3,
    Priority.CRITICAL: 4,
}


class HabitCategory(str, Enum):
    """Habit categories offered by the tracker."""
    SELF_CARE = "Self-care"
    CAREER = "Career"
    SKILL_BUILDING = "Skill-building"
    MONEY = "Money"
    HEALTH = "Health"
    CUSTOM = "Custom"

    @property
    def color(self) -> str:
        return HABIT_CATEGORY_COLORS[self]


HABIT_CATEGORY_COLORS = {
    HabitCategory.SELF_CARE: "#f472b6",
    HabitCategory.CAREER: "#a78bfa",
    HabitCategory.SKILL_BUILDING: "#60a5fa",
    HabitCategory.MONEY: "#4ade80",
    HabitCategory.HEALTH: "#fb923c",
    HabitCategory.CUSTOM: "#94a3b8",
}


class ExpenseCategory(str, Enum):
    """
    Work expense categories.

    Values are the labels stored in the snapshot, so they double as
    display names for tax-return grouping.
    """
    OUTFITS = "Outfits & Costumes"
    MAKEUP = "Makeup & Beauty"
    TRANSPORTATION = "Transportation"
    CLUB_FEES = "Club Fees"
    DJ_TIPS = "DJ Tips"
    SECURITY_TIPS = "Security Tips"
    FOOD = "Food & Drinks"
    PHONE = "Phone & Internet"
    FITNESS = "Health & Fitness"
    OTHER = "Other"


class OpportunityType(str, Enum):
    """Kinds of client opportunity tracked in the pipeline."""
    BUSINESS_PARTNERSHIP = "business_partnership"
    INVESTMENT = "investment"
    MENTORSHIP = "mentorship"
    SHOPPING = "shopping"
    TRAVEL = "travel"
    NETWORKING = "networking"
    OTHER = "other"


class OpportunityStatus(str, Enum):
    """
    Opportunity lifecycle.

    new -> in_progress -> completed | missed
    COMPLETED and MISSED are terminal.
    """
    NEW = "new"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    MISSED = "missed"

    @property
    def is_active(self) -> bool:
        return self in (OpportunityStatus.NEW, OpportunityStatus.IN_PROGRESS)


class OpportunityTypeDefaults(NamedTuple):
    label: str
    priority: Priority
    value: float


OPPORTUNITY_TYPE_DEFAULTS = {
    OpportunityType.BUSINESS_PARTNERSHIP: OpportunityTypeDefaults(
        "Business Partnership", Priority.CRITICAL, 10000.0
    ),
    OpportunityType.INVESTMENT: OpportunityTypeDefaults(
        "Investment Opportunity", Priority.CRITICAL, 5000.0
    ),
    OpportunityType.MENTORSHIP: OpportunityTypeDefaults(
        "Mentorship/Coaching", Priority.HIGH, 2000.0
    ),
    OpportunityType.SHOPPING: OpportunityTypeDefaults(
        "Shopping Trip", Priority.MEDIUM, 500.0
    ),
    OpportunityType.TRAVEL: OpportunityTypeDefaults(
        "Travel/Vacation", Priority.HIGH, 3000.0
    ),
    OpportunityType.NETWORKING: OpportunityTypeDefaults(
        "Networking Event", Priority.MEDIUM, 1000.0
    ),
    OpportunityType.OTHER: OpportunityTypeDefaults(
        "Other Opportunity", Priority.LOW, 200.0
    ),
}


class ReminderRepeat(str, Enum):
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"


# =============================================================================
# BASE MODELS
# =============================================================================

class StoredModel(BaseModel):
    """Base for anything written into a snapshot."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    def to_storage(self) -> dict:
        """Serialize to the JSON-ready camelCase layout."""
        return self.model_dump(mode="json", by_alias=True)


class Record(StoredModel):
    """A stored entity with an opaque unique id."""

    id: str = Field(
        default_factory=generate_id,
        min_length=1,
        description="Opaque unique identifier"
    )


# =============================================================================
# CLIENTS
# =============================================================================

class Visit(Record):
    """A single paid visit. Owned by exactly one client."""

    date: date
    amount: float = Field(
        ...,
        ge=0,
        description="Amount spent on this visit"
    )
    notes: str = ""


class Client(Record):
    """
    A regular client.

    CRITICAL: total_spent is never edited directly. It is always the
    sum of the visit amounts.
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Client name (required)"
    )
    notes: str = ""
    preferences: str = ""
    last_visit: OptionalDate = None
    spend_amount: str = Field(
        default="",
        description="Free-form spend description shown next to the client"
    )
    visits: list[Visit] = Field(default_factory=list)

    @computed_field(alias="totalSpent")
    @property
    def total_spent(self) -> float:
        return sum((visit.amount for visit in self.visits), 0.0)


# =============================================================================
# SCHEDULING
# =============================================================================

class Appointment(Record):
    """
    A booked appointment.

    client_name is free text on purpose: appointments can be booked
    for people who are not tracked clients.
    """

    client_name: str = Field(..., min_length=1, max_length=200)
    service_type: str = ""
    date: date
    time: str = Field(
        ...,
        pattern=TIME_PATTERN,
        description="Start time, 24-hour HH:MM"
    )
    notes: str = ""

    @property
    def starts_at(self) -> datetime:
        hours, minutes = (int(part) for part in self.time.split(":"))
        return datetime.combine(self.date, datetime.min.time()).replace(
            hour=hours, minute=minutes
        )


class Reminder(Record):
    """A reminder evaluated by the once-a-minute reminder poll."""

    time: str = Field(..., pattern=TIME_PATTERN)
    date: date
    message: str = Field(..., min_length=1, max_length=500)
    enabled: bool = True
    repeats: ReminderRepeat = ReminderRepeat.NONE
    priority: Optional[Priority] = None
    opportunity_id: Optional[str] = None


# =============================================================================
# HABITS
# =============================================================================

class Habit(Record):
    """A habit with a weekly completion target."""

    name: str = Field(..., min_length=1, max_length=100)
    category: HabitCategory = HabitCategory.SELF_CARE
    times_per_week: int = Field(
        default=7,
        ge=1,
        le=7,
        description="Weekly completion target"
    )
    color: Optional[str] = Field(
        default=None,
        description="Display color; defaults to the category color"
    )
    is_archived: bool = False

    @model_validator(mode='after')
    def default_color(self) -> 'Habit':
        if not self.color:
            self.color = self.category.color
        return self


class HabitLog(StoredModel):
    """At most one log per (habit_id, date)."""

    habit_id: str = Field(..., min_length=1)
    date: date
    completed: bool = True
    notes: Optional[str] = None

    @property
    def key(self) -> tuple[str, date]:
        return self.habit_id, self.date


# =============================================================================
# MONEY
# =============================================================================

class Expense(Record):
    """A deductible work expense."""

    date: date
    category: ExpenseCategory
    description: str = Field(default="", max_length=500)
    amount: float = Field(
        ...,
        description="Amount spent; only positive amounts count toward totals"
    )


class Earnings(Record):
    """
    One day's earnings.

    total is computed from its three components.
    """

    date: date
    tips: float = Field(default=0.0, ge=0)
    vip_dances: float = Field(default=0.0, ge=0)
    after_dates: float = Field(default=0.0, ge=0)

    @computed_field(alias="total")
    @property
    def total(self) -> float:
        return self.tips + self.vip_dances + self.after_dates


class Opportunity(Record):
    """
    A potential deal with a client.

    potential_value and priority fall back to the defaults of the
    opportunity type when not supplied.
    """

    client_id: str = Field(
        ...,
        min_length=1,
        description="Client the opportunity belongs to (soft reference)"
    )
    type: OpportunityType = OpportunityType.OTHER
    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    potential_value: Optional[float] = Field(default=None, ge=0)
    priority: Optional[Priority] = None
    status: OpportunityStatus = OpportunityStatus.NEW
    date_created: date = Field(default_factory=date.today)
    follow_up_date: date = Field(
        default_factory=lambda: date.today() + timedelta(days=1)
    )
    last_contact: date = Field(default_factory=date.today)
    notes: list[str] = Field(
        default_factory=list,
        description="Append-only timestamped notes"
    )

    @model_validator(mode='after')
    def apply_type_defaults(self) -> 'Opportunity':
        defaults = OPPORTUNITY_TYPE_DEFAULTS[self.type]
        if self.potential_value is None:
            self.potential_value = defaults.value
        if self.priority is None:
            self.priority = defaults.priority
        return self


# =============================================================================
# EXTERNAL CONTRACT
# =============================================================================

class Shift(Record):
    """
    A worked shift.

    Shifts are written by an external collaborator; the core only
    reads them. An end time earlier than the start time is an
    overnight shift.
    """

    date: date
    start_time: str = Field(..., pattern=TIME_PATTERN)
    end_time: str = Field(..., pattern=TIME_PATTERN)

    @property
    def hours(self) -> float:
        start = _minutes(self.start_time)
        end = _minutes(self.end_time)
        if end < start:
            end += 24 * 60
        return (end - start) / 60


def _minutes(hhmm: str) -> int:
    hours, minutes = hhmm.split(":")
    return int(hours) * 60 + int(minutes)
