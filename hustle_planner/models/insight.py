"""
Insight Models

Insights are ephemeral: they are regenerated from scratch on every
analysis pass and are never persisted or merged with a previous pass.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from hustle_planner.models.records import (
    Client,
    Earnings,
    Expense,
    Opportunity,
    Priority,
    Shift,
)


class InsightType(str, Enum):
    """What kind of recommendation an insight is."""
    PATTERN = "pattern"
    OPPORTUNITY = "opportunity"
    WARNING = "warning"
    SUGGESTION = "suggestion"


class Insight(BaseModel):
    """A generated recommendation or warning."""

    id: str = Field(
        ...,
        min_length=1,
        description="Stable identifier of the rule outcome, used for dedup"
    )
    type: InsightType
    priority: Priority
    title: str
    message: str
    actionable: bool = True
    data: dict[str, Any] = Field(
        default_factory=dict,
        description="Supporting values the message was built from"
    )
    date_generated: datetime

    @property
    def rank(self) -> int:
        return self.priority.rank


class DataSnapshot(BaseModel):
    """
    Everything the insight analyzers read, loaded once per pass.

    Analyzers never touch storage; they are pure functions of a
    snapshot, a reference time and the insight settings.
    """

    clients: list[Client] = Field(default_factory=list)
    earnings: list[Earnings] = Field(default_factory=list)
    expenses: list[Expense] = Field(default_factory=list)
    opportunities: list[Opportunity] = Field(default_factory=list)
    shifts: list[Shift] = Field(default_factory=list)
