"""
Reminder Service

The host application calls check_due() once a minute. Due reminders are
dispatched through the Notifier; one-shot reminders are disabled after
they fire so they never fire twice.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional, Union

from hustle_planner.audit import AuditLogger
from hustle_planner.models.records import (
    Opportunity,
    Priority,
    Reminder,
    ReminderRepeat,
)
from hustle_planner.services.notifications import LoggingNotifier, Notifier

if TYPE_CHECKING:
    from hustle_planner.repositories.reminders import ReminderRepository


NOTIFICATION_TITLE = "Hustle Planner Reminder"

FOLLOW_UP_TIME = "10:00"
WEEKLY_CHECK_TIME = "09:00"


def is_due(reminder: Reminder, now: datetime) -> bool:
    """
    Whether ``reminder`` fires in the minute containing ``now``.

    Repeating reminders start on their date; a weekly reminder fires on
    the weekday of its date.
    """
    if not reminder.enabled or reminder.time != now.strftime("%H:%M"):
        return False

    today = now.date()
    if reminder.repeats == ReminderRepeat.NONE:
        return reminder.date == today
    if reminder.date > today:
        return False
    if reminder.repeats == ReminderRepeat.DAILY:
        return True
    return reminder.date.weekday() == today.weekday()


class ReminderService:
    """Creates, evaluates and dispatches reminders."""

    def __init__(
        self,
        repository: "ReminderRepository",
        notifier: Optional[Notifier] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._repository = repository
        self._notifier = notifier or LoggingNotifier()
        self._audit = audit_logger or AuditLogger()

    @property
    def repository(self) -> "ReminderRepository":
        return self._repository

    def add_reminder(self, data: Union[Reminder, dict[str, Any]]) -> Reminder:
        return self._repository.add(data)

    def toggle(self, reminder_id: str) -> Reminder:
        return self._repository.toggle(reminder_id)

    def update(self, reminder_id: str, changes: dict[str, Any]) -> Reminder:
        return self._repository.update(reminder_id, changes)

    def delete(self, reminder_id: str) -> Reminder:
        return self._repository.delete(reminder_id)

    def for_opportunity(self, opportunity_id: str) -> list[Reminder]:
        return [
            r for r in self._repository.load_all()
            if r.opportunity_id == opportunity_id
        ]

    def due(self, now: datetime) -> list[Reminder]:
        return [r for r in self._repository.load_all() if is_due(r, now)]

    def check_due(self, now: Optional[datetime] = None) -> list[Reminder]:
        """
        Dispatch every reminder due at ``now``.

        Returns the reminders that fired.
        """
        now = now or datetime.now()
        fired = self.due(now)

        for reminder in fired:
            self._notifier.notify(NOTIFICATION_TITLE, reminder.message)
            self._audit.log_reminder_fired(reminder.id, reminder.repeats.value)
            if reminder.repeats == ReminderRepeat.NONE:
                self._repository.update(reminder.id, {"enabled": False})

        return fired

    def schedule_for_opportunity(
        self,
        opportunity: Opportunity,
        client_name: str,
    ) -> list[Reminder]:
        """
        Create the follow-up reminders for a new opportunity.

        Every opportunity gets a one-shot follow-up on its follow-up
        date. High and critical ones also get a weekly check-in.
        """
        created = []

        if opportunity.priority in (Priority.CRITICAL, Priority.HIGH):
            created.append(self._repository.add(Reminder(
                id=f"opp-{opportunity.id}-weekly",
                time=WEEKLY_CHECK_TIME,
                date=opportunity.follow_up_date,
                message=(
                    f"OPPORTUNITY CHECK: {client_name} - {opportunity.title}. "
                    "Don't let this slip away!"
                ),
                repeats=ReminderRepeat.WEEKLY,
                priority=opportunity.priority,
                opportunity_id=opportunity.id,
            )))

        created.append(self._repository.add(Reminder(
            id=f"opp-{opportunity.id}-followup",
            time=FOLLOW_UP_TIME,
            date=opportunity.follow_up_date,
            message=(
                f"HIGH PRIORITY: Follow up with {client_name} about "
                f"{opportunity.title} (Potential: ${opportunity.potential_value:,.0f})"
            ),
            repeats=ReminderRepeat.NONE,
            priority=opportunity.priority,
            opportunity_id=opportunity.id,
        )))

        return created
