"""Reminder and shift repositories."""

from hustle_planner.models.records import Reminder, Shift
from hustle_planner.repositories.base import RecordRepository


class ReminderRepository(RecordRepository[Reminder]):
    model = Reminder
    storage_key = "hustle-reminders"
    entity_type = "reminder"

    def toggle(self, reminder_id: str) -> Reminder:
        reminder = self._modify(
            reminder_id,
            lambda r: r.model_copy(update={"enabled": not r.enabled}),
        )
        self._audit.log_record_updated(
            self.entity_type, reminder_id, {"enabled": reminder.enabled}
        )
        return reminder

    def enabled(self) -> list[Reminder]:
        return [r for r in self.load_all() if r.enabled]


class ShiftRepository(RecordRepository[Shift]):
    """
    Shifts are owned by an external collaborator.

    The core reads them for work-pattern insights; add() exists for
    importers and tests.
    """

    model = Shift
    storage_key = "hustle-shifts"
    entity_type = "shift"
