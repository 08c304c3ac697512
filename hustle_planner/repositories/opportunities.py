"""
Opportunity repository.

Status follows a small state machine:

    new ---------> in_progress ---> completed
      |                 |
      +--> completed    +---------> missed
      +--> missed

in_progress -> in_progress is allowed so a follow-up contact can be
logged with a note. completed and missed are terminal.
"""

from datetime import date
from typing import TYPE_CHECKING, Any, Optional, Union

from hustle_planner.models.records import Opportunity, OpportunityStatus, Priority
from hustle_planner.repositories.base import RecordRepository
from hustle_planner.repositories.clients import ClientRepository

if TYPE_CHECKING:
    from hustle_planner.services.reminders import ReminderService


ALLOWED_TRANSITIONS = {
    OpportunityStatus.NEW: {
        OpportunityStatus.IN_PROGRESS,
        OpportunityStatus.COMPLETED,
        OpportunityStatus.MISSED,
    },
    OpportunityStatus.IN_PROGRESS: {
        OpportunityStatus.IN_PROGRESS,
        OpportunityStatus.COMPLETED,
        OpportunityStatus.MISSED,
    },
    OpportunityStatus.COMPLETED: set(),
    OpportunityStatus.MISSED: set(),
}


class InvalidTransitionError(ValueError):
    """The requested status change is not allowed."""

    def __init__(self, current: OpportunityStatus, requested: OpportunityStatus):
        self.current = current
        self.requested = requested
        super().__init__(
            f"Cannot move opportunity from {current.value} to {requested.value}"
        )


class OpportunityRepository(RecordRepository[Opportunity]):
    model = Opportunity
    storage_key = "client-opportunities"
    entity_type = "opportunity"

    def __init__(
        self,
        *args,
        clients: Optional[ClientRepository] = None,
        reminders: Optional["ReminderService"] = None,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self._clients = clients
        self._reminders = reminders

    def add(self, data: Union[Opportunity, dict[str, Any]]) -> Opportunity:
        """
        Store an opportunity and schedule its follow-up reminders.

        Reminders are only created when the client is known.
        """
        opportunity = super().add(data)

        if self._clients is not None and self._reminders is not None:
            client = self._clients.get(opportunity.client_id)
            if client is not None:
                self._reminders.schedule_for_opportunity(opportunity, client.name)

        return opportunity

    def update_status(
        self,
        opportunity_id: str,
        status: OpportunityStatus,
        note: Optional[str] = None,
        today: Optional[date] = None,
    ) -> Opportunity:
        """
        Move an opportunity to ``status``, stamping the contact date.

        Raises:
            InvalidTransitionError: If the state machine forbids the move
        """
        today = today or date.today()
        status = OpportunityStatus(status)

        def transition(opportunity: Opportunity) -> Opportunity:
            if status not in ALLOWED_TRANSITIONS[opportunity.status]:
                raise InvalidTransitionError(opportunity.status, status)
            update: dict[str, Any] = {"status": status, "last_contact": today}
            if note:
                update["notes"] = [*opportunity.notes, f"{today.isoformat()}: {note}"]
            return opportunity.model_copy(update=update)

        updated = self._modify(opportunity_id, transition)
        self._audit.log_record_updated(
            self.entity_type, opportunity_id, {"status": status.value}
        )
        return updated

    def for_client(self, client_id: str) -> list[Opportunity]:
        return [o for o in self.load_all() if o.client_id == client_id]

    def active(self) -> list[Opportunity]:
        return [o for o in self.load_all() if o.status.is_active]

    def urgent(self, today: date) -> list[Opportunity]:
        """Active opportunities due today or earlier, plus every critical one."""
        return [
            o for o in self.active()
            if o.follow_up_date <= today or o.priority == Priority.CRITICAL
        ]

    def total_value(self) -> float:
        """Pipeline value of everything not missed (secured deals included)."""
        return sum(
            (o.potential_value for o in self.load_all()
             if o.status != OpportunityStatus.MISSED),
            0.0,
        )
