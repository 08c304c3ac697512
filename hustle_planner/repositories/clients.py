"""Client repository. Visits are stored inside their client."""

from typing import Any, Union

from hustle_planner.models.records import Client, Visit
from hustle_planner.repositories.base import RecordRepository
from hustle_planner.services.storage import RecordNotFoundError


class ClientRepository(RecordRepository[Client]):
    model = Client
    storage_key = "hustle-clients"
    entity_type = "client"

    def delete(self, record_id: str) -> Client:
        """Delete a client together with all of its visits."""
        with self._editing() as records:
            removed = records.pop(self._index_of(records, record_id))
        self._audit.log_record_deleted(
            self.entity_type, record_id, cascaded=len(removed.visits)
        )
        return removed

    def search(self, term: str) -> list[Client]:
        """Case-insensitive match on name, notes and preferences."""
        needle = term.strip().lower()
        if not needle:
            return self.load_all()
        return [
            client for client in self.load_all()
            if needle in client.name.lower()
            or needle in client.notes.lower()
            or needle in client.preferences.lower()
        ]

    def sorted_by_spend(self) -> list[Client]:
        """Highest total spend first; ties keep insertion order."""
        return sorted(self.load_all(), key=lambda c: c.total_spent, reverse=True)

    def add_visit(
        self,
        client_id: str,
        data: Union[Visit, dict[str, Any]],
    ) -> Client:
        """
        Record a visit.

        last_visit becomes the latest of its current value and the visit
        date, so a backdated visit never moves it back.
        """
        if isinstance(data, Visit):
            visit = data
        else:
            visit = self._validator.parse(Visit, data)

        def append(client: Client) -> Client:
            last_visit = visit.date
            if client.last_visit is not None:
                last_visit = max(client.last_visit, visit.date)
            return client.model_copy(update={
                "visits": [*client.visits, visit],
                "last_visit": last_visit,
            })

        client = self._modify(client_id, append)
        self._audit.log_record_updated(
            self.entity_type, client_id, {"visit_added": visit.id}
        )
        return client

    def delete_visit(self, client_id: str, visit_id: str) -> Client:
        """
        Remove one visit.

        last_visit moves back to the latest remaining visit; with no
        visits left it keeps its manually entered value.
        """
        def remove(client: Client) -> Client:
            remaining = [v for v in client.visits if v.id != visit_id]
            if len(remaining) == len(client.visits):
                raise RecordNotFoundError(f"visit {visit_id} not found")
            update: dict[str, Any] = {"visits": remaining}
            if remaining:
                update["last_visit"] = max(v.date for v in remaining)
            return client.model_copy(update=update)

        client = self._modify(client_id, remove)
        self._audit.log_record_updated(
            self.entity_type, client_id, {"visit_deleted": visit_id}
        )
        return client
