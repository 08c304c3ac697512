"""Appointment repository."""

from datetime import date, datetime

from hustle_planner.models.records import Appointment
from hustle_planner.repositories.base import RecordRepository


class AppointmentRepository(RecordRepository[Appointment]):
    model = Appointment
    storage_key = "hustle-appointments"
    entity_type = "appointment"

    def on_date(self, day: date) -> list[Appointment]:
        """Appointments on ``day``, earliest first."""
        return sorted(
            (a for a in self.load_all() if a.date == day),
            key=lambda a: a.time,
        )

    def upcoming(self, now: datetime, limit: int = 10) -> list[Appointment]:
        """The next ``limit`` appointments starting at or after ``now``."""
        future = [a for a in self.load_all() if a.starts_at >= now]
        return sorted(future, key=lambda a: a.starts_at)[:limit]
