"""Tests for reminder evaluation and dispatch."""

from datetime import date, datetime

import pytest

from hustle_planner.models import Reminder, ReminderRepeat
from hustle_planner.repositories import ReminderRepository
from hustle_planner.services import ReminderService, is_due
from hustle_planner.services.reminders import NOTIFICATION_TITLE


@pytest.fixture
def service(kv_store, audit_logger, notifier) -> ReminderService:
    repository = ReminderRepository(kv_store, audit_logger=audit_logger)
    return ReminderService(repository, notifier=notifier, audit_logger=audit_logger)


def reminder(**overrides) -> Reminder:
    fields = {
        "time": "21:00",
        "date": date(2024, 6, 15),
        "message": "Shift tonight",
    }
    fields.update(overrides)
    return Reminder(**fields)


class TestIsDue:
    """2024-06-15 is a Saturday."""

    def test_one_shot_fires_on_its_minute(self):
        assert is_due(reminder(), datetime(2024, 6, 15, 21, 0, 42))

    def test_wrong_minute(self):
        assert not is_due(reminder(), datetime(2024, 6, 15, 21, 1))

    def test_one_shot_other_day(self):
        assert not is_due(reminder(), datetime(2024, 6, 16, 21, 0))

    def test_disabled_never_fires(self):
        assert not is_due(reminder(enabled=False), datetime(2024, 6, 15, 21, 0))

    def test_daily_fires_every_day_from_its_date(self):
        daily = reminder(repeats=ReminderRepeat.DAILY)
        assert is_due(daily, datetime(2024, 6, 20, 21, 0))
        assert not is_due(daily, datetime(2024, 6, 14, 21, 0))

    def test_weekly_fires_on_same_weekday(self):
        weekly = reminder(repeats=ReminderRepeat.WEEKLY)
        assert is_due(weekly, datetime(2024, 6, 22, 21, 0))
        assert not is_due(weekly, datetime(2024, 6, 21, 21, 0))
        assert not is_due(weekly, datetime(2024, 6, 8, 21, 0))


class TestReminderService:
    def test_check_due_notifies(self, service, notifier):
        service.add_reminder(reminder())

        fired = service.check_due(datetime(2024, 6, 15, 21, 0))

        assert len(fired) == 1
        assert notifier.sent == [(NOTIFICATION_TITLE, "Shift tonight")]

    def test_one_shot_disabled_after_firing(self, service, notifier):
        created = service.add_reminder(reminder())

        service.check_due(datetime(2024, 6, 15, 21, 0))
        service.check_due(datetime(2024, 6, 15, 21, 0))

        assert len(notifier.sent) == 1
        assert service.repository.require(created.id).enabled is False

    def test_repeating_stays_enabled(self, service, notifier):
        created = service.add_reminder(reminder(repeats=ReminderRepeat.DAILY))

        service.check_due(datetime(2024, 6, 15, 21, 0))
        service.check_due(datetime(2024, 6, 16, 21, 0))

        assert len(notifier.sent) == 2
        assert service.repository.require(created.id).enabled is True

    def test_nothing_due(self, service, notifier):
        service.add_reminder(reminder())
        assert service.check_due(datetime(2024, 6, 15, 9, 0)) == []
        assert notifier.sent == []

    def test_toggle_update_delete(self, service):
        created = service.add_reminder({"time": "08:00", "date": "2024-06-15", "message": "Gym"})

        assert service.toggle(created.id).enabled is False
        assert service.update(created.id, {"message": "Gym + sauna"}).message == "Gym + sauna"
        service.delete(created.id)

        assert service.repository.load_all() == []

    def test_reminders_for_opportunity(self, app):
        client = app.clients.add({"name": "Jordan"})
        opportunity = app.opportunities.add({
            "clientId": client.id,
            "type": "mentorship",
            "title": "Coaching",
            "followUpDate": "2024-06-20",
        })

        reminders = app.reminders.for_opportunity(opportunity.id)

        assert {r.repeats for r in reminders} == {ReminderRepeat.NONE, ReminderRepeat.WEEKLY}
        fired = app.reminders.check_due(datetime(2024, 6, 20, 10, 0))
        assert [r.id for r in fired] == [f"opp-{opportunity.id}-followup"]
