"""
Habit and habit-log repositories.

Habit logs are keyed by (habit_id, date): there is at most one log per
habit per calendar day. Weeks run Sunday to Saturday.
"""

import math
from datetime import date, timedelta
from typing import Optional

from hustle_planner.models.records import Habit, HabitLog
from hustle_planner.repositories.base import RecordRepository, SnapshotRepository


def week_start(day: date) -> date:
    """The Sunday on or before ``day``."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def _count_between(completed: set[date], first: date, last: date) -> int:
    return sum(1 for d in completed if first <= d <= last)


def weekly_streak(habit: Habit, completed: set[date], today: date) -> int:
    """
    Number of consecutive weeks the habit met its weekly target.

    The current week counts when it already met the target, or when it
    is on pace for it given the days elapsed so far. Earlier weeks must
    have met the full target.
    """
    start = week_start(today)
    elapsed = (today - start).days + 1
    done = _count_between(completed, start, today)
    on_pace = elapsed < 7 and done >= math.ceil(habit.times_per_week * elapsed / 7)

    if done < habit.times_per_week and not on_pace:
        return 0

    streak = 1
    week_end = start - timedelta(days=1)
    while True:
        first = week_end - timedelta(days=6)
        if _count_between(completed, first, week_end) < habit.times_per_week:
            break
        streak += 1
        week_end = first - timedelta(days=1)
    return streak


def completion_percentage(habit: Habit, completed: set[date], today: date) -> int:
    """Completions over the last 7 days against the weekly target, capped at 100."""
    done = _count_between(completed, today - timedelta(days=6), today)
    return min(100, round(done / habit.times_per_week * 100))


class HabitLogRepository(SnapshotRepository[HabitLog]):
    model = HabitLog
    storage_key = "hustle-habit-logs"
    entity_type = "habit_log"

    def toggle(self, habit_id: str, day: date) -> HabitLog:
        """
        Flip completion for (habit_id, day).

        A missing log is created as completed.
        """
        with self._editing() as logs:
            for index, log in enumerate(logs):
                if log.key == (habit_id, day):
                    logs[index] = log.model_copy(update={"completed": not log.completed})
                    toggled = logs[index]
                    break
            else:
                toggled = HabitLog(habit_id=habit_id, date=day, completed=True)
                logs.append(toggled)

        self._audit.log_record_updated(
            self.entity_type,
            f"{habit_id}:{day.isoformat()}",
            {"completed": toggled.completed},
        )
        return toggled

    def find(self, habit_id: str, day: date) -> Optional[HabitLog]:
        return next((l for l in self.load_all() if l.key == (habit_id, day)), None)

    def is_completed(self, habit_id: str, day: date) -> bool:
        log = self.find(habit_id, day)
        return log is not None and log.completed

    def completed_dates(self, habit_id: str) -> set[date]:
        return {l.date for l in self.load_all() if l.habit_id == habit_id and l.completed}

    def delete_for_habit(self, habit_id: str) -> int:
        """Remove every log of a habit. Returns how many were removed."""
        with self._editing() as logs:
            kept = [l for l in logs if l.habit_id != habit_id]
            removed = len(logs) - len(kept)
            logs[:] = kept
        return removed


class HabitRepository(RecordRepository[Habit]):
    model = Habit
    storage_key = "hustle-habits"
    entity_type = "habit"

    def __init__(self, *args, logs: Optional[HabitLogRepository] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self._logs = logs

    def active(self) -> list[Habit]:
        return [h for h in self.load_all() if not h.is_archived]

    def archived(self) -> list[Habit]:
        return [h for h in self.load_all() if h.is_archived]

    def toggle_archive(self, habit_id: str) -> Habit:
        """Archived habits leave active views but keep their history."""
        habit = self._modify(
            habit_id,
            lambda h: h.model_copy(update={"is_archived": not h.is_archived}),
        )
        self._audit.log_record_updated(
            self.entity_type, habit_id, {"is_archived": habit.is_archived}
        )
        return habit

    def delete(self, record_id: str) -> Habit:
        """Delete a habit and all of its logs."""
        with self._editing() as records:
            removed = records.pop(self._index_of(records, record_id))
        cascaded = self._logs.delete_for_habit(record_id) if self._logs else 0
        self._audit.log_record_deleted(self.entity_type, record_id, cascaded=cascaded)
        return removed

    def streak(self, habit_id: str, today: date) -> int:
        return weekly_streak(self.require(habit_id), self._completed(habit_id), today)

    def completion_percentage(self, habit_id: str, today: date) -> int:
        return completion_percentage(self.require(habit_id), self._completed(habit_id), today)

    def _completed(self, habit_id: str) -> set[date]:
        return self._logs.completed_dates(habit_id) if self._logs else set()
