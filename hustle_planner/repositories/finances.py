"""
Expense and earnings repositories.

These hold the financial records and are meant to be constructed over
the ObfuscatedStore.
"""

from hustle_planner.models.records import Earnings, Expense
from hustle_planner.repositories.base import RecordRepository


class ExpenseRepository(RecordRepository[Expense]):
    model = Expense
    storage_key = "work-expenses"
    entity_type = "expense"

    def total(self) -> float:
        return sum((e.amount for e in self.load_all() if e.amount > 0), 0.0)

    def totals_by_category(self) -> dict[str, float]:
        """Sum per category, in order of first appearance."""
        totals: dict[str, float] = {}
        for expense in self.load_all():
            if expense.amount > 0:
                category = expense.category.value
                totals[category] = totals.get(category, 0.0) + expense.amount
        return totals


class EarningsRepository(RecordRepository[Earnings]):
    model = Earnings
    storage_key = "work-earnings"
    entity_type = "earnings"

    def total(self) -> float:
        return sum((e.total for e in self.load_all()), 0.0)
