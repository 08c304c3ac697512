"""
Tax and Budget Estimator

Independent contractors pay self-employment tax on top of federal and
state income tax, and nobody withholds it for them. The estimator turns
two totals into a liability, a quarterly payment and a monthly budget.

All arithmetic is done at full float precision; see
FinancialSummary.to_display() for rounding.
"""

from typing import Iterable, Optional

from hustle_planner.config import TaxSettings, get_settings
from hustle_planner.models import (
    BudgetRecommendation,
    Earnings,
    Expense,
    FinancialSummary,
    TaxEstimate,
)


class TaxEstimator:
    """Pure calculator over (total earnings, total expenses)."""

    def __init__(self, settings: Optional[TaxSettings] = None):
        self._settings = settings or get_settings().tax

    def estimate(self, total_earnings: float, total_expenses: float) -> FinancialSummary:
        """
        Derive taxes and a monthly budget from the two totals.

        A loss (negative net income) yields negative figures; they are
        reported as-is rather than clamped.
        """
        s = self._settings
        net_income = total_earnings - total_expenses

        self_employment_tax = net_income * s.self_employment_rate
        federal_tax = net_income * s.federal_rate
        state_tax = net_income * s.state_rate
        total_tax = self_employment_tax + federal_tax + state_tax
        recommended_savings = total_tax * s.savings_buffer

        taxes = TaxEstimate(
            self_employment_tax=self_employment_tax,
            federal_tax=federal_tax,
            state_tax=state_tax,
            total_tax_liability=total_tax,
            quarterly_payment=total_tax / 4,
            recommended_savings=recommended_savings,
        )

        monthly_income = net_income / 12
        monthly_savings = monthly_income * s.savings_rate
        monthly_tax_savings = recommended_savings / 12

        budget = BudgetRecommendation(
            monthly_income=monthly_income,
            emergency_fund_target=monthly_income * s.emergency_fund_months,
            monthly_savings=monthly_savings,
            monthly_tax_savings=monthly_tax_savings,
            monthly_spending_budget=monthly_income - monthly_savings - monthly_tax_savings,
        )

        return FinancialSummary(
            total_earnings=total_earnings,
            total_expenses=total_expenses,
            net_income=net_income,
            taxes=taxes,
            budget=budget,
        )

    def summarize(
        self,
        earnings: Iterable[Earnings],
        expenses: Iterable[Expense],
    ) -> FinancialSummary:
        """Reduce the stored records to totals, then estimate."""
        total_earnings = sum((e.total for e in earnings), 0.0)
        total_expenses = sum((e.amount for e in expenses if e.amount > 0), 0.0)
        return self.estimate(total_earnings, total_expenses)
