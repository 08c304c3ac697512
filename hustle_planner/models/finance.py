"""
Financial Summary Models

All amounts are kept at full float precision. Rounding happens only in
to_display(), at the presentation boundary.
"""

from pydantic import BaseModel, Field


class TaxEstimate(BaseModel):
    """Estimated tax liability for an independent contractor."""

    self_employment_tax: float
    federal_tax: float
    state_tax: float
    total_tax_liability: float
    quarterly_payment: float
    recommended_savings: float = Field(
        ...,
        description="Liability plus a safety buffer"
    )


class BudgetRecommendation(BaseModel):
    """Monthly budget split derived from net income and taxes."""

    monthly_income: float
    emergency_fund_target: float
    monthly_savings: float
    monthly_tax_savings: float
    monthly_spending_budget: float


class FinancialSummary(BaseModel):
    """Everything the finance view shows, derived from two totals."""

    total_earnings: float
    total_expenses: float
    net_income: float
    taxes: TaxEstimate
    budget: BudgetRecommendation

    def to_display(self) -> dict:
        """Round every amount to cents for presentation."""
        return _round_all(self.model_dump())


def _round_all(value):
    if isinstance(value, dict):
        return {key: _round_all(item) for key, item in value.items()}
    if isinstance(value, float):
        return round(value, 2)
    return value
