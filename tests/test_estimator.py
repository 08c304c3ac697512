"""Tests for the tax and budget estimator."""

from datetime import date

import pytest

from hustle_planner.config import TaxSettings
from hustle_planner.finance import TaxEstimator
from hustle_planner.models import Earnings, Expense, ExpenseCategory


class TestTaxEstimator:
    """The estimator is a pure function of two totals."""

    def test_reference_figures(self, tax_settings):
        summary = TaxEstimator(tax_settings).estimate(60000, 12000)

        assert summary.net_income == 48000
        assert summary.taxes.self_employment_tax == pytest.approx(6782.4)
        assert summary.taxes.federal_tax == pytest.approx(10560)
        assert summary.taxes.state_tax == pytest.approx(2400)
        assert summary.taxes.total_tax_liability == pytest.approx(19742.4)
        assert summary.taxes.quarterly_payment == pytest.approx(4935.6)
        assert summary.taxes.recommended_savings == pytest.approx(21716.64)

    def test_budget(self, tax_settings):
        budget = TaxEstimator(tax_settings).estimate(60000, 12000).budget

        assert budget.monthly_income == pytest.approx(4000)
        assert budget.emergency_fund_target == pytest.approx(24000)
        assert budget.monthly_savings == pytest.approx(800)
        assert budget.monthly_tax_savings == pytest.approx(1809.72)
        assert budget.monthly_spending_budget == pytest.approx(4000 - 800 - 1809.72)

    def test_no_intermediate_rounding(self, tax_settings):
        summary = TaxEstimator(tax_settings).estimate(1000.01, 0)
        assert summary.taxes.self_employment_tax == 1000.01 * 0.1413

    def test_display_rounds(self, tax_settings):
        display = TaxEstimator(tax_settings).estimate(1000.01, 0).to_display()
        assert display["taxes"]["self_employment_tax"] == 141.3

    def test_zero_income(self, tax_settings):
        summary = TaxEstimator(tax_settings).estimate(0, 0)
        assert summary.taxes.total_tax_liability == 0
        assert summary.budget.monthly_spending_budget == 0

    def test_loss_is_reported_as_negative(self, tax_settings):
        summary = TaxEstimator(tax_settings).estimate(1000, 2200)

        assert summary.net_income == -1200
        assert summary.taxes.total_tax_liability < 0

    def test_custom_rates(self):
        settings = TaxSettings(federal_rate=0.1, state_rate=0, self_employment_rate=0)
        summary = TaxEstimator(settings).estimate(1000, 0)
        assert summary.taxes.total_tax_liability == pytest.approx(100)

    def test_summarize_records(self, tax_settings):
        earnings = [
            Earnings(date=date(2024, 6, 1), tips=100, vip_dances=200),
            Earnings(date=date(2024, 6, 2), after_dates=500),
        ]
        expenses = [Expense(date=date(2024, 6, 1), category=ExpenseCategory.CLUB_FEES, amount=50)]

        summary = TaxEstimator(tax_settings).summarize(earnings, expenses)

        assert summary.total_earnings == 800
        assert summary.total_expenses == 50
        assert summary.net_income == 750

    def test_through_app_context(self, app):
        app.earnings.add({"date": "2024-06-01", "tips": 1200})
        app.expenses.add({"date": "2024-06-01", "category": "Other", "amount": 200})

        summary = app.financial_summary()

        assert summary.net_income == 1000
        assert summary.taxes.quarterly_payment == pytest.approx(1000 * 0.4113 / 4)
