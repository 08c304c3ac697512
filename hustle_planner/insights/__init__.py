"""
Insights Package

Rule-based analysis of the stored records.
"""

from hustle_planner.insights.analyzers import (
    DEFAULT_ANALYZERS,
    Analyzer,
    analyze_client_patterns,
    analyze_earnings_trends,
    analyze_expense_optimization,
    analyze_opportunity_management,
    analyze_work_patterns,
)
from hustle_planner.insights.engine import InsightEngine

__all__ = [
    "DEFAULT_ANALYZERS",
    "Analyzer",
    "InsightEngine",
    "analyze_client_patterns",
    "analyze_earnings_trends",
    "analyze_expense_optimization",
    "analyze_opportunity_management",
    "analyze_work_patterns",
]
