"""Finance package."""

from hustle_planner.finance.estimator import TaxEstimator

__all__ = ["TaxEstimator"]
