"""
Insight Engine

Runs the analyzer pipeline over one snapshot and returns a ranked list.

GUARANTEES:
- Output is a deterministic function of (snapshot, now, settings)
- Highest priority first; ties keep the order the analyzers emitted
- One insight per id (the first one wins)
- Nothing is remembered between passes
"""

from collections import Counter
from datetime import datetime
from typing import Optional

from hustle_planner.audit import AuditLogger
from hustle_planner.config import InsightSettings, get_settings
from hustle_planner.insights.analyzers import DEFAULT_ANALYZERS, Analyzer
from hustle_planner.models import DataSnapshot, Insight


class InsightEngine:
    """Ordered pipeline of independent analyzers."""

    def __init__(
        self,
        settings: Optional[InsightSettings] = None,
        analyzers: Optional[list[Analyzer]] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._settings = settings or get_settings().insights
        self._analyzers = list(DEFAULT_ANALYZERS if analyzers is None else analyzers)
        self._audit = audit_logger or AuditLogger()

    @property
    def analyzers(self) -> list[Analyzer]:
        return list(self._analyzers)

    def generate(
        self,
        snapshot: DataSnapshot,
        now: Optional[datetime] = None,
    ) -> list[Insight]:
        """
        Run every analyzer and rank the combined output.

        Args:
            snapshot: Records to analyze
            now: Reference time; defaults to the current time

        Returns:
            Insights sorted by descending priority rank
        """
        now = now or datetime.now()

        emitted = []
        for analyzer in self._analyzers:
            emitted.extend(analyzer(snapshot, now, self._settings))

        # sorted() is stable
        ranked = sorted(emitted, key=lambda insight: insight.rank, reverse=True)
        insights = _dedup(ranked)

        by_priority = Counter(insight.priority.value for insight in insights)
        self._audit.log_insights_generated(len(insights), dict(by_priority))

        return insights


def _dedup(insights: list[Insight]) -> list[Insight]:
    seen = set()
    unique = []
    for insight in insights:
        if insight.id in seen:
            continue
        seen.add(insight.id)
        unique.append(insight)
    return unique
