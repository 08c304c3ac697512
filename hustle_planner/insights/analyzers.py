"""
Insight Analyzers

DESIGN DECISION: Every analyzer is a pure function
``(snapshot, now, settings) -> list[Insight]``.

- No analyzer reads storage or the clock; both are passed in.
- An analyzer that lacks its minimum data abstains (returns []).
- Analyzers are independent; the engine alone orders and dedups.
"""

from collections import defaultdict
from datetime import datetime
from typing import Callable

from hustle_planner.config import InsightSettings
from hustle_planner.models import (
    DataSnapshot,
    Insight,
    InsightType,
    Priority,
)


Analyzer = Callable[[DataSnapshot, datetime, InsightSettings], list[Insight]]

DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

# Days reported for a top client that has never visited
NEVER_VISITED_DAYS = 999


def _mean(values: list[float]) -> float:
    return sum(values) / len(values)


# =============================================================================
# CLIENTS
# =============================================================================

def analyze_client_patterns(
    snapshot: DataSnapshot,
    now: datetime,
    settings: InsightSettings,
) -> list[Insight]:
    """
    Warn when the top spender goes cold; surface upselling candidates.

    Days since the last visit count whole calendar days in the zone of
    ``now``, so a naive or an aware ``now`` gives the same answer.
    """
    insights = []

    spenders = [c for c in snapshot.clients if c.total_spent > 0]
    if spenders:
        top = max(spenders, key=lambda c: c.total_spent)
        if top.last_visit is None:
            days_since = NEVER_VISITED_DAYS
        else:
            days_since = (now.date() - top.last_visit).days

        if days_since > settings.cold_client_days:
            insights.append(Insight(
                id=f"client-{top.id}-inactive",
                type=InsightType.WARNING,
                priority=Priority.HIGH,
                title="Top Client Going Cold",
                message=(
                    f"{top.name} (${top.total_spent:.0f} spent) hasn't visited in "
                    f"{days_since} days. Reach out before you lose them!"
                ),
                data={"clientId": top.id, "daysSince": days_since},
                date_generated=now,
            ))

    growth = []
    for client in snapshot.clients:
        if len(client.visits) < 2:
            continue
        recent = client.visits[-settings.growth_visit_window:]
        average = _mean([visit.amount for visit in recent])
        if settings.growth_min_spend < average < settings.growth_max_spend:
            growth.append(client)

    if growth:
        insights.append(Insight(
            id="growth-clients",
            type=InsightType.OPPORTUNITY,
            priority=Priority.MEDIUM,
            title="Upselling Opportunities",
            message=(
                f"{len(growth)} clients are spending "
                f"${settings.growth_min_spend:.0f}-{settings.growth_max_spend:.0f} "
                "per visit. Perfect candidates for VIP packages or premium services!"
            ),
            data={"clients": [c.name for c in growth]},
            date_generated=now,
        ))

    return insights


# =============================================================================
# EARNINGS
# =============================================================================

def analyze_earnings_trends(
    snapshot: DataSnapshot,
    now: datetime,
    settings: InsightSettings,
) -> list[Insight]:
    """
    Compare the latest window of earnings with the one before it, and
    find the weekday that earns the most.

    Records are ordered by date (insertion order breaks ties) before
    the windows are cut.
    """
    window = settings.trend_window
    if len(snapshot.earnings) < window:
        return []

    insights = []
    earnings = sorted(snapshot.earnings, key=lambda e: e.date)

    recent = earnings[-window:]
    previous = earnings[-2 * window:-window]
    recent_avg = _mean([e.total for e in recent])
    previous_avg = _mean([e.total for e in previous]) if previous else 0.0

    # Nothing to compare against
    if previous_avg > 0:
        change = (recent_avg - previous_avg) / previous_avg * 100

        if change < settings.decline_threshold_percent:
            insights.append(Insight(
                id="earnings-decline",
                type=InsightType.WARNING,
                priority=Priority.HIGH,
                title="Earnings Declining",
                message=(
                    f"Your average daily earnings dropped {abs(change):.1f}% this week. "
                    "Time to re-engage top clients or try new strategies."
                ),
                data={
                    "changePercent": change,
                    "recentAvg": recent_avg,
                    "previousAvg": previous_avg,
                },
                date_generated=now,
            ))
        elif change > settings.surge_threshold_percent:
            insights.append(Insight(
                id="earnings-surge",
                type=InsightType.PATTERN,
                priority=Priority.MEDIUM,
                title="Earnings Surge!",
                message=(
                    f"Great job! Earnings up {change:.1f}% this week. "
                    "Analyze what you did differently and repeat it!"
                ),
                data={
                    "changePercent": change,
                    "recentAvg": recent_avg,
                    "previousAvg": previous_avg,
                },
                date_generated=now,
            ))

    totals = defaultdict(float)
    counts = defaultdict(int)
    for entry in earnings:
        weekday = entry.date.weekday()
        totals[weekday] += entry.total
        counts[weekday] += 1

    best = max(sorted(totals), key=lambda day: totals[day])
    average = totals[best] / counts[best]

    insights.append(Insight(
        id="best-day-pattern",
        type=InsightType.PATTERN,
        priority=Priority.LOW,
        title="Peak Earning Day",
        message=(
            f"{DAY_NAMES[best]} is your best earning day (avg ${average:.0f}). "
            "Schedule more shifts on this day!"
        ),
        data={
            "bestDay": DAY_NAMES[best],
            "totalEarnings": totals[best],
            "avgEarnings": average,
        },
        date_generated=now,
    ))

    return insights


# =============================================================================
# EXPENSES
# =============================================================================

def analyze_expense_optimization(
    snapshot: DataSnapshot,
    now: datetime,
    settings: InsightSettings,
) -> list[Insight]:
    """Flag the largest expense category when it dominates spending."""
    by_category = defaultdict(float)
    for expense in snapshot.expenses:
        if expense.amount > 0:
            by_category[expense.category] += expense.amount

    total = sum(by_category.values())
    if total <= 0:
        return []

    # max() keeps the first category on a tie
    category, amount = max(by_category.items(), key=lambda item: item[1])
    if amount <= total * settings.expense_share_threshold:
        return []

    percentage = amount / total * 100
    return [Insight(
        id="expense-optimization",
        type=InsightType.SUGGESTION,
        priority=Priority.MEDIUM,
        title="Expense Optimization",
        message=(
            f"{category.value} is {percentage:.1f}% of your expenses "
            f"(${amount:.0f}). Look for ways to reduce this category."
        ),
        data={
            "category": category.value,
            "amount": amount,
            "percentage": percentage,
        },
        date_generated=now,
    )]


# =============================================================================
# OPPORTUNITIES
# =============================================================================

def analyze_opportunity_management(
    snapshot: DataSnapshot,
    now: datetime,
    settings: InsightSettings,
) -> list[Insight]:
    """Warn about overdue follow-ups and highlight a large open pipeline."""
    insights = []
    today = now.date()

    active = [o for o in snapshot.opportunities if o.status.is_active]
    overdue = [o for o in active if o.follow_up_date < today]

    if overdue:
        insights.append(Insight(
            id="overdue-opportunities",
            type=InsightType.WARNING,
            priority=Priority.CRITICAL,
            title="Overdue Opportunities",
            message=(
                f"{len(overdue)} high-value opportunities are overdue for follow-up. "
                "Don't let money slip away!"
            ),
            data={
                "count": len(overdue),
                "opportunityIds": [o.id for o in overdue],
            },
            date_generated=now,
        ))

    pipeline = sum(o.potential_value for o in active)
    if pipeline > settings.pipeline_value_threshold:
        insights.append(Insight(
            id="high-value-pipeline",
            type=InsightType.OPPORTUNITY,
            priority=Priority.HIGH,
            title="High-Value Pipeline",
            message=(
                f"You have ${pipeline:,.0f} in active opportunities. "
                "Focus on converting these for maximum impact!"
            ),
            data={"totalValue": pipeline, "count": len(active)},
            date_generated=now,
        ))

    return insights


# =============================================================================
# WORK PATTERNS
# =============================================================================

def analyze_work_patterns(
    snapshot: DataSnapshot,
    now: datetime,
    settings: InsightSettings,
) -> list[Insight]:
    """
    Look at the trailing shifts for burnout risk and a low hourly rate.

    The hourly rate divides ALL recorded earnings by the hours of the
    trailing shifts only.
    """
    if len(snapshot.shifts) < settings.min_shifts:
        return []

    insights = []
    recent = snapshot.shifts[-settings.shift_window:]
    hours = sum(shift.hours for shift in recent)
    average_hours = hours / len(recent)

    if average_hours > settings.long_shift_hours:
        insights.append(Insight(
            id="long-shifts",
            type=InsightType.WARNING,
            priority=Priority.MEDIUM,
            title="Long Shift Alert",
            message=(
                f"Your average shift is {average_hours:.1f} hours. Consider shorter, "
                "more focused shifts to avoid burnout and maintain energy."
            ),
            data={"avgHours": average_hours},
            date_generated=now,
        ))

    if snapshot.earnings and hours > 0:
        hourly = sum(e.total for e in snapshot.earnings) / hours
        if hourly < settings.min_hourly_rate:
            insights.append(Insight(
                id="low-hourly-rate",
                type=InsightType.SUGGESTION,
                priority=Priority.HIGH,
                title="Optimize Hourly Earnings",
                message=(
                    f"Your current rate is ${hourly:.0f}/hour. Focus on VIP clients "
                    "and premium services to increase this."
                ),
                data={"hourlyRate": hourly},
                date_generated=now,
            ))

    return insights


DEFAULT_ANALYZERS: list[Analyzer] = [
    analyze_client_patterns,
    analyze_earnings_trends,
    analyze_expense_optimization,
    analyze_opportunity_management,
    analyze_work_patterns,
]
