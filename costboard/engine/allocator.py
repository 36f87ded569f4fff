"""Overhead allocation and project pricing arithmetic.

Everything here is pure: callers pass the current date and the aggregate
monthly overhead explicitly, so results depend only on the arguments.
"""

from __future__ import annotations

import datetime
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

WEEKS_PER_YEAR = 52
MONTHS_PER_YEAR = 12

# Dashboard period factors applied to a monthly amount.
DASHBOARD_PERIODS: Dict[str, float] = {
    "hourly": 1.0 / (24 * 30),
    "weekly": 1.0 / 4,
    "monthly": 1.0,
    "annually": 12.0,
}


@dataclass
class DurationMetrics:
    duration_in_weeks: int
    remaining_weeks: int


@dataclass
class AllocationResult:
    percentage: float
    total_remaining_weeks: int
    shares: Dict[str, float] = field(default_factory=dict)


def _weeks_between(start: datetime.date, end: datetime.date) -> int:
    return math.ceil((end - start).days / 7)


def duration_metrics(
    start_date: datetime.date, end_date: datetime.date, now: datetime.date
) -> DurationMetrics:
    """Total and remaining whole weeks of a date range, at day granularity."""
    duration = max(0, _weeks_between(start_date, end_date))
    remaining = max(0, _weeks_between(now, end_date))
    return DurationMetrics(duration_in_weeks=duration, remaining_weeks=remaining)


def profit_margin(price: float, cost: float) -> float:
    # Margin is relative to cost, not to price.
    if cost == 0:
        return 0.0
    return (price - cost) / cost * 100


def weekly_overhead(monthly_overhead_total: float) -> float:
    return monthly_overhead_total * MONTHS_PER_YEAR / WEEKS_PER_YEAR


def allocated_overhead(weekly: float, duration_in_weeks: float, allocation_percentage: float) -> float:
    return weekly * duration_in_weeks * allocation_percentage / 100


def project_price(cost: float, profit_margin_percent: float) -> float:
    return cost * (1 + profit_margin_percent / 100)


def auto_allocation(
    candidate_remaining_weeks: int,
    active_remaining: Iterable[Tuple[str, int]],
) -> AllocationResult:
    """Shares overhead between active projects by remaining duration.

    ``active_remaining`` holds ``(project_id, remaining_weeks)`` for every
    other active project. The candidate's percentage is its remaining weeks
    over the sum of all remaining weeks, candidate included; the other
    projects' shares use the same denominator. A zero sum gives the candidate
    the whole overhead.
    """
    candidate = max(0, candidate_remaining_weeks)
    others = [(project_id, max(0, weeks)) for project_id, weeks in active_remaining]
    total = candidate + sum(weeks for _, weeks in others)
    if total <= 0:
        return AllocationResult(percentage=100.0, total_remaining_weeks=0)
    shares = {project_id: weeks / total * 100 for project_id, weeks in others}
    return AllocationResult(
        percentage=candidate / total * 100,
        total_remaining_weeks=total,
        shares=shares,
    )


def convert_monthly(monthly_cost: float, period: str) -> float:
    try:
        factor = DASHBOARD_PERIODS[period]
    except KeyError:
        raise ValueError(f"Unknown period {period!r}") from None
    return monthly_cost * factor


def weekly_cost_series(weekly: float, duration_in_weeks: int, allocation_percentage: float) -> List[Dict[str, float]]:
    """Week-by-week allocated overhead for a project."""
    per_week = weekly * allocation_percentage / 100
    return [{"week": index + 1, "cost": per_week} for index in range(max(0, duration_in_weeks))]
