"""
forecast/trend.py

Month-over-month change derived from the historical series.
No I/O, no side effects.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from app.domain.snapshot import HistoricalPoint


@dataclass(frozen=True)
class TrendResult:
    """Percent change between the last two months, one decimal place."""

    user_trend_pct: float = 0.0
    revenue_trend_pct: float = 0.0


@dataclass(frozen=True)
class PeriodGrowth:
    """One month of the comparison series with its change versus the month before."""

    month: str
    users: int
    revenue: float
    user_growth_pct: float
    revenue_growth_pct: float
    previous_year_users: int


def compute_trend(series: Sequence[HistoricalPoint]) -> TrendResult:
    """
    Compare the last two entries of *series*.

    Returns zeros when fewer than two entries exist.  Each component is
    computed independently: a zero in either of the two months reads as a
    month with no data yet, so that component is 0 rather than -100 %.
    """
    if len(series) < 2:
        return TrendResult()

    prev, last = series[-2], series[-1]
    return TrendResult(
        user_trend_pct=_last_change(last.users, prev.users),
        revenue_trend_pct=_last_change(last.revenue, prev.revenue),
    )


def _last_change(current: float, previous: float) -> float:
    if current <= 0:
        return 0.0
    return round_one_decimal(percent_change(current, previous))


def period_over_period(
    series: Sequence[HistoricalPoint],
    previous_year_ratio: float = 0.7,
) -> list[PeriodGrowth]:
    """
    Return every entry of *series* with its growth versus the entry before it.

    The first entry has no predecessor and reports 0 growth.
    ``previous_year_users`` is a simulated comparison line, not real data.
    """
    rows: list[PeriodGrowth] = []
    for index, point in enumerate(series):
        if index == 0:
            user_growth = revenue_growth = 0.0
        else:
            prior = series[index - 1]
            user_growth = percent_change(point.users, prior.users)
            revenue_growth = percent_change(point.revenue, prior.revenue)
        rows.append(
            PeriodGrowth(
                month=point.month,
                users=point.users,
                revenue=point.revenue,
                user_growth_pct=user_growth,
                revenue_growth_pct=revenue_growth,
                previous_year_users=math.floor(point.users * previous_year_ratio),
            )
        )
    return rows


def percent_change(current: float, previous: float) -> float:
    """
    ``(current - previous) / previous * 100``, or 0 when *previous* is not positive.

    A *previous* value so small that the change overflows is treated like zero.
    """
    if previous <= 0:
        return 0.0
    change = ((current - previous) / previous) * 100
    return change if math.isfinite(change) else 0.0


def round_one_decimal(value: float) -> float:
    """Round to one decimal place with halves going up, as the dashboard displays it."""
    scaled = value * 10 + 0.5
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled) / 10
