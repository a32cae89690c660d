"""
forecast/goal.py

Months needed to reach a goal at a constant growth rate.
"""

from __future__ import annotations

import math


def time_to_goal(current: float, goal: float, growth_rate_pct: float) -> int | None:
    """
    Return ``ceil((goal - current) / (current * growth_rate_pct / 100))``.

    Uses the linear approximation the dashboard has always shown: each
    month adds ``current * growth_rate_pct / 100``.

    Returns ``None`` when the growth rate is not positive or *current* is
    zero, since no finite number of months reaches the goal.  The same
    applies when the monthly gain is too small to represent.  A negative
    result (already past the goal) is returned as-is for the caller to
    interpret.
    """
    if growth_rate_pct <= 0 or current == 0:
        return None
    monthly_gain = current * (growth_rate_pct / 100)
    if monthly_gain <= 0:
        return None
    months = (goal - current) / monthly_gain
    if not math.isfinite(months):
        return None
    return math.ceil(months)
