"""
kpi/status.py

Qualitative status buckets and progress-percentage helpers.
No I/O, no side effects.
"""

from __future__ import annotations

from typing import Literal

from app.config import MetricConstants, get_metric_constants

GrowthStatus = Literal["excellent", "good", "slow", "none"]
ChurnStatus = Literal["excellent", "good", "average", "high-risk"]
HealthStatus = Literal["healthy", "unhealthy"]

PROGRESS_MIN: float = 0.0
PROGRESS_MAX: float = 100.0


def clamp_progress(value: float) -> float:
    """Clamp a percentage to the displayable range [0, 100]."""
    return max(PROGRESS_MIN, min(value, PROGRESS_MAX))


def progress_percent(value: float, goal: float) -> float:
    """
    Return ``value / goal * 100`` clamped to [0, 100].

    A zero goal means "not set" and yields 0.
    """
    if goal == 0:
        return PROGRESS_MIN
    return clamp_progress((value / goal) * 100)


class StatusClassifier:
    """
    Maps raw metric values to the labels shown next to them.

    Thresholds (inclusive where marked):

        growth rate   |  label          churn rate  |  label
        --------------|-------------    ------------|-----------
        >= 10         |  excellent      <= 2        |  excellent
        >= 5          |  good           <= 5        |  good
        > 0           |  slow           <= 10       |  average
        otherwise     |  none           otherwise   |  high-risk

    LTV:CAC, NRR and retention are binary: ``healthy`` at or above their
    threshold (3, 100 and 90 respectively), ``unhealthy`` below it.
    """

    def __init__(self, constants: MetricConstants | None = None) -> None:
        self._constants = constants or get_metric_constants()

    def growth(self, growth_rate: float) -> GrowthStatus:
        c = self._constants
        if growth_rate >= c.growth_excellent:
            return "excellent"
        if growth_rate >= c.growth_good:
            return "good"
        if growth_rate > 0:
            return "slow"
        return "none"

    def churn(self, churn_rate: float) -> ChurnStatus:
        c = self._constants
        if churn_rate <= c.churn_excellent:
            return "excellent"
        if churn_rate <= c.churn_good:
            return "good"
        if churn_rate <= c.churn_average:
            return "average"
        return "high-risk"

    def ltv_cac(self, ratio: float) -> HealthStatus:
        return _healthy(ratio, self._constants.ltv_cac_target)

    def net_revenue_retention(self, nrr: float) -> HealthStatus:
        return _healthy(nrr, self._constants.nrr_healthy)

    def retention(self, retention_rate: float) -> HealthStatus:
        return _healthy(retention_rate, self._constants.retention_healthy)


def _healthy(value: float, threshold: float) -> HealthStatus:
    return "healthy" if value >= threshold else "unhealthy"
