"""
app/services/metrics_engine.py

Deterministic growth-metrics engine.

Every method is a pure function of its arguments: the caller owns the
editable :class:`BusinessSnapshot` and passes it in on every render.  No
state is kept between calls and no method raises for a well-formed
snapshot; ratios with a zero denominator resolve to 0.

Operations
----------
compute_metrics     snapshot -> MetricsReport
compute_trend       history  -> last month-over-month change
period_over_period  history  -> per-month growth rows
project_forward     history, growth rate, months -> extended history
time_to_goal        current, goal, growth rate -> months or None
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from app.config import MetricConstants, get_metric_constants
from app.domain.snapshot import BusinessSnapshot, HistoricalPoint
from app.schemas.metrics import MetricsReport, RevenueBreakdown
from forecast import goal as goal_forecast
from forecast import trend as trend_forecast
from forecast.projection import CompoundingProjection
from forecast.trend import PeriodGrowth, TrendResult
from kpi.saas import SaaSGrowthFormula
from kpi.status import StatusClassifier, clamp_progress, progress_percent

logger = logging.getLogger(__name__)


class MetricsEngine:
    """
    Stateless, deterministic metrics engine.

    Usage::

        engine = MetricsEngine()
        report = engine.compute_metrics(
            BusinessSnapshot(current_users=100, monthly_revenue=500.0, churn_rate=5)
        )
        print(report.revenue_per_user)  # 5.0
    """

    def __init__(self, constants: MetricConstants | None = None) -> None:
        self._constants = constants or get_metric_constants()
        self._formula = SaaSGrowthFormula(self._constants)
        self._status = StatusClassifier(self._constants)
        self._projection = CompoundingProjection(self._constants)

    @property
    def constants(self) -> MetricConstants:
        return self._constants

    # ------------------------------------------------------------------
    # Scalar report
    # ------------------------------------------------------------------

    def compute_metrics(self, snapshot: BusinessSnapshot) -> MetricsReport:
        """
        Derive the full KPI report for *snapshot*.

        Progress values are clamped to [0, 100]; the raw ratios behind them
        are reported unclamped.  Undefined ratios are 0 (see the module
        docstring of :mod:`kpi.saas` for the individual guards).
        """
        c = self._constants
        derived = self._formula.calculate(
            {
                "current_users": snapshot.current_users,
                "monthly_revenue": snapshot.monthly_revenue,
                "churn_rate": snapshot.churn_rate,
                "growth_rate": snapshot.growth_rate,
            }
        )
        if snapshot.current_users == 0:
            logger.debug("No current users; per-user metrics resolve to 0.")
        if derived["customer_acquisition_cost"] == 0:
            logger.debug("CAC undefined for zero revenue; LTV:CAC resolves to 0.")

        mrr = derived["monthly_recurring_revenue"]
        arr = derived["annual_recurring_revenue"]
        ltv_cac_ratio = derived["ltv_cac_ratio"]
        nrr = derived["net_revenue_retention"]
        retention_rate = derived["retention_rate"]
        rpu = derived["revenue_per_user"]

        if ltv_cac_ratio > 0:
            ltv_cac_progress = clamp_progress((ltv_cac_ratio / c.ltv_cac_target) * 100)
        else:
            ltv_cac_progress = 0.0

        report = MetricsReport(
            **derived,
            mrr_progress=progress_percent(mrr, snapshot.revenue_goal),
            arr_progress=progress_percent(arr, snapshot.revenue_goal * 12),
            retention_progress=clamp_progress((retention_rate / c.retention_target) * 100),
            ltv_cac_progress=ltv_cac_progress,
            nrr_progress=clamp_progress((nrr / c.nrr_target) * 100),
            user_progress=progress_percent(snapshot.current_users, snapshot.goal_users),
            revenue_progress=progress_percent(snapshot.monthly_revenue, snapshot.revenue_goal),
            growth_status=self._status.growth(snapshot.growth_rate),
            churn_status=self._status.churn(snapshot.churn_rate),
            ltv_cac_status=self._status.ltv_cac(ltv_cac_ratio),
            nrr_status=self._status.net_revenue_retention(nrr),
            retention_status=self._status.retention(retention_rate),
            projected_mrr=snapshot.goal_users * rpu,
            growth_momentum=snapshot.growth_rate * (1 - snapshot.churn_rate / 100),
            users_remaining=max(snapshot.goal_users - snapshot.current_users, 0),
            revenue_remaining=max(snapshot.revenue_goal - snapshot.monthly_revenue, 0.0),
            churn_health_score=clamp_progress(100 - snapshot.churn_rate * c.churn_health_multiplier),
            growth_score=clamp_progress(snapshot.growth_rate * c.growth_score_multiplier),
            revenue_breakdown=self._revenue_breakdown(mrr),
        )
        logger.debug(
            "Metrics computed for %r: mrr=%.2f ltv_cac=%.4f nrr=%.2f",
            snapshot.name,
            mrr,
            ltv_cac_ratio,
            nrr,
        )
        return report

    def _revenue_breakdown(self, mrr: float) -> RevenueBreakdown:
        c = self._constants
        return RevenueBreakdown(
            new_customers=math.floor(mrr * c.new_customer_revenue_share),
            existing_customers=math.floor(mrr * c.existing_customer_revenue_share),
            upgrades=math.floor(mrr * c.upgrade_revenue_share),
        )

    # ------------------------------------------------------------------
    # Time series
    # ------------------------------------------------------------------

    def compute_trend(self, series: Sequence[HistoricalPoint]) -> TrendResult:
        """
        Percent change between the last two months of *series*.

        Zero for both components with fewer than two entries; zero for a
        component whose prior or latest value is zero.
        """
        result = trend_forecast.compute_trend(series)
        logger.debug(
            "Trend over %d months: users=%.1f%% revenue=%.1f%%",
            len(series),
            result.user_trend_pct,
            result.revenue_trend_pct,
        )
        return result

    def period_over_period(self, series: Sequence[HistoricalPoint]) -> list[PeriodGrowth]:
        """Month-by-month growth rows for the comparison chart."""
        return trend_forecast.period_over_period(
            series, previous_year_ratio=self._constants.previous_year_user_ratio
        )

    def project_forward(
        self,
        series: Sequence[HistoricalPoint],
        growth_rate: float,
        months: int | None = None,
    ) -> list[HistoricalPoint]:
        """
        Extend *series* with compounded synthetic months.

        *months* defaults to the configured projection horizon (6).  The
        input sequence is never mutated.
        """
        horizon = self._constants.projection_months if months is None else months
        if not series:
            logger.debug("Projection skipped: no historical data to compound from.")
        return self._projection.project(series, growth_rate, horizon)

    def time_to_goal(self, current: float, goal: float, growth_rate_pct: float) -> int | None:
        """
        Months to reach *goal* from *current* at *growth_rate_pct* per month.

        ``None`` when unreachable (non-positive growth or nothing to grow from).
        """
        months = goal_forecast.time_to_goal(current, goal, growth_rate_pct)
        if months is None:
            logger.debug(
                "Time to goal undefined (current=%s, growth_rate=%s).", current, growth_rate_pct
            )
        return months
