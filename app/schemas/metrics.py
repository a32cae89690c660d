"""
app/schemas/metrics.py

Output schemas for the metrics engine and its endpoints.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from kpi.status import ChurnStatus, GrowthStatus, HealthStatus

Progress = Annotated[float, Field(ge=0.0, le=100.0)]


class RevenueBreakdown(BaseModel):
    """
    Estimated split of MRR by revenue source.
    """

    model_config = ConfigDict(frozen=True)

    new_customers: int
    existing_customers: int
    upgrades: int


class MetricsReport(BaseModel):
    """
    Every KPI derived from one :class:`~app.domain.snapshot.BusinessSnapshot`.

    Raw ratios (``ltv_cac_ratio``, ``net_revenue_retention`` ...) are
    unclamped; every ``*_progress`` field is clamped to [0, 100].  A value
    of 0 on a ratio means it is undefined for the input, not that it
    measured zero.
    """

    model_config = ConfigDict(frozen=True)

    revenue_per_user: float
    customer_lifetime_value: float
    monthly_recurring_revenue: float
    annual_recurring_revenue: float
    net_revenue_retention: float
    customer_acquisition_cost: float
    ltv_cac_ratio: float
    daily_active_users: int
    weekly_active_users: int
    growth_efficiency: float
    retention_rate: float
    payback_period_months: int

    mrr_progress: Progress
    arr_progress: Progress
    retention_progress: Progress
    ltv_cac_progress: Progress
    nrr_progress: Progress
    user_progress: Progress
    revenue_progress: Progress

    growth_status: GrowthStatus
    churn_status: ChurnStatus
    ltv_cac_status: HealthStatus
    nrr_status: HealthStatus
    retention_status: HealthStatus

    projected_mrr: float
    growth_momentum: float
    users_remaining: int
    revenue_remaining: float
    churn_health_score: Progress
    growth_score: Progress
    revenue_breakdown: RevenueBreakdown


class TrendResponse(BaseModel):
    """
    API response model for the last month-over-month change.
    """

    user_trend_pct: float
    revenue_trend_pct: float


class PeriodGrowthResponse(BaseModel):
    """
    API response model for one row of the monthly comparison series.
    """

    month: str
    users: int = Field(..., ge=0)
    revenue: float = Field(..., ge=0.0)
    user_growth_pct: float
    revenue_growth_pct: float
    previous_year_users: int = Field(..., ge=0)


class TimeToGoalResponse(BaseModel):
    """
    API response model for time-to-goal; ``months`` is null when unreachable.
    """

    months: int | None = None


class InsightCardResponse(BaseModel):
    """
    API response model for one display card.
    """

    title: str
    value: str
    description: str
    trend: float | None = None
    direction: str
