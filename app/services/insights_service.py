"""
app/services/insights_service.py

Builds the display cards shown on the dashboard from a snapshot and its
metrics report.  Formatting only: every number comes from
:class:`~app.services.metrics_engine.MetricsEngine`.

Sentinel labels
---------------
"Not set"          CAC could not be estimated (no revenue)
"N/A"              LTV:CAC, payback period or revenue trend undefined
"Set growth rate"  time to goal undefined (growth rate not positive)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from app.domain.snapshot import BusinessSnapshot
from app.schemas.metrics import MetricsReport
from app.services.metrics_engine import MetricsEngine
from forecast.classifier import Direction, TrendClassifier

NOT_SET = "Not set"
NOT_AVAILABLE = "N/A"
SET_GROWTH_RATE = "Set growth rate"

_GROWTH_LABELS = {
    "excellent": "Excellent Growth",
    "good": "Good Growth",
    "slow": "Slow Growth",
    "none": "No Growth",
}

_CHURN_LABELS = {
    "excellent": "Excellent",
    "good": "Good",
    "average": "Average",
    "high-risk": "High Risk",
}


@dataclass(frozen=True)
class InsightCard:
    """One titled value on the dashboard, with an optional trend arrow."""

    title: str
    value: str
    description: str
    trend: float | None = None
    direction: Direction = "flat"

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "value": self.value,
            "description": self.description,
            "trend": self.trend,
            "direction": self.direction,
        }


def format_currency(amount: float, decimals: int = 0) -> str:
    """``$1,234`` style amount; no locale handling beyond the thousands separator."""
    return f"${amount:,.{decimals}f}"


def _round_half_up(value: float) -> float:
    return float(math.floor(value + 0.5))


def format_number(value: float) -> str:
    return f"{value:,}"


def format_signed_percent(value: float) -> str:
    sign = "+" if value > 0 else ""
    return f"{sign}{value:g}%"


class InsightsService:
    """
    Consolidates the dashboard's insight and advanced-metric panels into
    two card lists driven by one :class:`MetricsReport`.
    """

    def __init__(self, engine: MetricsEngine | None = None) -> None:
        self._engine = engine or MetricsEngine()
        self._classifier = TrendClassifier()

    def build(
        self,
        snapshot: BusinessSnapshot,
        report: MetricsReport | None = None,
    ) -> list[InsightCard]:
        """
        Return the six headline insight cards for *snapshot*.

        *report* may be passed when the caller already computed it for the
        same snapshot.
        """
        report = report or self._engine.compute_metrics(snapshot)
        trend = self._engine.compute_trend(snapshot.historical_data)
        months = self._engine.time_to_goal(
            snapshot.current_users, snapshot.goal_users, snapshot.growth_rate
        )

        user_trend = trend.user_trend_pct or None
        revenue_trend = trend.revenue_trend_pct or None

        if months is not None and months > 0:
            time_to_goal_value = f"{months} months"
        else:
            time_to_goal_value = SET_GROWTH_RATE

        return [
            InsightCard(
                title="Time to Goal",
                value=time_to_goal_value,
                description="At current growth rate",
            ),
            self._card(
                "Revenue per User",
                format_currency(report.revenue_per_user, decimals=2),
                "Monthly average",
                revenue_trend,
            ),
            self._card(
                "Monthly Growth",
                f"{user_trend if user_trend is not None else snapshot.growth_rate:g}%",
                "Actual last month" if user_trend is not None else "Target growth rate",
                user_trend,
            ),
            InsightCard(
                title="Growth Rate",
                value=f"{snapshot.growth_rate:g}%",
                description=_GROWTH_LABELS[report.growth_status],
            ),
            InsightCard(
                title="Churn Rate",
                value=f"{snapshot.churn_rate:g}%",
                description=_CHURN_LABELS[report.churn_status],
            ),
            self._card(
                "Revenue Trend",
                format_signed_percent(revenue_trend) if revenue_trend is not None else NOT_AVAILABLE,
                "Last month change" if revenue_trend is not None else "No historical data",
                revenue_trend,
            ),
        ]

    def metric_cards(self, snapshot: BusinessSnapshot, report: MetricsReport) -> list[InsightCard]:
        """
        Return the advanced-metrics panel cards with sentinel labels applied.
        """
        cac = report.customer_acquisition_cost
        ratio = report.ltv_cac_ratio
        payback = report.payback_period_months
        return [
            InsightCard(
                "Monthly Recurring Revenue",
                format_currency(report.monthly_recurring_revenue),
                f"Target: {format_currency(snapshot.revenue_goal)}",
            ),
            InsightCard(
                "Annual Recurring Revenue",
                format_currency(report.annual_recurring_revenue),
                f"Target: {format_currency(snapshot.revenue_goal * 12)}",
            ),
            InsightCard("Daily Active Users", format_number(report.daily_active_users), "estimated daily"),
            InsightCard("Weekly Active Users", format_number(report.weekly_active_users), "estimated weekly"),
            InsightCard("Revenue per User", format_currency(report.revenue_per_user, decimals=2), "current average"),
            InsightCard("Customer Lifetime Value", format_currency(report.customer_lifetime_value), "based on churn rate"),
            InsightCard(
                "Customer Acquisition Cost",
                format_currency(cac) if cac > 0 else NOT_SET,
                "estimated cost",
            ),
            InsightCard(
                "LTV:CAC Ratio",
                f"{ratio:.1f}:1" if ratio > 0 else NOT_AVAILABLE,
                "business health metric",
            ),
            self._card(
                "Net Revenue Retention",
                f"{report.net_revenue_retention:.1f}%",
                "growth minus churn",
                _round_half_up(snapshot.growth_rate - snapshot.churn_rate),
            ),
            self._card(
                "Retention Rate",
                f"{report.retention_rate:.1f}%",
                "monthly retention",
                _round_half_up(-snapshot.churn_rate),
            ),
            InsightCard("Growth Efficiency", f"{report.growth_efficiency:.1f}x", "current efficiency"),
            InsightCard(
                "Payback Period",
                f"{payback} months" if payback > 0 else NOT_AVAILABLE,
                "time to recover CAC",
            ),
        ]

    def _card(self, title: str, value: str, description: str, trend: float | None) -> InsightCard:
        return InsightCard(
            title=title,
            value=value,
            description=description,
            trend=trend,
            direction=self._classifier.classify(trend),
        )
