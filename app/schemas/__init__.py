"""
app/schemas package marker.
"""

from app.schemas.metrics import (
    InsightCardResponse,
    MetricsReport,
    PeriodGrowthResponse,
    RevenueBreakdown,
    TimeToGoalResponse,
    TrendResponse,
)

__all__ = [
    "InsightCardResponse",
    "MetricsReport",
    "PeriodGrowthResponse",
    "RevenueBreakdown",
    "TimeToGoalResponse",
    "TrendResponse",
]
