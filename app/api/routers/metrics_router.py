"""
app/api/routers/metrics_router.py

Metrics endpoints.

Every endpoint takes the caller's current snapshot in the request body and
returns freshly derived values; nothing is stored between requests.
Malformed snapshots are rejected with 422 by request validation before the
engine is reached.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, ConfigDict, Field

from app.api.dependencies import (
    get_insights_service,
    get_metrics_engine,
    get_snapshot_validator,
)
from app.domain.snapshot import MAX_AMOUNT, MAX_RATE_PCT, BusinessSnapshot, HistoricalPoint
from app.schemas.metrics import (
    InsightCardResponse,
    MetricsReport,
    PeriodGrowthResponse,
    TimeToGoalResponse,
    TrendResponse,
)
from app.services.insights_service import InsightsService
from app.services.metrics_engine import MetricsEngine
from app.validators.snapshot_validator import SnapshotValidator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["metrics"])


# ---------------------------------------------------------------------------
# Request / Response schemas
# ---------------------------------------------------------------------------


class TimeToGoalRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    current: float = Field(..., ge=0.0, le=MAX_AMOUNT)
    goal: float = Field(..., ge=0.0, le=MAX_AMOUNT)
    growth_rate: float = Field(..., ge=-MAX_RATE_PCT, le=MAX_RATE_PCT)


class SnapshotValidationResponse(BaseModel):
    is_valid: bool
    missing_fields: list[str] = []


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post("/metrics", response_model=MetricsReport, status_code=status.HTTP_200_OK)
def compute_metrics(
    snapshot: BusinessSnapshot,
    engine: MetricsEngine = Depends(get_metrics_engine),
) -> MetricsReport:
    """
    Derive the full KPI report for the submitted snapshot.
    """
    report = engine.compute_metrics(snapshot)
    logger.info("Metrics computed name=%r users=%d", snapshot.name, snapshot.current_users)
    return report


@router.post("/metrics/trend", response_model=TrendResponse)
def compute_trend(
    snapshot: BusinessSnapshot,
    engine: MetricsEngine = Depends(get_metrics_engine),
) -> TrendResponse:
    """
    Month-over-month change between the last two historical entries.
    """
    result = engine.compute_trend(snapshot.historical_data)
    return TrendResponse(
        user_trend_pct=result.user_trend_pct,
        revenue_trend_pct=result.revenue_trend_pct,
    )


@router.post("/metrics/period-growth", response_model=list[PeriodGrowthResponse])
def period_growth(
    snapshot: BusinessSnapshot,
    engine: MetricsEngine = Depends(get_metrics_engine),
) -> list[PeriodGrowthResponse]:
    """
    Growth of every historical month versus the month before it.
    """
    return [
        PeriodGrowthResponse(
            month=row.month,
            users=row.users,
            revenue=row.revenue,
            user_growth_pct=row.user_growth_pct,
            revenue_growth_pct=row.revenue_growth_pct,
            previous_year_users=row.previous_year_users,
        )
        for row in engine.period_over_period(snapshot.historical_data)
    ]


@router.post("/metrics/projection", response_model=list[HistoricalPoint])
def project_forward(
    snapshot: BusinessSnapshot,
    months: int | None = Query(default=None, ge=0, le=120),
    engine: MetricsEngine = Depends(get_metrics_engine),
) -> list[HistoricalPoint]:
    """
    Historical series extended with compounded projected months.
    """
    return engine.project_forward(snapshot.historical_data, snapshot.growth_rate, months)


@router.post("/metrics/time-to-goal", response_model=TimeToGoalResponse)
def time_to_goal(
    body: TimeToGoalRequest,
    engine: MetricsEngine = Depends(get_metrics_engine),
) -> TimeToGoalResponse:
    """
    Months until *goal* at the given growth rate; null when unreachable.
    """
    return TimeToGoalResponse(months=engine.time_to_goal(body.current, body.goal, body.growth_rate))


@router.post("/metrics/insights", response_model=list[InsightCardResponse])
def insights(
    snapshot: BusinessSnapshot,
    service: InsightsService = Depends(get_insights_service),
) -> list[InsightCardResponse]:
    """
    Headline insight cards for the dashboard.
    """
    return [InsightCardResponse(**card.to_dict()) for card in service.build(snapshot)]


@router.post("/metrics/cards", response_model=list[InsightCardResponse])
def metric_cards(
    snapshot: BusinessSnapshot,
    engine: MetricsEngine = Depends(get_metrics_engine),
    service: InsightsService = Depends(get_insights_service),
) -> list[InsightCardResponse]:
    """
    Advanced-metrics panel cards, with "Not set" and "N/A" labels applied.
    """
    report = engine.compute_metrics(snapshot)
    return [InsightCardResponse(**card.to_dict()) for card in service.metric_cards(snapshot, report)]


@router.post("/snapshots/validate", response_model=SnapshotValidationResponse)
def validate_snapshot(
    snapshot: BusinessSnapshot,
    validator: SnapshotValidator = Depends(get_snapshot_validator),
) -> SnapshotValidationResponse:
    """
    Report which required form fields are still missing.
    """
    result = validator.validate(snapshot)
    if not result.is_valid:
        logger.info("Snapshot incomplete, missing=%s", ", ".join(result.missing_fields))
    return SnapshotValidationResponse(**result.to_dict())
