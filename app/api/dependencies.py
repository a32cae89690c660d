"""
app/api/dependencies.py

Shared FastAPI dependencies for the metrics endpoints.
"""

from __future__ import annotations

from functools import lru_cache

from app.services.insights_service import InsightsService
from app.services.metrics_engine import MetricsEngine
from app.validators.snapshot_validator import SnapshotValidator


@lru_cache(maxsize=1)
def get_metrics_engine() -> MetricsEngine:
    """
    Return the process-wide engine; it holds only immutable constants.
    """

    return MetricsEngine()


def get_insights_service() -> InsightsService:
    return InsightsService(get_metrics_engine())


def get_snapshot_validator() -> SnapshotValidator:
    return SnapshotValidator()
