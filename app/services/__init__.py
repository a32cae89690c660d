"""
app/services package marker.
"""

from app.services.insights_service import InsightCard, InsightsService
from app.services.metrics_engine import MetricsEngine

__all__ = [
    "InsightCard",
    "InsightsService",
    "MetricsEngine",
]
