"""
app/domain package marker.
"""

from app.domain.snapshot import BusinessSnapshot, HistoricalPoint

__all__ = [
    "BusinessSnapshot",
    "HistoricalPoint",
]
