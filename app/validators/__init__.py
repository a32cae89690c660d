"""
app/validators package marker.
"""

from app.validators.snapshot_validator import SnapshotValidationResult, SnapshotValidator

__all__ = [
    "SnapshotValidationResult",
    "SnapshotValidator",
]
