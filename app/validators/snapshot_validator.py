"""
app/validators/snapshot_validator.py

Required-field check applied by the editing surface before a snapshot is
accepted.  This is form policy; the metrics engine itself accepts any
snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from app.domain.snapshot import BusinessSnapshot


@dataclass(frozen=True)
class SnapshotValidationResult:
    """
    Outcome of a required-field check.

    ``missing_fields`` uses the editing form's field names, in form order.
    """

    is_valid: bool
    missing_fields: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "missing_fields": list(self.missing_fields),
        }


_REQUIRED_RULES: tuple[tuple[str, Callable[[BusinessSnapshot], bool]], ...] = (
    ("name", lambda s: bool(s.name.strip())),
    ("currentUsers", lambda s: s.current_users > 0),
    ("goalUsers", lambda s: s.goal_users > 0),
    ("monthlyRevenue", lambda s: s.monthly_revenue > 0),
    ("revenueGoal", lambda s: s.revenue_goal > 0),
)


class SnapshotValidator:
    """
    Flags the fields a dashboard user still has to fill in.

    A snapshot is complete when it has a non-blank name and positive
    current users, goal users, monthly revenue and revenue goal.
    """

    def validate(self, snapshot: BusinessSnapshot) -> SnapshotValidationResult:
        missing = tuple(name for name, is_set in _REQUIRED_RULES if not is_set(snapshot))
        return SnapshotValidationResult(is_valid=not missing, missing_fields=missing)

    def is_complete(self, snapshot: BusinessSnapshot) -> bool:
        return self.validate(snapshot).is_valid
