"""
app/domain/snapshot.py

Raw business inputs consumed by the metrics engine.

A :class:`BusinessSnapshot` is the single editable record held by the
dashboard's form state.  The engine borrows it read-only; every field has a
default so a partially filled form still yields a computable snapshot.

Numeric fields must be finite and stay inside generous ceilings, so every
derived ratio is computable in float arithmetic.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MAX_USERS = 1_000_000_000_000
MAX_AMOUNT = 1e15
MAX_RATE_PCT = 1e6


class HistoricalPoint(BaseModel):
    """One month of observed (or projected) users and revenue."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        str_strip_whitespace=True,
        allow_inf_nan=False,
    )

    month: str
    users: int = Field(default=0, ge=0, le=MAX_USERS)
    revenue: float = Field(default=0.0, ge=0.0, le=MAX_AMOUNT)


class BusinessSnapshot(BaseModel):
    """
    Current business values plus the chronological history behind them.

    Field names are snake_case in Python; the camelCase names used by the
    editing form (``currentUsers``, ``revenueGoal`` ...) are accepted as
    aliases.  ``churn_rate`` and ``growth_rate`` are percentages and may
    fall outside 0-100; only their magnitude is capped.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
    )

    name: str = ""
    current_users: int = Field(default=0, ge=0, le=MAX_USERS)
    goal_users: int = Field(default=1000, ge=0, le=MAX_USERS)
    monthly_revenue: float = Field(default=0.0, ge=0.0, le=MAX_AMOUNT)
    revenue_goal: float = Field(default=0.0, ge=0.0, le=MAX_AMOUNT)
    churn_rate: float = Field(default=0.0, ge=-MAX_RATE_PCT, le=MAX_RATE_PCT)
    growth_rate: float = Field(default=0.0, ge=-MAX_RATE_PCT, le=MAX_RATE_PCT)
    historical_data: tuple[HistoricalPoint, ...] = ()
