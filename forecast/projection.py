"""
forecast/projection.py

Simple compounding projection of users and revenue.
Not a statistical forecast: no confidence intervals, no seasonality.
"""

from __future__ import annotations

import math
from typing import Sequence

from app.config import MetricConstants, get_metric_constants
from app.domain.snapshot import MAX_AMOUNT, MAX_USERS, HistoricalPoint
from forecast.base import BaseForecastModel


class CompoundingProjection(BaseForecastModel):
    """
    Compounds the last observed month forward one month at a time.

    For each projected month ``k``::

        users_k   = floor(users_{k-1}   * (1 + g / 100))
        revenue_k = floor(revenue_{k-1} * (1 + (g + premium) / 100))

    where ``g`` is the monthly growth rate and ``premium`` is the extra
    revenue growth assumed on top of user growth (5 points by default).
    Projected entries are labelled ``"Proj 1"``, ``"Proj 2"``, ...  Values are
    kept within [0, MAX_USERS] and [0, MAX_AMOUNT] so a steep rate saturates
    instead of overflowing.
    """

    LABEL_PREFIX: str = "Proj"

    def __init__(self, constants: MetricConstants | None = None) -> None:
        self._constants = constants or get_metric_constants()

    def project(
        self,
        series: Sequence[HistoricalPoint],
        growth_rate: float,
        months: int,
    ) -> list[HistoricalPoint]:
        """
        Return *series* followed by *months* compounded entries.

        An empty series has nothing to compound from and is returned as an
        empty list.  ``months <= 0`` returns a plain copy of *series*.
        """
        projected = list(series)  # copy; keep caller's sequence intact
        if not projected:
            return projected

        user_factor = 1 + growth_rate / 100
        revenue_factor = 1 + (growth_rate + self._constants.projection_revenue_premium) / 100

        for k in range(1, months + 1):
            last = projected[-1]
            projected.append(
                HistoricalPoint(
                    month=f"{self.LABEL_PREFIX} {k}",
                    users=int(_compound(last.users, user_factor, MAX_USERS)),
                    revenue=_compound(last.revenue, revenue_factor, MAX_AMOUNT),
                )
            )
        return projected


def _compound(value: float, factor: float, ceiling: float) -> float:
    return float(math.floor(max(0.0, min(value * factor, ceiling))))
