"""
kpi/saas.py

SaaS growth KPI formula implementation.

Expected inputs
---------------
current_users : int
    Paying users right now.
monthly_revenue : float
    Revenue for the current month.
churn_rate : float
    Monthly churn as a percentage (5.0 = 5 %).
growth_rate : float
    Monthly growth as a percentage.

Formulas
--------
Revenue per user  = monthly_revenue / current_users
LTV               = RPU * (1 / (churn_rate / 100)) * 12, or RPU * 24 with no churn
MRR               = monthly_revenue
ARR               = MRR * 12
NRR               = 100 + growth_rate - churn_rate
CAC               = min(RPU * 2, monthly_revenue * 0.4)
LTV:CAC           = LTV / CAC
DAU / WAU         = floor(current_users * 0.25) / floor(current_users * 0.65)
Growth efficiency = growth_rate / (CAC / RPU)
Retention         = 100 - churn_rate
Payback months    = ceil(CAC / RPU)

Division-by-zero cases return 0 for the affected metric.  A churn rate too
small for its lifetime to be representable is treated as no churn.
"""

from __future__ import annotations

import math
from typing import Any

from app.config import MetricConstants, get_metric_constants
from kpi.base import BaseKPIFormula

_SENTINEL = 0.0  # value stored when a metric cannot be computed


class SaaSGrowthFormula(BaseKPIFormula):
    """
    Deterministic SaaS growth calculations with safe division-by-zero handling.

    All arithmetic is self-contained.  No I/O, no logging, no side effects.
    The heuristic multipliers come from :class:`~app.config.MetricConstants`.
    """

    def __init__(self, constants: MetricConstants | None = None) -> None:
        self._constants = constants or get_metric_constants()

    def calculate(self, inputs: dict[str, Any]) -> dict[str, float | int]:
        """
        Compute the derived growth metrics from *inputs*.

        Parameters
        ----------
        inputs:
            Dictionary containing the keys listed in the module docstring.

        Returns
        -------
        dict
            Keys: ``revenue_per_user``, ``customer_lifetime_value``,
            ``monthly_recurring_revenue``, ``annual_recurring_revenue``,
            ``net_revenue_retention``, ``customer_acquisition_cost``,
            ``ltv_cac_ratio``, ``daily_active_users``, ``weekly_active_users``,
            ``growth_efficiency``, ``retention_rate``,
            ``payback_period_months``.
        """
        c = self._constants
        current_users: int = inputs["current_users"]
        monthly_revenue: float = inputs["monthly_revenue"]
        churn_rate: float = inputs["churn_rate"]
        growth_rate: float = inputs["growth_rate"]

        rpu = _revenue_per_user(monthly_revenue, current_users)
        ltv = _lifetime_value(rpu, churn_rate, c.no_churn_lifetime_months)
        mrr = monthly_revenue
        cac = _acquisition_cost(
            rpu, monthly_revenue, c.cac_rpu_multiplier, c.cac_revenue_share
        )
        ltv_cac = _ltv_cac_ratio(ltv, cac)

        return {
            "revenue_per_user": rpu,
            "customer_lifetime_value": ltv,
            "monthly_recurring_revenue": mrr,
            "annual_recurring_revenue": mrr * 12,
            "net_revenue_retention": 100 + growth_rate - churn_rate,
            "customer_acquisition_cost": cac,
            "ltv_cac_ratio": ltv_cac,
            "daily_active_users": math.floor(current_users * c.dau_ratio),
            "weekly_active_users": math.floor(current_users * c.wau_ratio),
            "growth_efficiency": _growth_efficiency(growth_rate, cac, rpu),
            "retention_rate": 100 - churn_rate,
            "payback_period_months": _payback_months(cac, rpu),
        }


# ---------------------------------------------------------------------------
# Pure formula functions
# ---------------------------------------------------------------------------


def _revenue_per_user(monthly_revenue: float, current_users: int) -> float:
    """
    RPU = monthly_revenue / current_users.

    Returns 0 when current_users is zero.
    """
    if current_users == 0:
        return _SENTINEL
    return monthly_revenue / current_users


def _lifetime_value(rpu: float, churn_rate: float, no_churn_months: float) -> float:
    """
    LTV = RPU * expected lifetime in months * 12.

    Without churn the lifetime is unbounded, so a fixed horizon of
    *no_churn_months* is used instead.  The same horizon applies when the
    churn rate is so small that the lifetime overflows.
    """
    if churn_rate > 0:
        ltv = rpu * (100 / churn_rate) * 12
        if math.isfinite(ltv):
            return ltv
    return rpu * no_churn_months


def _acquisition_cost(
    rpu: float,
    monthly_revenue: float,
    rpu_multiplier: float,
    revenue_share: float,
) -> float:
    """
    CAC = min(RPU * rpu_multiplier, monthly_revenue * revenue_share).

    Returns 0 when there is no revenue to estimate from.
    """
    if monthly_revenue == 0:
        return _SENTINEL
    return min(rpu * rpu_multiplier, monthly_revenue * revenue_share)


def _ltv_cac_ratio(ltv: float, cac: float) -> float:
    """
    LTV:CAC = LTV / CAC.

    Returns 0 when CAC is zero.  The ratio is never clamped.
    """
    if cac == 0:
        return _SENTINEL
    return ltv / cac


def _growth_efficiency(growth_rate: float, cac: float, rpu: float) -> float:
    """
    Growth efficiency = growth_rate / (CAC / RPU).

    Falls back to the raw growth rate without a CAC, and to a divisor of 1
    when the CAC/RPU ratio is zero or undefined.
    """
    if cac <= 0:
        return growth_rate
    months_to_recover = cac / rpu if rpu else 0.0
    return growth_rate / (months_to_recover or 1)


def _payback_months(cac: float, rpu: float) -> int:
    """
    Payback period = ceil(CAC / RPU).

    Returns 0 when RPU is zero or the ratio is not finite.
    """
    if rpu == 0:
        return 0
    months = cac / rpu
    if not math.isfinite(months):
        return 0
    return math.ceil(months)
