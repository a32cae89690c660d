"""
tests/test_time_series.py

Pytest unit tests for the time-series derivations exposed by MetricsEngine:
trend, period-over-period growth, forward projection and time to goal.
"""

from __future__ import annotations

import pytest

from app.config import MetricConstants
from app.domain.snapshot import MAX_AMOUNT, MAX_RATE_PCT, MAX_USERS, HistoricalPoint
from app.services.metrics_engine import MetricsEngine
from forecast.classifier import TrendClassifier
from forecast.goal import time_to_goal
from forecast.trend import round_one_decimal


def _series(*rows: tuple[int, float]) -> list[HistoricalPoint]:
    return [
        HistoricalPoint(month=f"M{index}", users=users, revenue=revenue)
        for index, (users, revenue) in enumerate(rows, start=1)
    ]


@pytest.fixture()
def engine() -> MetricsEngine:
    return MetricsEngine(MetricConstants())


# ---------------------------------------------------------------------------
# compute_trend
# ---------------------------------------------------------------------------


class TestComputeTrend:
    def test_empty_series(self, engine: MetricsEngine) -> None:
        result = engine.compute_trend([])
        assert (result.user_trend_pct, result.revenue_trend_pct) == (0.0, 0.0)

    def test_single_entry(self, engine: MetricsEngine) -> None:
        result = engine.compute_trend(_series((120, 900.0)))
        assert (result.user_trend_pct, result.revenue_trend_pct) == (0.0, 0.0)

    def test_uses_last_two_entries(self, engine: MetricsEngine) -> None:
        result = engine.compute_trend(_series((10, 50.0), (100, 1000.0), (110, 1150.0)))
        assert result.user_trend_pct == pytest.approx(10.0)
        assert result.revenue_trend_pct == pytest.approx(15.0)

    def test_rounds_to_one_decimal(self, engine: MetricsEngine) -> None:
        result = engine.compute_trend(_series((3, 300.0), (4, 200.0)))
        assert result.user_trend_pct == pytest.approx(33.3)
        assert result.revenue_trend_pct == pytest.approx(-33.3)

    def test_zero_prior_value_is_guarded(self, engine: MetricsEngine) -> None:
        result = engine.compute_trend(_series((0, 0.0), (50, 400.0)))
        assert result.user_trend_pct == 0.0
        assert result.revenue_trend_pct == 0.0

    def test_drop_to_zero_reads_as_missing_month(self, engine: MetricsEngine) -> None:
        result = engine.compute_trend(_series((40, 100.0), (44, 0.0)))
        assert result.revenue_trend_pct == 0.0
        assert result.user_trend_pct == pytest.approx(10.0)

    def test_vanishing_prior_revenue_is_guarded(self, engine: MetricsEngine) -> None:
        result = engine.compute_trend(_series((100, 5e-324), (110, MAX_AMOUNT)))
        assert result.user_trend_pct == 10.0
        assert result.revenue_trend_pct == 0.0

    def test_components_are_independent(self, engine: MetricsEngine) -> None:
        result = engine.compute_trend(_series((0, 200.0), (25, 250.0)))
        assert result.user_trend_pct == 0.0
        assert result.revenue_trend_pct == pytest.approx(25.0)


class TestRounding:
    @pytest.mark.parametrize(
        "value, expected",
        [(12.34, 12.3), (0.25, 0.3), (-0.25, -0.2), (-12.36, -12.4), (0.0, 0.0)],
    )
    def test_half_up(self, value: float, expected: float) -> None:
        assert round_one_decimal(value) == pytest.approx(expected)


# ---------------------------------------------------------------------------
# period_over_period
# ---------------------------------------------------------------------------


class TestPeriodOverPeriod:
    def test_first_row_has_no_growth(self, engine: MetricsEngine) -> None:
        rows = engine.period_over_period(_series((100, 1000.0), (120, 1100.0)))
        assert rows[0].user_growth_pct == 0.0
        assert rows[0].revenue_growth_pct == 0.0

    def test_growth_versus_previous_row(self, engine: MetricsEngine) -> None:
        rows = engine.period_over_period(_series((100, 1000.0), (120, 1100.0)))
        assert rows[1].user_growth_pct == pytest.approx(20.0)
        assert rows[1].revenue_growth_pct == pytest.approx(10.0)

    def test_zero_previous_row_is_guarded(self, engine: MetricsEngine) -> None:
        rows = engine.period_over_period(_series((0, 0.0), (10, 100.0)))
        assert rows[1].user_growth_pct == 0.0
        assert rows[1].revenue_growth_pct == 0.0

    def test_previous_year_users(self, engine: MetricsEngine) -> None:
        rows = engine.period_over_period(_series((101, 0.0)))
        assert rows[0].previous_year_users == 70


# ---------------------------------------------------------------------------
# project_forward
# ---------------------------------------------------------------------------


class TestProjectForward:
    def test_default_horizon_is_six_months(self, engine: MetricsEngine) -> None:
        history = _series((100, 1000.0))
        projected = engine.project_forward(history, growth_rate=10)
        assert len(projected) == 7
        assert [p.month for p in projected[1:]] == [f"Proj {k}" for k in range(1, 7)]

    def test_compounding_formula(self, engine: MetricsEngine) -> None:
        projected = engine.project_forward(_series((100, 1000.0)), growth_rate=10, months=2)
        # users: floor(100 * 1.1) = 110, floor(110 * 1.1) = 121
        # revenue: floor(1000 * 1.15) = 1150, floor(1150 * 1.15) = 1322
        assert [p.users for p in projected] == [100, 110, 121]
        assert [p.revenue for p in projected] == [1000.0, 1150.0, 1322.0]

    def test_zero_growth_still_lifts_revenue(self, engine: MetricsEngine) -> None:
        projected = engine.project_forward(_series((50, 200.0)), growth_rate=0, months=1)
        assert projected[-1].users == 50
        assert projected[-1].revenue == 210.0

    def test_monotonic_for_positive_growth(self, engine: MetricsEngine) -> None:
        projected = engine.project_forward(_series((37, 813.0)), growth_rate=3.5, months=12)
        for prev, nxt in zip(projected, projected[1:]):
            assert nxt.users >= prev.users
            assert nxt.revenue >= prev.revenue

    def test_input_is_not_mutated(self, engine: MetricsEngine) -> None:
        history = _series((100, 1000.0), (110, 1100.0))
        engine.project_forward(history, growth_rate=5, months=3)
        assert len(history) == 2

    def test_zero_months_returns_copy(self, engine: MetricsEngine) -> None:
        history = _series((100, 1000.0))
        projected = engine.project_forward(history, growth_rate=5, months=0)
        assert projected == history
        assert projected is not history

    def test_empty_history_stays_empty(self, engine: MetricsEngine) -> None:
        assert engine.project_forward([], growth_rate=10, months=6) == []

    def test_steep_growth_saturates_at_ceiling(self, engine: MetricsEngine) -> None:
        projected = engine.project_forward(
            _series((MAX_USERS, MAX_AMOUNT)), growth_rate=MAX_RATE_PCT, months=120
        )
        assert projected[-1].users == MAX_USERS
        assert projected[-1].revenue == MAX_AMOUNT

    def test_steep_decline_floors_at_zero(self, engine: MetricsEngine) -> None:
        projected = engine.project_forward(
            _series((100, 1000.0)), growth_rate=-MAX_RATE_PCT, months=2
        )
        assert [(p.users, p.revenue) for p in projected[1:]] == [(0, 0.0), (0, 0.0)]


# ---------------------------------------------------------------------------
# time_to_goal
# ---------------------------------------------------------------------------


class TestTimeToGoal:
    def test_months_to_goal(self) -> None:
        # (1000 - 100) / (100 * 0.1) = 90
        assert time_to_goal(100, 1000, 10) == 90

    def test_rounds_up(self) -> None:
        # (1000 - 300) / (300 * 0.07) = 33.33...
        assert time_to_goal(300, 1000, 7) == 34

    @pytest.mark.parametrize("growth_rate", [0, -5])
    def test_non_positive_growth_is_undefined(self, growth_rate: float) -> None:
        assert time_to_goal(100, 1000, growth_rate) is None

    def test_zero_current_is_undefined(self) -> None:
        assert time_to_goal(0, 1000, 10) is None

    def test_past_goal_is_negative(self) -> None:
        assert time_to_goal(2000, 1000, 10) == -5

    def test_unrepresentable_gain_is_undefined(self) -> None:
        assert time_to_goal(5e-324, 1000, 1e-10) is None
        assert time_to_goal(1e-300, 1e15, 1e-6) is None

    def test_engine_delegates(self, engine: MetricsEngine) -> None:
        assert engine.time_to_goal(100, 1000, 10) == 90
        assert engine.time_to_goal(100, 1000, 0) is None


class TestTrendClassifier:
    @pytest.mark.parametrize(
        "change, expected",
        [(4.2, "up"), (-0.1, "down"), (0.0, "flat"), (None, "flat")],
    )
    def test_direction(self, change: float | None, expected: str) -> None:
        assert TrendClassifier().classify(change) == expected
