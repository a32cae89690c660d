"""
tests/test_config.py

Pytest unit tests for environment-driven configuration: `.env` loading and
the ``METRICS_*`` overrides read by get_metric_constants.
"""

from __future__ import annotations

import os
from dataclasses import fields
from pathlib import Path
from typing import Iterator

import pytest

from app.config import (
    MetricConstants,
    get_metric_constants,
    load_env_files,
    metric_env_name,
)
from app.domain.snapshot import BusinessSnapshot
from app.services.metrics_engine import MetricsEngine

_SCRATCH_VARS = ("GT_TEST_BASE", "GT_TEST_LOCAL", "GT_TEST_KEEP", "GT_TEST_EXPORTED")


@pytest.fixture()
def scratch_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Unset the scratch variables and remove whatever a test loads into them."""
    for name in _SCRATCH_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture()
def clean_metrics_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    for constant in fields(MetricConstants):
        monkeypatch.delenv(metric_env_name(constant.name), raising=False)
    get_metric_constants.cache_clear()
    yield monkeypatch
    get_metric_constants.cache_clear()


# ---------------------------------------------------------------------------
# get_metric_constants
# ---------------------------------------------------------------------------


class TestMetricConstantsFromEnv:
    def test_defaults_without_overrides(self, clean_metrics_env: pytest.MonkeyPatch) -> None:
        assert get_metric_constants() == MetricConstants()

    def test_dau_ratio_override(self, clean_metrics_env: pytest.MonkeyPatch) -> None:
        clean_metrics_env.setenv("METRICS_DAU_RATIO", "0.1")
        constants = get_metric_constants()
        assert constants.dau_ratio == pytest.approx(0.1)

        report = MetricsEngine(constants).compute_metrics(
            BusinessSnapshot(current_users=100, monthly_revenue=500.0)
        )
        assert report.daily_active_users == 10

    def test_every_field_has_an_override(self, clean_metrics_env: pytest.MonkeyPatch) -> None:
        for constant in fields(MetricConstants):
            clean_metrics_env.setenv(metric_env_name(constant.name), "7")
        constants = get_metric_constants()
        for constant in fields(MetricConstants):
            assert getattr(constants, constant.name) == 7, constant.name

    @pytest.mark.parametrize(
        "env_name, field_name, value",
        [
            ("METRICS_GROWTH_EXCELLENT", "growth_excellent", 20.0),
            ("METRICS_CHURN_AVERAGE", "churn_average", 15.0),
            ("METRICS_NRR_HEALTHY", "nrr_healthy", 105.0),
            ("METRICS_RETENTION_HEALTHY", "retention_healthy", 80.0),
            ("METRICS_GROWTH_SCORE_MULTIPLIER", "growth_score_multiplier", 2.5),
            ("METRICS_UPGRADE_REVENUE_SHARE", "upgrade_revenue_share", 0.2),
            ("METRICS_PREVIOUS_YEAR_USER_RATIO", "previous_year_user_ratio", 0.5),
        ],
    )
    def test_threshold_overrides(
        self,
        clean_metrics_env: pytest.MonkeyPatch,
        env_name: str,
        field_name: str,
        value: float,
    ) -> None:
        clean_metrics_env.setenv(env_name, str(value))
        assert getattr(get_metric_constants(), field_name) == pytest.approx(value)

    def test_growth_threshold_override_changes_status(
        self, clean_metrics_env: pytest.MonkeyPatch
    ) -> None:
        clean_metrics_env.setenv("METRICS_GROWTH_EXCELLENT", "20")
        report = MetricsEngine(get_metric_constants()).compute_metrics(
            BusinessSnapshot(current_users=100, monthly_revenue=500.0, growth_rate=12)
        )
        assert report.growth_status == "good"

    @pytest.mark.parametrize("raw", ["not-a-number", "", "inf", "nan"])
    def test_invalid_value_falls_back_to_default(
        self, clean_metrics_env: pytest.MonkeyPatch, raw: str
    ) -> None:
        clean_metrics_env.setenv("METRICS_WAU_RATIO", raw)
        assert get_metric_constants().wau_ratio == pytest.approx(0.65)

    def test_non_integer_projection_months_falls_back(
        self, clean_metrics_env: pytest.MonkeyPatch
    ) -> None:
        clean_metrics_env.setenv("METRICS_PROJECTION_MONTHS", "4.5")
        assert get_metric_constants().projection_months == 6

    def test_minimums_are_enforced(self, clean_metrics_env: pytest.MonkeyPatch) -> None:
        clean_metrics_env.setenv("METRICS_DAU_RATIO", "-1")
        clean_metrics_env.setenv("METRICS_NRR_TARGET", "0")
        constants = get_metric_constants()
        assert constants.dau_ratio == 0.0
        assert constants.nrr_target == 1.0

    def test_result_is_cached(self, clean_metrics_env: pytest.MonkeyPatch) -> None:
        first = get_metric_constants()
        clean_metrics_env.setenv("METRICS_DAU_RATIO", "0.9")
        assert get_metric_constants() is first


# ---------------------------------------------------------------------------
# load_env_files
# ---------------------------------------------------------------------------


class TestLoadEnvFiles:
    def test_reads_both_files(self, tmp_path: Path, scratch_env: pytest.MonkeyPatch) -> None:
        (tmp_path / ".env").write_text("GT_TEST_BASE=base\n", encoding="utf-8")
        (tmp_path / ".env.local").write_text("GT_TEST_LOCAL='local'\n", encoding="utf-8")

        loaded = load_env_files(tmp_path)

        assert loaded == [tmp_path / ".env", tmp_path / ".env.local"]
        assert os.environ["GT_TEST_BASE"] == "base"
        assert os.environ["GT_TEST_LOCAL"] == "local"

    def test_existing_variables_win(self, tmp_path: Path, scratch_env: pytest.MonkeyPatch) -> None:
        scratch_env.setenv("GT_TEST_KEEP", "from-process")
        (tmp_path / ".env").write_text("GT_TEST_KEEP=from-file\n", encoding="utf-8")

        load_env_files(tmp_path)

        assert os.environ["GT_TEST_KEEP"] == "from-process"

    def test_skips_comments_and_accepts_export_prefix(
        self, tmp_path: Path, scratch_env: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / ".env").write_text(
            "# comment\n\nnot a pair\n=orphan\nexport GT_TEST_EXPORTED=\"yes\"\n",
            encoding="utf-8",
        )

        load_env_files(tmp_path)

        assert os.environ["GT_TEST_EXPORTED"] == "yes"
        assert "" not in os.environ

    def test_missing_files_are_ignored(self, tmp_path: Path) -> None:
        assert load_env_files(tmp_path) == []
