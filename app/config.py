"""
app/config.py

Application-level configuration helpers.

Settings come from the process environment, optionally seeded from
``.env`` and ``.env.local`` at the project root.  Metric constants are
read from ``METRICS_<FIELD>`` variables (``METRICS_DAU_RATIO`` ...); a
missing, malformed or non-finite value keeps the default.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, fields
from functools import lru_cache
from pathlib import Path

_PROJECT_ROOT = Path(__file__).resolve().parents[1]
_ENV_FILENAMES = (".env", ".env.local")
_METRICS_ENV_PREFIX = "METRICS_"


def _parse_env_line(raw_line: str) -> tuple[str, str] | None:
    """Split one ``[export ]KEY=VALUE`` line; comments and blanks yield None."""
    line = raw_line.strip()
    if line.startswith("export "):
        line = line[len("export "):].lstrip()
    if not line or line.startswith("#") or "=" not in line:
        return None
    key, value = line.split("=", 1)
    key = key.strip()
    if not key:
        return None
    return key, value.strip().strip('"').strip("'")


def load_env_files(root: Path | None = None) -> list[Path]:
    """
    Load KEY=VALUE pairs from `.env` and `.env.local` under *root*.

    *root* defaults to the project root.  Variables already present in the
    process environment win over file values.  Returns the files read.
    """

    base = root or _PROJECT_ROOT
    loaded: list[Path] = []
    for filename in _ENV_FILENAMES:
        env_path = base / filename
        if not env_path.is_file():
            continue
        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            pair = _parse_env_line(raw_line)
            if pair is not None:
                os.environ.setdefault(*pair)
        loaded.append(env_path)
    return loaded


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a finite float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        value = float(raw_value)
    except ValueError:
        return default
    return value if math.isfinite(value) else default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


@dataclass(frozen=True)
class AppSettings:
    """
    Top-level application settings.
    """

    title: str = "Growth Tracker API"
    version: str = "1.0.0"
    log_level: str = "INFO"


@dataclass(frozen=True)
class MetricConstants:
    """
    Heuristic constants used by the metrics engine.

    None of these carry a business guarantee; they are the placeholder
    ratios the dashboard has always shown and can be tuned per deployment.
    """

    # Active-user estimates as a share of current users.
    dau_ratio: float = 0.25
    wau_ratio: float = 0.65

    # CAC = min(revenue_per_user * multiplier, monthly_revenue * share)
    cac_rpu_multiplier: float = 2.0
    cac_revenue_share: float = 0.4

    # Lifetime used for LTV when churn is zero.
    no_churn_lifetime_months: float = 24.0

    retention_target: float = 95.0
    ltv_cac_target: float = 3.0
    nrr_target: float = 110.0

    # Status thresholds.
    growth_excellent: float = 10.0
    growth_good: float = 5.0
    churn_excellent: float = 2.0
    churn_good: float = 5.0
    churn_average: float = 10.0
    nrr_healthy: float = 100.0
    retention_healthy: float = 90.0

    # Gauges on the progress dashboard.
    churn_health_multiplier: float = 10.0
    growth_score_multiplier: float = 5.0

    # Revenue split shown on the analytics panel.
    new_customer_revenue_share: float = 0.4
    existing_customer_revenue_share: float = 0.5
    upgrade_revenue_share: float = 0.1

    # Forward projection.
    projection_revenue_premium: float = 5.0
    projection_months: int = 6
    previous_year_user_ratio: float = 0.7


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    """
    Return cached application settings from environment variables.
    """

    return AppSettings(
        title=_get_str_env("APP_TITLE", "Growth Tracker API"),
        version=_get_str_env("APP_VERSION", "1.0.0"),
        log_level=_get_str_env("LOG_LEVEL", "INFO").upper(),
    )


# Lower bounds applied to environment overrides; fields not listed may be
# any finite value.
_CONSTANT_MINIMUMS: dict[str, float] = {
    "dau_ratio": 0.0,
    "wau_ratio": 0.0,
    "cac_rpu_multiplier": 0.0,
    "cac_revenue_share": 0.0,
    "no_churn_lifetime_months": 0.0,
    "retention_target": 1.0,
    "ltv_cac_target": 0.1,
    "nrr_target": 1.0,
    "churn_health_multiplier": 0.0,
    "growth_score_multiplier": 0.0,
    "new_customer_revenue_share": 0.0,
    "existing_customer_revenue_share": 0.0,
    "upgrade_revenue_share": 0.0,
    "projection_months": 0,
    "previous_year_user_ratio": 0.0,
}


def metric_env_name(field_name: str) -> str:
    """Environment variable that overrides ``MetricConstants.<field_name>``."""
    return f"{_METRICS_ENV_PREFIX}{field_name.upper()}"


@lru_cache(maxsize=1)
def get_metric_constants() -> MetricConstants:
    """
    Return cached metric constants, overridable through ``METRICS_*`` variables.

    Every field of :class:`MetricConstants` has a variable named after it
    (``growth_excellent`` -> ``METRICS_GROWTH_EXCELLENT``).  Integer fields
    are parsed as integers; values below a field's minimum are raised to it.
    """

    defaults = MetricConstants()
    values: dict[str, float | int] = {}
    for constant in fields(MetricConstants):
        env_name = metric_env_name(constant.name)
        default = getattr(defaults, constant.name)
        if isinstance(default, int):
            value: float | int = _get_int_env(env_name, default)
        else:
            value = _get_float_env(env_name, default)
        minimum = _CONSTANT_MINIMUMS.get(constant.name)
        if minimum is not None:
            value = max(minimum, value)
        values[constant.name] = value
    return MetricConstants(**values)
