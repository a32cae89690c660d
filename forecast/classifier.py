"""
forecast/classifier.py

Classifies a percent change into a display direction.
No forecasting logic, no I/O, no side effects.
"""

from __future__ import annotations

from typing import Literal

Direction = Literal["up", "down", "flat"]


class TrendClassifier:
    """
    Maps a month-over-month percent change to an arrow direction.

    Thresholds (class-level constants, easily overridden by subclasses):

        percent change      |  label
        --------------------|-------
        > UP_THRESHOLD      |  up
        < DOWN_THRESHOLD    |  down
        otherwise           |  flat
    """

    UP_THRESHOLD: float = 0.0
    DOWN_THRESHOLD: float = 0.0

    def classify(self, change_pct: float | None) -> Direction:
        """
        Classify *change_pct*.  ``None`` (no trend available) is ``"flat"``.
        """
        if change_pct is None:
            return "flat"
        if change_pct > self.UP_THRESHOLD:
            return "up"
        if change_pct < self.DOWN_THRESHOLD:
            return "down"
        return "flat"
