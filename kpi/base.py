"""
kpi/base.py

Abstract base class for all KPI formula implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class BaseKPIFormula(ABC):
    """
    Contract for KPI formula implementations.

    Subclasses receive a plain dictionary of raw snapshot values and must
    return a plain dictionary of derived metric values.

    No I/O and no side effects are permitted inside :meth:`calculate`, and
    it must never raise for well-typed numeric inputs: undefined ratios
    resolve to a sentinel instead.
    """

    @abstractmethod
    def calculate(self, inputs: dict[str, Any]) -> dict[str, Any]:
        """
        Compute KPI metrics from *inputs* and return a result dictionary.

        Parameters
        ----------
        inputs:
            Snapshot values required by the formula.

        Returns
        -------
        dict[str, Any]
            Computed metrics keyed by metric name.
        """
