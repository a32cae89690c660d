"""
forecast/base.py

Abstract base class for all forward-projection implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from app.domain.snapshot import HistoricalPoint


class BaseForecastModel(ABC):
    """
    Contract for projection implementations.

    Subclasses receive the chronological history and a growth rate and
    must return a new list extending that history with synthetic entries.

    No I/O, no logging, and no side effects are permitted inside
    :meth:`project`; the caller's sequence must not be mutated.
    """

    @abstractmethod
    def project(
        self,
        series: Sequence[HistoricalPoint],
        growth_rate: float,
        months: int,
    ) -> list[HistoricalPoint]:
        """
        Extend *series* with *months* projected entries.

        Parameters
        ----------
        series:
            Historical observations, oldest first.
        growth_rate:
            Monthly growth as a percentage.
        months:
            Number of future entries to append.

        Returns
        -------
        list[HistoricalPoint]
            The original entries followed by the projected ones.
        """
