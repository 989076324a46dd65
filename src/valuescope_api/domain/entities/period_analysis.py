# src/valuescope_api/domain/entities/period_analysis.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Period analytics domain entities.

Purpose:
    Trailing-window definitions and the summary statistics derived from a
    series over those windows: latest value, rolling averages, historical
    extremes and ranking movement.

Layer:
    domain
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class PeriodWindow:
    """Trailing window measured in calendar months.

    Attributes:
        label: Stable identifier, e.g. ``"current"``, ``"12m"``, ``"5y"``.
        months: Window length in months. ``0`` means the latest value only.
    """

    label: str
    months: int

    @property
    def is_current(self) -> bool:
        """Return True for the latest-value window."""
        return self.months == 0


@dataclass(frozen=True)
class PeriodValue:
    """Value computed for one window."""

    label: str
    months: int
    value: Decimal


@dataclass(frozen=True)
class MinMax:
    """Extremes of a whole series."""

    min: Decimal
    max: Decimal


@dataclass(frozen=True)
class RankSnapshot:
    """Ranking position among all listed securities, as stored upstream.

    Attributes:
        current: Rank as of the latest ranking date (1 = highest).
        prior: Rank as of the previous ranking date, when known.
    """

    current: int | None
    prior: int | None = None


@dataclass(frozen=True)
class RankAnalysis:
    """Ranking position with its movement.

    Attributes:
        current: Current rank.
        prior: Prior rank, if known.
        delta: ``current - prior``; ``None`` when ``prior`` is unknown. A
            negative delta means the security moved up the ranking.
    """

    current: int
    prior: int | None
    delta: int | None

    @classmethod
    def from_snapshot(cls, snapshot: RankSnapshot | None) -> RankAnalysis | None:
        """Derive the analysis from a stored snapshot.

        Returns:
            ``None`` when no snapshot or no current rank is available.
        """
        if snapshot is None or snapshot.current is None:
            return None
        delta = None if snapshot.prior is None else snapshot.current - snapshot.prior
        return cls(current=snapshot.current, prior=snapshot.prior, delta=delta)


@dataclass(frozen=True)
class PeriodAnalysis:
    """Trailing-period statistics for one series.

    Attributes:
        latest_value: Value of the last point on or before ``as_of``.
        periods: One entry per window whose slice was non-empty, in window
            order. Windows without data are omitted, never zero-filled.
        min_max: Extremes over the entire series, ignoring windows.
        rank: Ranking position and movement, when available.
        overall_average: Mean over the entire series.
        as_of: Reference date the windows were measured back from.
    """

    latest_value: Decimal | None
    periods: tuple[PeriodValue, ...]
    min_max: MinMax | None
    rank: RankAnalysis | None
    overall_average: Decimal | None = None
    as_of: date | None = None

    def period(self, label: str) -> PeriodValue | None:
        """Return the computed value for ``label``, if present."""
        for pv in self.periods:
            if pv.label == label:
                return pv
        return None


__all__ = [
    "MinMax",
    "PeriodAnalysis",
    "PeriodValue",
    "PeriodWindow",
    "RankAnalysis",
    "RankSnapshot",
]
