# src/valuescope_api/domain/entities/distribution.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Distribution views of a metric series.

Purpose:
    Calendar (month x year) heatmap cells, value-histogram bins and the
    period-over-period growth series used for dividend history.

Layer:
    domain
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class HeatmapCell:
    """Latest observation within one calendar month of one year."""

    year: int
    date: date
    value: Decimal


@dataclass(frozen=True)
class HeatmapRow:
    """All years that have data for a calendar month (1-12), ordered by year."""

    month: int
    cells: tuple[HeatmapCell, ...]

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError("month must be in 1..12")


@dataclass(frozen=True)
class HistogramBin:
    """Half-open value range ``[start, end)`` and the number of points in it.

    The final bin of a histogram also counts points equal to its ``end``.
    """

    start: Decimal
    end: Decimal
    count: int


@dataclass(frozen=True)
class GrowthPoint:
    """Percent change of a value versus the previous observation.

    ``rate`` is ``None`` when either observation is missing or not positive.
    """

    date: date
    value: Decimal
    rate: Decimal | None


__all__ = ["GrowthPoint", "HeatmapCell", "HeatmapRow", "HistogramBin"]
