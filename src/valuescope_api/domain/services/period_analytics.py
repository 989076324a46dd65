# src/valuescope_api/domain/services/period_analytics.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Period analytics calculator.

Purpose:
    Derive trailing-period statistics from a series or an aggregated
    history: latest value, calendar-month rolling averages, whole-history
    extremes and average, and ranking movement.

Layer:
    domain

Notes:
    - This module is pure domain logic:
        * No logging.
        * No HTTP concerns.
        * No Prometheus metrics.
        * No persistence or gateways.
    - Window cutoffs are calendar months (``as_of - relativedelta(months=n)``),
      clamping the day-of-month for shorter months (Mar 31 - 1 month = Feb 28/29).
    - Averages are simple means over whatever points fall in the window. A
      window with no points is omitted, never reported as zero.
    - Only points dated on or before ``as_of`` are considered for windows and
      the latest value. Extremes and the overall average always cover the
      entire series.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from dateutil.relativedelta import relativedelta

from valuescope_api.domain.entities.period_analysis import (
    MinMax,
    PeriodAnalysis,
    PeriodValue,
    PeriodWindow,
    RankAnalysis,
    RankSnapshot,
)
from valuescope_api.domain.entities.valuation_series import (
    AGGREGATE_ENTITY_ID,
    AggregatedHistory,
    DatedPoint,
    SecuritySeries,
)
from valuescope_api.domain.services.period_windows import validate_windows


def _mean(values: Sequence[Decimal]) -> Decimal | None:
    if not values:
        return None
    return sum(values, Decimal(0)) / Decimal(len(values))


def window_cutoff(as_of: date, months: int) -> date:
    """Return the inclusive lower bound of a ``months``-long window ending at ``as_of``."""
    return as_of - relativedelta(months=months)


def _window_value(eligible: Sequence[DatedPoint], window: PeriodWindow, as_of: date) -> Decimal | None:
    if not eligible:
        return None
    if window.is_current:
        return eligible[-1].value
    cutoff = window_cutoff(as_of, window.months)
    return _mean([p.value for p in eligible if p.date >= cutoff])


def analyze(
    source: SecuritySeries | AggregatedHistory,
    windows: Sequence[PeriodWindow],
    *,
    as_of: date | None = None,
    rank: RankSnapshot | None = None,
    entity_id: str = AGGREGATE_ENTITY_ID,
) -> PeriodAnalysis:
    """Compute trailing-period statistics.

    Args:
        source: A single series, or an aggregated history that is first
            projected to the ``entity_id`` column.
        windows: Windows to compute, in output order.
        as_of: Reference date. Defaults to the date of the latest point.
        rank: Optional ranking snapshot passed through as a
            :class:`RankAnalysis`.
        entity_id: Column to analyse when ``source`` is a history.

    Returns:
        A :class:`PeriodAnalysis`. Windows with an empty slice are omitted;
        an empty series yields ``latest_value``/``min_max`` of ``None`` and
        no periods.

    Raises:
        InvalidPeriodWindowError: If ``windows`` contains an invalid definition.
    """
    validate_windows(windows)

    series = source.column(entity_id) if isinstance(source, AggregatedHistory) else source
    points = series.points

    if as_of is None and points:
        as_of = points[-1].date

    eligible: tuple[DatedPoint, ...] = ()
    if as_of is not None:
        eligible = tuple(p for p in points if p.date <= as_of)

    periods: list[PeriodValue] = []
    if as_of is not None:
        for window in windows:
            value = _window_value(eligible, window, as_of)
            if value is not None:
                periods.append(PeriodValue(label=window.label, months=window.months, value=value))

    values = [p.value for p in points]
    min_max = MinMax(min=min(values), max=max(values)) if values else None

    return PeriodAnalysis(
        latest_value=eligible[-1].value if eligible else None,
        periods=tuple(periods),
        min_max=min_max,
        rank=RankAnalysis.from_snapshot(rank),
        overall_average=_mean(values),
        as_of=as_of,
    )


__all__ = ["analyze", "window_cutoff"]
