# src/valuescope_api/domain/services/distribution_transformer.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Distribution and heatmap transforms.

Purpose:
    Reshape a flat series into a calendar heatmap (month x year), a value
    histogram, a period-over-period growth series, or a resampled series
    averaged over weeks, months or years.

Layer:
    domain

Notes:
    - This module is pure domain logic:
        * No logging.
        * No persistence or gateways.
    - Every transform tolerates empty input and returns empty output.
    - Heatmap cells hold the latest point of a month, not an average.
"""

from __future__ import annotations

from collections import Counter
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from math import ceil

from valuescope_api.domain.entities.distribution import (
    GrowthPoint,
    HeatmapCell,
    HeatmapRow,
    HistogramBin,
)
from valuescope_api.domain.entities.valuation_series import DatedPoint, SecuritySeries
from valuescope_api.domain.enums.resample_period import ResamplePeriod
from valuescope_api.domain.exceptions.analytics import InvalidBinWidthError

DECIMAL_ZERO = Decimal("0")
PERCENT = Decimal("100")
RATE_QUANTUM = Decimal("0.01")
DEFAULT_MAX_BINS = 1000


def calendar_heatmap(series: SecuritySeries) -> tuple[HeatmapRow, ...]:
    """Group a series into month rows with one cell per populated year.

    Args:
        series: Source series.

    Returns:
        Rows for months 1-12 in ascending order, each with cells ordered by
        year. Months with no data in any year are omitted.
    """
    latest: dict[tuple[int, int], tuple[date, Decimal]] = {}
    for point in series.points:
        # Points are date-ascending, so the last write per cell is the latest.
        latest[(point.date.month, point.date.year)] = (point.date, point.value)

    rows: list[HeatmapRow] = []
    for month in range(1, 13):
        cells = tuple(
            HeatmapCell(year=year, date=day, value=value)
            for (m, year), (day, value) in sorted(latest.items())
            if m == month
        )
        if cells:
            rows.append(HeatmapRow(month=month, cells=cells))
    return tuple(rows)


def derive_bin_width(series: SecuritySeries, bins: int) -> Decimal:
    """Return a positive bin width that splits the series range into ``bins`` bins.

    A series with a single distinct value (or no values) gets a width of 1,
    which puts everything into one bin.

    Raises:
        InvalidBinWidthError: If ``bins`` is not positive.
    """
    if bins < 1:
        raise InvalidBinWidthError("Histogram bin count must be >= 1.", details={"bins": bins})
    values = series.values
    if not values:
        return Decimal(1)
    spread = max(values) - min(values)
    if spread == DECIMAL_ZERO:
        return Decimal(1)
    return spread / Decimal(bins)


def value_histogram(
    series: SecuritySeries,
    bin_width: Decimal,
    *,
    max_bins: int = DEFAULT_MAX_BINS,
) -> tuple[HistogramBin, ...]:
    """Count series values into fixed-width, half-open bins.

    The bin count is ``ceil((max - min) / bin_width)`` with a minimum of one.
    Bins are ``[start, end)``; the series maximum is counted in the last bin
    so it is never lost at the upper edge. Only populated bins are tracked,
    so memory follows the number of points rather than the bin count.

    Args:
        series: Source series.
        bin_width: Positive bin width in the metric's unit.
        max_bins: Largest bin count a width may produce over the series range.

    Returns:
        Non-empty bins in ascending order. Zero-count bins are omitted.

    Raises:
        InvalidBinWidthError: If ``bin_width`` is not positive, or is so
            narrow that the range would need more than ``max_bins`` bins.
    """
    if not bin_width.is_finite() or bin_width <= DECIMAL_ZERO:
        raise InvalidBinWidthError(
            "Histogram bin width must be > 0.",
            details={"bin_width": str(bin_width)},
        )

    values = series.values
    if not values:
        return ()

    low, high = min(values), max(values)
    bin_count = max(1, ceil((high - low) / bin_width))
    if bin_count > max_bins:
        raise InvalidBinWidthError(
            "Histogram bin width is too narrow for the series range.",
            details={
                "bin_width": str(bin_width),
                "bins": bin_count,
                "max_bins": max_bins,
                "range": format(high - low, "f"),
            },
        )

    counts: Counter[int] = Counter()
    for value in values:
        index = int((value - low) // bin_width)
        counts[min(index, bin_count - 1)] += 1

    return tuple(
        HistogramBin(
            start=low + bin_width * i,
            end=low + bin_width * (i + 1),
            count=counts[i],
        )
        for i in sorted(counts)
    )


def growth_rates(series: SecuritySeries) -> tuple[GrowthPoint, ...]:
    """Return percent change of each point versus the previous one.

    Rules:
        - The first point has no predecessor and gets ``rate=None``.
        - When either value is zero or negative the rate is ``None``.
        - Changes smaller than 0.01 percent in magnitude are reported as 0.
        - Rates are rounded half-up to two decimal places.
    """
    result: list[GrowthPoint] = []
    previous: Decimal | None = None
    for point in series.points:
        rate: Decimal | None = None
        if previous is not None and previous > DECIMAL_ZERO and point.value > DECIMAL_ZERO:
            raw = (point.value - previous) / previous * PERCENT
            rate = (
                DECIMAL_ZERO
                if abs(raw) < RATE_QUANTUM
                else raw.quantize(RATE_QUANTUM, rounding=ROUND_HALF_UP)
            )
        result.append(GrowthPoint(date=point.date, value=point.value, rate=rate))
        previous = point.value
    return tuple(result)


def _bucket(day: date, period: ResamplePeriod) -> tuple[int, ...]:
    match period:
        case ResamplePeriod.WEEK:
            iso = day.isocalendar()
            return (iso.year, iso.week)
        case ResamplePeriod.MONTH:
            return (day.year, day.month)
        case ResamplePeriod.YEAR:
            return (day.year,)
        case _:
            return (day.year, day.month, day.day)


def resample(series: SecuritySeries, period: ResamplePeriod) -> tuple[DatedPoint, ...]:
    """Resample a series into daily, weekly, monthly or yearly buckets.

    Each bucket becomes one point whose value is the mean of the bucket's
    values, dated at the bucket's middle observation (index ``n // 2`` of
    its ascending dates). Daily resampling returns the points unchanged.

    Returns:
        Points in ascending date order.
    """
    if period is ResamplePeriod.DAY:
        return series.points

    buckets: dict[tuple[int, ...], list[DatedPoint]] = {}
    for point in series.points:
        buckets.setdefault(_bucket(point.date, period), []).append(point)

    resampled = [
        DatedPoint(
            date=points[len(points) // 2].date,
            value=sum((p.value for p in points), DECIMAL_ZERO) / Decimal(len(points)),
        )
        for points in buckets.values()
    ]
    return tuple(sorted(resampled, key=lambda p: p.date))


__all__ = [
    "calendar_heatmap",
    "derive_bin_width",
    "growth_rates",
    "resample",
    "value_histogram",
]
