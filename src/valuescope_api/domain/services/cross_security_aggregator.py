# src/valuescope_api/domain/services/cross_security_aggregator.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Cross-security aggregator.

Purpose:
    Merge the normalized series of a company's share classes into one
    date-aligned :class:`AggregatedHistory` carrying a per-date total and a
    per-security breakdown.

Layer:
    domain

Notes:
    - This module is pure domain logic:
        * No logging.
        * No HTTP concerns.
        * No persistence or gateways.
    - Exact-date alignment only. A security with no value on a date
      contributes nothing to that date's total or breakdown; values are never
      forward- or backward-filled and never zero-filled.
    - Aggregation never raises for data reasons. A missing constituent
      simply does not contribute.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date
from decimal import Decimal

from valuescope_api.domain.entities.valuation_series import (
    AggregatedHistory,
    AggregatedPoint,
    SecuritySeries,
)

DECIMAL_ZERO = Decimal("0")
PERCENT = Decimal("100")


def aggregate_series(series_list: Iterable[SecuritySeries]) -> AggregatedHistory:
    """Merge sibling series into one aggregated history.

    Args:
        series_list: Normalized series, one per share class. When the same
            security id appears more than once, the later series wins.

    Returns:
        An :class:`AggregatedHistory` whose calendar is the sorted union of
        all input dates. Empty input yields an empty history.
    """
    lookups: dict[str, Mapping[date, Decimal]] = {}
    for series in series_list:
        lookups[series.security_id] = {p.date: p.value for p in series.points}

    calendar = sorted({d for lookup in lookups.values() for d in lookup})

    points: list[AggregatedPoint] = []
    for day in calendar:
        breakdown = {
            security_id: lookup[day] for security_id, lookup in lookups.items() if day in lookup
        }
        points.append(
            AggregatedPoint(
                date=day,
                total=sum(breakdown.values(), DECIMAL_ZERO),
                breakdown=breakdown,
            ),
        )

    return AggregatedHistory(security_ids=tuple(lookups), points=tuple(points))


def composition(point: AggregatedPoint) -> dict[str, Decimal]:
    """Return each security's share of the point's total, in percent.

    Args:
        point: Aggregated point to decompose.

    Returns:
        Mapping of security id to percentage of ``point.total``. Empty when
        the total is zero, since shares are undefined then.
    """
    if point.total == DECIMAL_ZERO:
        return {}
    return {
        security_id: value / point.total * PERCENT
        for security_id, value in point.breakdown.items()
    }


__all__ = ["aggregate_series", "composition"]
