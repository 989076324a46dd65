# src/valuescope_api/domain/entities/valuation_series.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Valuation time-series domain entities.

Purpose:
    Represent canonical per-security metric series and the company-level
    aggregate built from a company's sibling share classes.

Layer:
    domain

Notes:
    - Numeric values are expressed as :class:`decimal.Decimal` in the domain.
    - Every entity is immutable; invariants are checked at construction.
    - Aggregates reference securities by id only. Display metadata lives in
      :class:`valuescope_api.domain.entities.share_class.ShareClass`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import InitVar, dataclass, field
from datetime import date
from decimal import Decimal
from types import MappingProxyType

#: Entity id meaning "the whole company" when projecting or highlighting.
AGGREGATE_ENTITY_ID = "aggregate"


@dataclass(frozen=True)
class DatedPoint:
    """Single observation of a metric on a calendar date.

    Attributes:
        date: Observation date (no time component).
        value: Observed value. Must be a finite Decimal.
    """

    date: date
    value: Decimal

    def __post_init__(self) -> None:
        """Reject non-Decimal and non-finite values.

        Raises:
            ValueError: If ``value`` is not a finite :class:`Decimal`.
        """
        if not isinstance(self.value, Decimal):
            raise ValueError(f"value must be decimal.Decimal (got {type(self.value)!r})")
        if not self.value.is_finite():
            raise ValueError("value must be finite")


@dataclass(frozen=True)
class SecuritySeries:
    """Canonical, date-ordered series for one security and one metric.

    Attributes:
        security_id: Identifier of the security the series belongs to.
        points: Points in strictly ascending date order (no duplicate dates).
        company_total: Init-only flag marking the company-total projection,
            the only series allowed to carry ``AGGREGATE_ENTITY_ID``.
    """

    security_id: str
    points: tuple[DatedPoint, ...] = ()
    company_total: InitVar[bool] = False

    def __post_init__(self, company_total: bool) -> None:
        """Enforce strict ascending date order.

        Raises:
            ValueError: If ``security_id`` is blank, is the reserved aggregate
                id outside the company-total projection, or points are
                unordered or contain duplicate dates.
        """
        if not self.security_id or not self.security_id.strip():
            raise ValueError("security_id must be a non-empty string")
        if (self.security_id == AGGREGATE_ENTITY_ID) != company_total:
            raise ValueError(
                f"security_id {AGGREGATE_ENTITY_ID!r} is reserved for the company total",
            )
        for prev, cur in zip(self.points, self.points[1:], strict=False):
            if cur.date <= prev.date:
                raise ValueError(
                    f"points must be strictly ascending by date ({prev.date} >= {cur.date})",
                )

    def __len__(self) -> int:
        return len(self.points)

    @property
    def is_empty(self) -> bool:
        """Return True when the series has no points."""
        return not self.points

    @property
    def values(self) -> tuple[Decimal, ...]:
        """Return the point values in date order."""
        return tuple(p.value for p in self.points)

    def latest(self) -> DatedPoint | None:
        """Return the most recent point, or None for an empty series."""
        return self.points[-1] if self.points else None


@dataclass(frozen=True)
class AggregatedPoint:
    """Company-level observation for one date.

    Attributes:
        date: Observation date.
        total: Sum of all per-security values reported on ``date``.
        breakdown: Per-security values keyed by security id. Securities
            without a value on ``date`` are absent, never zero-filled.
    """

    date: date
    total: Decimal
    breakdown: Mapping[str, Decimal] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Freeze the breakdown and check the sum invariant.

        Raises:
            ValueError: If ``total`` differs from the breakdown sum.
        """
        object.__setattr__(self, "breakdown", MappingProxyType(dict(self.breakdown)))
        expected = sum(self.breakdown.values(), Decimal(0))
        if self.total != expected:
            raise ValueError(
                f"total must equal the breakdown sum (total={self.total}, sum={expected})",
            )


@dataclass(frozen=True)
class AggregatedHistory:
    """Merged history of a company's share classes for one metric.

    Attributes:
        security_ids: Securities that took part in the merge, in input order.
        points: Aggregated points in strictly ascending date order.
    """

    security_ids: tuple[str, ...] = ()
    points: tuple[AggregatedPoint, ...] = ()

    def __post_init__(self) -> None:
        """Enforce strict ascending date order.

        Raises:
            ValueError: If points are unordered or repeat a date.
        """
        for prev, cur in zip(self.points, self.points[1:], strict=False):
            if cur.date <= prev.date:
                raise ValueError("aggregated points must be strictly ascending by date")

    @property
    def is_empty(self) -> bool:
        """Return True when the history has no points."""
        return not self.points

    def latest(self) -> AggregatedPoint | None:
        """Return the most recent aggregated point, if any."""
        return self.points[-1] if self.points else None

    def column(self, entity_id: str = AGGREGATE_ENTITY_ID) -> SecuritySeries:
        """Project the history to a single series.

        Args:
            entity_id: ``AGGREGATE_ENTITY_ID`` for the per-date totals, or a
                security id for that security's own values.

        Returns:
            A :class:`SecuritySeries`. For a security id, only dates where the
            security reported a value are included; an unknown id yields an
            empty series.
        """
        if entity_id == AGGREGATE_ENTITY_ID:
            totals = tuple(DatedPoint(date=p.date, value=p.total) for p in self.points)
            return SecuritySeries(security_id=entity_id, points=totals, company_total=True)
        points = tuple(
            DatedPoint(date=p.date, value=p.breakdown[entity_id])
            for p in self.points
            if entity_id in p.breakdown
        )
        return SecuritySeries(security_id=entity_id, points=points)


__all__ = [
    "AGGREGATE_ENTITY_ID",
    "AggregatedHistory",
    "AggregatedPoint",
    "DatedPoint",
    "SecuritySeries",
]
