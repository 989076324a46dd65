# src/valuescope_api/domain/services/series_normalizer.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Series normalizer.

Purpose:
    Convert heterogeneous raw rows (mixed date representations, nullable or
    stringly-typed numeric fields) into a canonical :class:`SecuritySeries`.

Layer:
    domain

Notes:
    - This module is pure domain logic:
        * No logging.
        * No persistence or gateways.
    - A row that cannot be parsed is dropped; it never fails the batch.
    - Duplicate dates collapse to the last observed row ("last write wins").
    - Values are resolved to :class:`decimal.Decimal`; ``float`` inputs go
      through ``str()`` so ``0.1`` stays ``Decimal("0.1")``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from dateutil import parser as date_parser

from valuescope_api.domain.entities.valuation_series import DatedPoint, SecuritySeries

_DATE_FIELDS: tuple[str, ...] = ("date", "trade_date", "base_date")


def _field(row: Any, name: str) -> Any:
    """Read ``name`` from a mapping row or an attribute-style row."""
    if isinstance(row, Mapping):
        return row.get(name)
    return getattr(row, name, None)


def coerce_date(raw: Any) -> date | None:
    """Parse a raw date representation into a calendar date.

    Accepted forms:
        * :class:`datetime.datetime` (date part is used as-is),
        * :class:`datetime.date`,
        * ISO-8601 strings, with or without a time and UTC offset
          (``"2024-01-02"``, ``"20240102"``, ``"2024-01-02T00:00:00+09:00"``).

    Args:
        raw: Raw date value.

    Returns:
        The parsed date, or ``None`` when the value is missing or unparseable.
    """
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            return date_parser.isoparse(text).date()
        except (ValueError, OverflowError):
            return None
    return None


def _to_decimal(raw: Any) -> Decimal | None:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, Decimal):
        value = raw
    elif isinstance(raw, int):
        value = Decimal(raw)
    elif isinstance(raw, float):
        value = Decimal(str(raw))
    elif isinstance(raw, str):
        text = raw.strip().replace(",", "")
        if not text:
            return None
        try:
            value = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None
    return value if value.is_finite() else None


def coerce_decimal(*candidates: Any) -> Decimal | None:
    """Return the first candidate that resolves to a finite Decimal.

    Strings may carry thousands separators (``"1,234.5"``). Booleans, NaN
    and infinities never qualify.

    Args:
        *candidates: Raw values tried in order.

    Returns:
        The first finite numeric value, or ``None``.
    """
    for candidate in candidates:
        value = _to_decimal(candidate)
        if value is not None:
            return value
    return None


def normalize_series(
    security_id: str,
    raw_rows: Iterable[Any],
    *,
    value_field: str = "value",
) -> SecuritySeries:
    """Normalize raw rows into a canonical series.

    Args:
        security_id: Identifier of the security the rows belong to.
        raw_rows: Mappings or attribute objects carrying a date field
            (``date``, ``trade_date`` or ``base_date``) and ``value_field``.
        value_field: Name of the numeric field to read.

    Returns:
        A :class:`SecuritySeries` sorted ascending by date without
        duplicate dates.
    """
    by_date: dict[date, Decimal] = {}
    for row in raw_rows:
        parsed_date: date | None = None
        for name in _DATE_FIELDS:
            parsed_date = coerce_date(_field(row, name))
            if parsed_date is not None:
                break
        if parsed_date is None:
            continue

        value = coerce_decimal(_field(row, value_field))
        if value is None:
            continue

        # Later rows overwrite earlier ones for the same date.
        by_date[parsed_date] = value

    points = tuple(DatedPoint(date=d, value=by_date[d]) for d in sorted(by_date))
    return SecuritySeries(security_id=security_id, points=points)


__all__ = ["coerce_date", "coerce_decimal", "normalize_series"]
