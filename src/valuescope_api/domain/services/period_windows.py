# src/valuescope_api/domain/services/period_windows.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Domain registry for trailing period windows.

Purpose:
    Define the canonical set of :class:`PeriodWindow` values (current, 12
    months, 3/5/10/20/30 years) and the subset that applies to each
    :class:`ValuationMetric`, plus per-metric histogram bin widths.

Layer:
    domain

Notes:
    - This module is pure domain logic:
        * No logging.
        * No HTTP or transport concerns.
    - Labels are case-insensitive at lookup time but stored canonically in
      lower-case form (e.g., "12m", "5y").
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal

from valuescope_api.domain.entities.period_analysis import PeriodWindow
from valuescope_api.domain.enums.valuation_metric import ValuationMetric
from valuescope_api.domain.exceptions.analytics import InvalidPeriodWindowError

CURRENT = PeriodWindow(label="current", months=0)
TRAILING_12M = PeriodWindow(label="12m", months=12)
TRAILING_3Y = PeriodWindow(label="3y", months=36)
TRAILING_5Y = PeriodWindow(label="5y", months=60)
TRAILING_10Y = PeriodWindow(label="10y", months=120)
TRAILING_20Y = PeriodWindow(label="20y", months=240)
TRAILING_30Y = PeriodWindow(label="30y", months=360)

CANONICAL_WINDOWS: tuple[PeriodWindow, ...] = (
    CURRENT,
    TRAILING_12M,
    TRAILING_3Y,
    TRAILING_5Y,
    TRAILING_10Y,
    TRAILING_20Y,
    TRAILING_30Y,
)

_WINDOWS_BY_LABEL: dict[str, PeriodWindow] = {w.label: w for w in CANONICAL_WINDOWS}

# Market value history reaches back further than per-share fundamentals.
_DEFAULT_WINDOWS: tuple[PeriodWindow, ...] = CANONICAL_WINDOWS[:-1]
_WINDOWS_BY_METRIC: dict[ValuationMetric, tuple[PeriodWindow, ...]] = {
    ValuationMetric.MARKETCAP: CANONICAL_WINDOWS,
}

# Metrics without an entry fall back to an equal-count split of the range.
_BIN_WIDTH_BY_METRIC: dict[ValuationMetric, Decimal] = {
    ValuationMetric.DIV: Decimal("0.5"),
    ValuationMetric.PER: Decimal("1"),
    ValuationMetric.PBR: Decimal("0.1"),
}


def windows_for_metric(metric: ValuationMetric) -> tuple[PeriodWindow, ...]:
    """Return the ordered windows that apply to ``metric``."""
    return _WINDOWS_BY_METRIC.get(metric, _DEFAULT_WINDOWS)


def get_window(label: str) -> PeriodWindow | None:
    """Return the canonical window for ``label`` (case-insensitive), if any."""
    return _WINDOWS_BY_LABEL.get(label.strip().lower())


def resolve_windows(labels: Iterable[str]) -> tuple[PeriodWindow, ...]:
    """Resolve canonical labels to windows, preserving the requested order.

    Raises:
        InvalidPeriodWindowError: If a label is not a canonical window.
    """
    resolved: list[PeriodWindow] = []
    for label in labels:
        window = get_window(label)
        if window is None:
            raise InvalidPeriodWindowError(
                f"Unknown period window label: {label!r}",
                details={"label": label, "allowed": sorted(_WINDOWS_BY_LABEL)},
            )
        resolved.append(window)
    return tuple(resolved)


def validate_windows(windows: Sequence[PeriodWindow]) -> None:
    """Check window definitions before they are used.

    Raises:
        InvalidPeriodWindowError: On a blank label, negative months, or a
            duplicated label.
    """
    seen: set[str] = set()
    for window in windows:
        if not window.label or not window.label.strip():
            raise InvalidPeriodWindowError("Period window label must be non-empty.")
        if window.months < 0:
            raise InvalidPeriodWindowError(
                "Period window months must be >= 0.",
                details={"label": window.label, "months": window.months},
            )
        if window.label in seen:
            raise InvalidPeriodWindowError(
                "Period window labels must be unique.",
                details={"label": window.label},
            )
        seen.add(window.label)


def default_bin_width(metric: ValuationMetric) -> Decimal | None:
    """Return the fixed histogram bin width for ``metric``, if it has one."""
    return _BIN_WIDTH_BY_METRIC.get(metric)


__all__ = [
    "CANONICAL_WINDOWS",
    "CURRENT",
    "TRAILING_10Y",
    "TRAILING_12M",
    "TRAILING_20Y",
    "TRAILING_30Y",
    "TRAILING_3Y",
    "TRAILING_5Y",
    "default_bin_width",
    "get_window",
    "resolve_windows",
    "validate_windows",
    "windows_for_metric",
]
