from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from valuescope_api.domain.entities.valuation_series import SecuritySeries
from valuescope_api.domain.enums.resample_period import ResamplePeriod
from valuescope_api.domain.exceptions.analytics import InvalidBinWidthError
from valuescope_api.domain.services.distribution_transformer import (
    calendar_heatmap,
    derive_bin_width,
    growth_rates,
    resample,
    value_histogram,
)
from valuescope_api.domain.services.series_normalizer import normalize_series


def _series(*pairs: tuple[str, str]) -> SecuritySeries:
    return normalize_series("S1", [{"date": d, "value": v} for d, v in pairs])


def test_heatmap_keeps_the_latest_point_per_month_and_year() -> None:
    series = _series(
        ("2023-01-02", "1"),
        ("2023-01-31", "2"),
        ("2024-01-15", "3"),
        ("2023-03-10", "4"),
    )

    rows = calendar_heatmap(series)

    assert [row.month for row in rows] == [1, 3]
    january = rows[0]
    assert [(c.year, c.date, c.value) for c in january.cells] == [
        (2023, date(2023, 1, 31), Decimal(2)),
        (2024, date(2024, 1, 15), Decimal(3)),
    ]


def test_histogram_uses_fixed_width_bins_and_omits_empty_ones() -> None:
    series = _series(
        ("2024-01-01", "1.0"),
        ("2024-01-02", "1.2"),
        ("2024-01-03", "2.6"),
        ("2024-01-04", "3.0"),
    )

    bins = value_histogram(series, Decimal("0.5"))

    assert [(b.start, b.end, b.count) for b in bins] == [
        (Decimal("1.0"), Decimal("1.5"), 2),
        (Decimal("2.5"), Decimal("3.0"), 2),
    ]


def test_histogram_counts_the_maximum_in_the_last_bin() -> None:
    series = _series(("2024-01-01", "0"), ("2024-01-02", "1"))

    bins = value_histogram(series, Decimal("0.5"))

    assert [(b.start, b.end, b.count) for b in bins] == [
        (Decimal("0"), Decimal("0.5"), 1),
        (Decimal("0.5"), Decimal("1.0"), 1),
    ]
    assert sum(b.count for b in bins) == len(series)


def test_histogram_of_a_constant_series_is_a_single_bin() -> None:
    series = _series(("2024-01-01", "2"), ("2024-01-02", "2"))
    bins = value_histogram(series, Decimal("0.5"))
    assert [(b.start, b.count) for b in bins] == [(Decimal(2), 2)]


@pytest.mark.parametrize("width", [Decimal(0), Decimal("-1"), Decimal("NaN")])
def test_histogram_rejects_non_positive_width(width: Decimal) -> None:
    with pytest.raises(InvalidBinWidthError):
        value_histogram(_series(("2024-01-01", "1")), width)


def test_histogram_rejects_a_width_too_narrow_for_the_range() -> None:
    series = _series(("2024-01-01", "0"), ("2024-01-02", "400000000000000"))

    with pytest.raises(InvalidBinWidthError) as excinfo:
        value_histogram(series, Decimal("0.0001"))

    assert excinfo.value.details["max_bins"] == 1000
    assert excinfo.value.details["bins"] == 4 * 10**18


def test_histogram_at_the_bin_cap_returns_only_populated_bins() -> None:
    series = _series(("2024-01-01", "0"), ("2024-01-02", "1000"))

    bins = value_histogram(series, Decimal(1), max_bins=1000)

    assert [(b.start, b.end, b.count) for b in bins] == [
        (Decimal(0), Decimal(1), 1),
        (Decimal(999), Decimal(1000), 1),
    ]
    with pytest.raises(InvalidBinWidthError):
        value_histogram(series, Decimal(1), max_bins=999)


def test_empty_series_yields_empty_outputs() -> None:
    empty = SecuritySeries(security_id="S1")
    assert calendar_heatmap(empty) == ()
    assert value_histogram(empty, Decimal(1)) == ()
    assert growth_rates(empty) == ()


def test_derive_bin_width_splits_the_range() -> None:
    series = _series(("2024-01-01", "10"), ("2024-01-02", "30"))
    assert derive_bin_width(series, 4) == Decimal(5)
    assert derive_bin_width(_series(("2024-01-01", "3")), 4) == Decimal(1)
    with pytest.raises(InvalidBinWidthError):
        derive_bin_width(series, 0)


def test_growth_rates_skip_first_and_non_positive_values() -> None:
    series = _series(
        ("2021-12-30", "1000"),
        ("2022-12-29", "1100"),
        ("2023-12-28", "0"),
        ("2024-12-30", "500"),
        ("2025-12-30", "500.01"),
    )

    rates = [g.rate for g in growth_rates(series)]

    assert rates == [None, Decimal("10.00"), None, None, Decimal(0)]


def test_monthly_resample_averages_and_dates_at_the_middle_point() -> None:
    series = _series(
        ("2024-01-02", "1"),
        ("2024-01-03", "2"),
        ("2024-01-04", "6"),
        ("2024-01-05", "7"),
        ("2024-02-01", "10"),
    )

    points = resample(series, ResamplePeriod.MONTH)

    assert [(p.date, p.value) for p in points] == [
        (date(2024, 1, 4), Decimal(4)),
        (date(2024, 2, 1), Decimal(10)),
    ]


def test_weekly_resample_follows_iso_weeks_across_the_new_year() -> None:
    # 2024-12-30 (Mon) and 2025-01-02 (Thu) share ISO week 2025-W01.
    series = _series(("2024-12-27", "1"), ("2024-12-30", "2"), ("2025-01-02", "4"))

    points = resample(series, ResamplePeriod.WEEK)

    assert [(p.date, p.value) for p in points] == [
        (date(2024, 12, 27), Decimal(1)),
        (date(2025, 1, 2), Decimal(3)),
    ]


def test_yearly_and_daily_resample() -> None:
    series = _series(("2023-03-01", "1"), ("2023-09-01", "3"), ("2024-01-02", "5"))

    assert [p.value for p in resample(series, ResamplePeriod.YEAR)] == [Decimal(2), Decimal(5)]
    assert resample(series, ResamplePeriod.DAY) == series.points
    assert resample(SecuritySeries(security_id="S1"), ResamplePeriod.MONTH) == ()
