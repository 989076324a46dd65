from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from valuescope_api.domain.entities.valuation_series import (
    AGGREGATE_ENTITY_ID,
    AggregatedPoint,
)
from valuescope_api.domain.services.cross_security_aggregator import (
    aggregate_series,
    composition,
)
from valuescope_api.domain.services.series_normalizer import normalize_series


def _common_and_preferred():
    a = normalize_series(
        "A",
        [{"date": "2023-01-01", "value": 100}, {"date": "2023-06-01", "value": 120}],
    )
    b = normalize_series("B", [{"date": "2023-06-01", "value": 30}])
    return a, b


def test_merges_share_classes_on_exact_dates() -> None:
    a, b = _common_and_preferred()

    history = aggregate_series([a, b])

    assert history.security_ids == ("A", "B")
    assert [(p.date, p.total, dict(p.breakdown)) for p in history.points] == [
        (date(2023, 1, 1), Decimal(100), {"A": Decimal(100)}),
        (date(2023, 6, 1), Decimal(150), {"A": Decimal(120), "B": Decimal(30)}),
    ]


def test_total_equals_breakdown_sum_on_every_date() -> None:
    a, b = _common_and_preferred()
    c = normalize_series("C", [{"date": "2023-03-01", "value": "7.25"}])

    history = aggregate_series([a, b, c])

    for point in history.points:
        assert point.total == sum(point.breakdown.values(), Decimal(0))


def test_missing_dates_are_absent_not_zero_filled() -> None:
    a, b = _common_and_preferred()

    history = aggregate_series([a, b])

    first = history.points[0]
    assert "B" not in first.breakdown
    assert history.column("B").values == (Decimal(30),)


def test_empty_input_yields_empty_history() -> None:
    history = aggregate_series([])
    assert history.is_empty
    assert history.latest() is None
    assert history.column().is_empty


def test_aggregation_is_idempotent() -> None:
    raw_a = [{"date": "2023-06-01", "value": "120"}, {"date": "2023-01-01", "value": "100"}]
    raw_b = [{"date": "2023-06-01", "value": "30"}]

    first = aggregate_series([normalize_series("A", raw_a), normalize_series("B", raw_b)])
    second = aggregate_series([normalize_series("A", raw_a), normalize_series("B", raw_b)])

    assert first == second


def test_column_projects_totals_or_one_security() -> None:
    a, b = _common_and_preferred()
    history = aggregate_series([a, b])

    assert history.column(AGGREGATE_ENTITY_ID).values == (Decimal(100), Decimal(150))
    assert history.column(AGGREGATE_ENTITY_ID).security_id == AGGREGATE_ENTITY_ID
    assert history.column("A").values == (Decimal(100), Decimal(120))
    assert history.column("unknown").is_empty


def test_composition_reports_percent_shares() -> None:
    point = AggregatedPoint(
        date=date(2023, 6, 1),
        total=Decimal(150),
        breakdown={"A": Decimal(120), "B": Decimal(30)},
    )

    shares = composition(point)

    assert shares == {"A": Decimal(80), "B": Decimal(20)}


def test_composition_is_empty_for_zero_total() -> None:
    point = AggregatedPoint(date=date(2023, 6, 1), total=Decimal(0), breakdown={"A": Decimal(0)})
    assert composition(point) == {}


def test_aggregated_point_rejects_inconsistent_total() -> None:
    with pytest.raises(ValueError):
        AggregatedPoint(date=date(2023, 1, 1), total=Decimal(1), breakdown={"A": Decimal(2)})
