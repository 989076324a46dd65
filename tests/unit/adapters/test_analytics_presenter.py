from __future__ import annotations

from datetime import date
from decimal import Decimal

from valuescope_api.adapters.presenters.analytics_presenter import (
    present_distribution,
    present_period_analysis,
)
from valuescope_api.application.schemas.dto.analytics import (
    DistributionDTO,
    GrowthPointDTO,
    PeriodAnalysisDTO,
    PeriodValueDTO,
    SelectionDTO,
)
from valuescope_api.domain.enums.valuation_metric import ValuationMetric

_SELECTION = SelectionDTO(
    mode="aggregate",
    focused_security_id=None,
    highlighted_entity_id="aggregate",
    source="url",
)


def test_period_analysis_values_are_decimal_strings() -> None:
    dto = PeriodAnalysisDTO(
        security_id="S1",
        company_id="C1",
        metric=ValuationMetric.PER,
        selection=_SELECTION,
        entity_id="S1",
        as_of=date(2024, 1, 2),
        latest_value=Decimal("12.50"),
        periods=[PeriodValueDTO(label="12m", months=12, value=Decimal("1E+1"))],
        min=Decimal("3"),
        max=None,
    )

    body = present_period_analysis(dto).model_dump_http()

    data = body["data"]
    assert data["metric"] == "per"
    assert data["latest_value"] == "12.50"
    assert data["periods"] == [{"label": "12m", "months": 12, "value": "10"}]
    assert data["max"] is None
    assert data["rank"] is None
    assert data["selection"]["mode"] == "aggregate"
    assert data["entity_id"] == "S1"


def test_growth_rate_none_stays_null() -> None:
    dto = DistributionDTO(
        security_id="S1",
        metric=ValuationMetric.DPS,
        entity_id="S1",
        kind="growth",
        growth=[
            GrowthPointDTO(date=date(2023, 12, 28), value=Decimal(1000), rate=None),
            GrowthPointDTO(date=date(2024, 12, 30), value=Decimal(1100), rate=Decimal("10.00")),
        ],
    )

    data = present_distribution(dto).model_dump_http()["data"]

    assert data["heatmap"] is None
    assert [g["rate"] for g in data["growth"]] == [None, "10.00"]
    assert data["growth"][0]["date"] == "2023-12-28"
