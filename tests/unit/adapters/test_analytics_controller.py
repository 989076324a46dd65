from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from valuescope_api.adapters.controllers.analytics_controller import AnalyticsController
from valuescope_api.domain.enums.share_class_type import ShareClassType
from valuescope_api.domain.enums.valuation_metric import ValuationMetric

pytestmark = pytest.mark.anyio


async def test_company_history_maps_points_and_latest_composition(controller) -> None:
    dto = await controller.company_history(company_id=" C00593 ", metric=ValuationMetric.MARKETCAP)

    assert dto.company_id == "C00593"
    assert [sc.type for sc in dto.share_classes] == [ShareClassType.COMMON, ShareClassType.PREFERRED]
    assert dto.points[-1].breakdown == {"S005930": Decimal(120), "S005935": Decimal(30)}
    assert dto.composition_date == date(2023, 6, 1)
    assert dto.composition == {"S005930": Decimal(80), "S005935": Decimal(20)}


async def test_period_analysis_parses_the_focus_signal(controller) -> None:
    dto = await controller.period_analysis(
        sec_code="KRX.005930",
        metric=ValuationMetric.MARKETCAP,
        focus="stock",
    )

    assert dto.selection.mode == "focused"
    assert dto.selection.highlighted_entity_id == "S005930"
    assert dto.latest_value == Decimal(120)
    assert dto.min == Decimal(100)
    assert dto.rank is not None and dto.rank.delta == 0


async def test_distribution_sets_only_the_requested_view(controller) -> None:
    dto = await controller.distribution(
        sec_code="KRX.005930",
        metric=ValuationMetric.DIV,
        kind="growth",
    )

    assert dto.heatmap is None and dto.histogram is None
    assert dto.resampled is None and dto.period is None
    assert dto.entity_id == "S005930"
    assert [g.rate for g in dto.growth] == [None, Decimal("25.00"), Decimal(0)]


async def test_ranking_context_maps_the_board(controller) -> None:
    dto = await controller.ranking_context(
        sec_code="KRX.005930",
        metric=ValuationMetric.MARKETCAP,
        radius=1,
    )

    assert (dto.security_id, dto.current_rank) == ("S005930", 1)
    assert [(e.rank, e.value) for e in dto.entries] == [(1, Decimal(120)), (2, Decimal(998))]


async def test_select_returns_navigation(controller) -> None:
    dto = await controller.select(
        sec_code="KRX.005935",
        target=" S005930 ",
        metric=ValuationMetric.PBR,
    )

    assert dto.selection.mode == "focused"
    assert dto.selection.source == "click"
    assert dto.path == "/security/KRX.005930/pbr"
    assert dto.focus is True
    assert dto.target == "/security/KRX.005930/pbr?focus=stock"


async def test_unwired_flow_raises_runtime_error() -> None:
    with pytest.raises(RuntimeError):
        await AnalyticsController().selection(sec_code="KRX.005930")
    with pytest.raises(RuntimeError):
        await AnalyticsController().top_ranked(metric=ValuationMetric.PER, limit=3)
