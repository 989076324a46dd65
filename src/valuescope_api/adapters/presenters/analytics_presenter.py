# src/valuescope_api/adapters/presenters/analytics_presenter.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Valuation analytics HTTP presenter.

Purpose:
    Convert application-layer analytics DTOs into HTTP-facing schemas wrapped
    in canonical envelopes, suitable for FastAPI routers.

Layer:
    adapters/presenters

Notes:
    - Routers own the FastAPI wiring; presenters own payload shapes.
    - Envelopes: ``SuccessEnvelope[T]`` -> ``{"data": T}``.
"""

from __future__ import annotations

from decimal import Decimal

from valuescope_api.adapters.schemas.http.analytics import (
    AggregatedHistoryHTTP,
    AggregatedPointHTTP,
    DistributionHTTP,
    GrowthPointHTTP,
    HeatmapCellHTTP,
    HeatmapRowHTTP,
    HistogramBinHTTP,
    PeriodAnalysisHTTP,
    PeriodValueHTTP,
    RankHTTP,
    RankedSecurityHTTP,
    RankingHTTP,
    ResampledPointHTTP,
    SelectionHTTP,
    SelectionTransitionHTTP,
    ShareClassHTTP,
)
from valuescope_api.adapters.schemas.http.envelopes import SuccessEnvelope
from valuescope_api.application.schemas.dto.analytics import (
    AggregatedHistoryDTO,
    DistributionDTO,
    PeriodAnalysisDTO,
    RankingDTO,
    SelectionDTO,
    SelectionTransitionDTO,
    ShareClassDTO,
)


def _decimal_to_str(value: Decimal | None) -> str | None:
    """Convert a Decimal (or None) into a JSON-safe string (or None)."""
    if value is None:
        return None
    return format(value, "f")


def _required_str(value: Decimal) -> str:
    return format(value, "f")


def _map_share_class(dto: ShareClassDTO) -> ShareClassHTTP:
    return ShareClassHTTP(
        security_id=dto.security_id,
        type=dto.type.value,
        ticker=dto.ticker,
        exchange=dto.exchange,
        sec_code=f"{dto.exchange}.{dto.ticker}",
        name=dto.name,
        type_label=dto.type_label,
    )


def _map_selection(dto: SelectionDTO) -> SelectionHTTP:
    return SelectionHTTP(
        mode=dto.mode,
        focused_security_id=dto.focused_security_id,
        highlighted_entity_id=dto.highlighted_entity_id,
        source=dto.source,
    )


def present_company_history(dto: AggregatedHistoryDTO) -> SuccessEnvelope[AggregatedHistoryHTTP]:
    """Wrap a company's aggregated history in a success envelope."""
    payload = AggregatedHistoryHTTP(
        company_id=dto.company_id,
        metric=dto.metric.value,
        share_classes=[_map_share_class(sc) for sc in dto.share_classes],
        points=[
            AggregatedPointHTTP(
                date=p.date,
                total=_required_str(p.total),
                breakdown={sid: _required_str(v) for sid, v in p.breakdown.items()},
            )
            for p in dto.points
        ],
        composition={sid: _required_str(pct) for sid, pct in dto.composition.items()},
        composition_date=dto.composition_date,
        failed_security_ids=list(dto.failed_security_ids),
    )
    return SuccessEnvelope[AggregatedHistoryHTTP](data=payload)


def present_period_analysis(dto: PeriodAnalysisDTO) -> SuccessEnvelope[PeriodAnalysisHTTP]:
    """Wrap a period analysis in a success envelope."""
    payload = PeriodAnalysisHTTP(
        security_id=dto.security_id,
        company_id=dto.company_id,
        metric=dto.metric.value,
        selection=_map_selection(dto.selection),
        entity_id=dto.entity_id,
        as_of=dto.as_of,
        latest_value=_decimal_to_str(dto.latest_value),
        periods=[
            PeriodValueHTTP(label=p.label, months=p.months, value=_required_str(p.value))
            for p in dto.periods
        ],
        min=_decimal_to_str(dto.min),
        max=_decimal_to_str(dto.max),
        overall_average=_decimal_to_str(dto.overall_average),
        rank=(
            RankHTTP(current=dto.rank.current, prior=dto.rank.prior, delta=dto.rank.delta)
            if dto.rank is not None
            else None
        ),
    )
    return SuccessEnvelope[PeriodAnalysisHTTP](data=payload)


def present_distribution(dto: DistributionDTO) -> SuccessEnvelope[DistributionHTTP]:
    """Wrap a distribution view in a success envelope."""
    heatmap = None
    if dto.heatmap is not None:
        heatmap = [
            HeatmapRowHTTP(
                month=row.month,
                cells=[
                    HeatmapCellHTTP(year=c.year, date=c.date, value=_required_str(c.value))
                    for c in row.cells
                ],
            )
            for row in dto.heatmap
        ]

    histogram = None
    if dto.histogram is not None:
        histogram = [
            HistogramBinHTTP(start=_required_str(b.start), end=_required_str(b.end), count=b.count)
            for b in dto.histogram
        ]

    growth = None
    if dto.growth is not None:
        growth = [
            GrowthPointHTTP(date=g.date, value=_required_str(g.value), rate=_decimal_to_str(g.rate))
            for g in dto.growth
        ]

    resampled = None
    if dto.resampled is not None:
        resampled = [
            ResampledPointHTTP(date=p.date, value=_required_str(p.value)) for p in dto.resampled
        ]

    payload = DistributionHTTP(
        security_id=dto.security_id,
        metric=dto.metric.value,
        entity_id=dto.entity_id,
        kind=dto.kind,
        heatmap=heatmap,
        histogram=histogram,
        bin_width=_decimal_to_str(dto.bin_width),
        growth=growth,
        resampled=resampled,
        period=dto.period.value if dto.period is not None else None,
    )
    return SuccessEnvelope[DistributionHTTP](data=payload)


def present_ranking(dto: RankingDTO) -> SuccessEnvelope[RankingHTTP]:
    """Wrap a ranking board slice in a success envelope."""
    payload = RankingHTTP(
        metric=dto.metric.value,
        rank_date=dto.rank_date,
        security_id=dto.security_id,
        current_rank=dto.current_rank,
        entries=[
            RankedSecurityHTTP(
                security_id=e.security_id,
                rank=e.rank,
                ticker=e.ticker,
                exchange=e.exchange,
                sec_code=f"{e.exchange}.{e.ticker}",
                name=e.name,
                value=_decimal_to_str(e.value),
            )
            for e in dto.entries
        ],
    )
    return SuccessEnvelope[RankingHTTP](data=payload)


def present_selection(dto: SelectionDTO) -> SuccessEnvelope[SelectionHTTP]:
    """Wrap a selection state in a success envelope."""
    return SuccessEnvelope[SelectionHTTP](data=_map_selection(dto))


def present_selection_transition(
    dto: SelectionTransitionDTO,
) -> SuccessEnvelope[SelectionTransitionHTTP]:
    """Wrap a selection transition in a success envelope."""
    payload = SelectionTransitionHTTP(
        selection=_map_selection(dto.selection),
        path=dto.path,
        focus=dto.focus,
        target=dto.target,
    )
    return SuccessEnvelope[SelectionTransitionHTTP](data=payload)


__all__ = [
    "present_company_history",
    "present_distribution",
    "present_period_analysis",
    "present_ranking",
    "present_selection",
    "present_selection_transition",
]
