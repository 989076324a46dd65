# src/valuescope_api/application/schemas/dto/analytics.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Application DTOs for valuation analytics.

Synopsis:
    Strict (Pydantic v2) DTOs returned by the analytics controller and
    consumed by presenters. Numeric values stay :class:`decimal.Decimal`
    here; presenters decide the wire representation.

Layer:
    application/schemas/dto
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Literal

from valuescope_api.application.schemas.dto.base import BaseDTO
from valuescope_api.domain.enums.resample_period import ResamplePeriod
from valuescope_api.domain.enums.share_class_type import ShareClassType
from valuescope_api.domain.enums.valuation_metric import ValuationMetric

DistributionKind = Literal["heatmap", "histogram", "growth", "resampled"]


class ShareClassDTO(BaseDTO):
    """One listed share class of a company."""

    security_id: str
    type: ShareClassType
    ticker: str
    exchange: str
    name: str = ""
    type_label: str | None = None


class AggregatedPointDTO(BaseDTO):
    """Aggregated point: total plus breakdown of reporting share classes."""

    date: date
    total: Decimal
    breakdown: dict[str, Decimal]


class AggregatedHistoryDTO(BaseDTO):
    """Company-level merged history for one metric.

    Attributes:
        company_id: Issuing company.
        metric: Metric the history is built from.
        share_classes: Share classes in display order (common first).
        points: Aggregated points, ascending by date.
        composition: Percent share per security on ``composition_date``.
        composition_date: Date of the latest aggregated point.
        failed_security_ids: Securities whose fetch failed and that are
            therefore absent from every point.
    """

    company_id: str
    metric: ValuationMetric
    share_classes: list[ShareClassDTO]
    points: list[AggregatedPointDTO]
    composition: dict[str, Decimal]
    composition_date: date | None = None
    failed_security_ids: list[str] = []


class SelectionDTO(BaseDTO):
    """Resolved analytical focus."""

    mode: Literal["aggregate", "focused"]
    focused_security_id: str | None = None
    highlighted_entity_id: str
    source: Literal["url", "click"]


class SelectionTransitionDTO(BaseDTO):
    """New focus after a user selection plus the navigation it requires."""

    selection: SelectionDTO
    path: str | None = None
    focus: bool = False
    target: str | None = None


class PeriodValueDTO(BaseDTO):
    """Value computed for one trailing window."""

    label: str
    months: int
    value: Decimal


class RankDTO(BaseDTO):
    """Ranking position and movement (negative delta = moved up)."""

    current: int
    prior: int | None = None
    delta: int | None = None


class PeriodAnalysisDTO(BaseDTO):
    """Trailing-period statistics for the focused entity."""

    security_id: str
    company_id: str
    metric: ValuationMetric
    selection: SelectionDTO
    entity_id: str
    as_of: date | None = None
    latest_value: Decimal | None = None
    periods: list[PeriodValueDTO]
    min: Decimal | None = None
    max: Decimal | None = None
    overall_average: Decimal | None = None
    rank: RankDTO | None = None


class HeatmapCellDTO(BaseDTO):
    year: int
    date: date
    value: Decimal


class HeatmapRowDTO(BaseDTO):
    month: int
    cells: list[HeatmapCellDTO]


class HistogramBinDTO(BaseDTO):
    start: Decimal
    end: Decimal
    count: int


class GrowthPointDTO(BaseDTO):
    date: date
    value: Decimal
    rate: Decimal | None = None


class ResampledPointDTO(BaseDTO):
    date: date
    value: Decimal


class DistributionDTO(BaseDTO):
    """Distribution view of the focused entity's series.

    Only the field matching ``kind`` is populated.
    """

    security_id: str
    metric: ValuationMetric
    entity_id: str
    kind: DistributionKind
    heatmap: list[HeatmapRowDTO] | None = None
    histogram: list[HistogramBinDTO] | None = None
    bin_width: Decimal | None = None
    growth: list[GrowthPointDTO] | None = None
    resampled: list[ResampledPointDTO] | None = None
    period: ResamplePeriod | None = None


class RankedSecurityDTO(BaseDTO):
    security_id: str
    rank: int
    ticker: str
    exchange: str
    name: str = ""
    value: Decimal | None = None


class RankingDTO(BaseDTO):
    """Slice of the market-wide ranking board for one metric.

    ``security_id`` and ``current_rank`` are set for a neighbourhood view
    and stay ``None`` for the top-of-board view.
    """

    metric: ValuationMetric
    rank_date: date | None = None
    security_id: str | None = None
    current_rank: int | None = None
    entries: list[RankedSecurityDTO]
