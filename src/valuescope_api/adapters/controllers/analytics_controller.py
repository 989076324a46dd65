# src/valuescope_api/adapters/controllers/analytics_controller.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Analytics Controller.

Summary:
    Thin adapter coordinating the valuation analytics use cases. It builds
    use-case requests from primitive inputs and maps domain results into
    application DTOs for presenters.

Design:
    * Protocol-based use-case interfaces to avoid tight coupling.
    * No transport concerns; HTTP behavior lives in routers/presenters.

Layer:
    adapters/controllers
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from decimal import Decimal
from typing import Protocol

from valuescope_api.adapters.controllers.base import BaseController
from valuescope_api.application.schemas.dto.analytics import (
    AggregatedHistoryDTO,
    AggregatedPointDTO,
    DistributionDTO,
    DistributionKind,
    GrowthPointDTO,
    HeatmapCellDTO,
    HeatmapRowDTO,
    HistogramBinDTO,
    PeriodAnalysisDTO,
    PeriodValueDTO,
    RankDTO,
    RankedSecurityDTO,
    RankingDTO,
    ResampledPointDTO,
    SelectionDTO,
    SelectionTransitionDTO,
    ShareClassDTO,
)
from valuescope_api.application.use_cases.analytics.get_company_aggregated_history import (
    CompanyAggregatedHistory,
    GetCompanyAggregatedHistoryRequest,
)
from valuescope_api.application.use_cases.analytics.get_distribution import (
    GetDistributionRequest,
    SecurityDistribution,
)
from valuescope_api.application.use_cases.analytics.get_period_analysis import (
    GetPeriodAnalysisRequest,
    SecurityPeriodAnalysis,
)
from valuescope_api.application.use_cases.analytics.get_rankings import (
    GetRankingContextRequest,
    GetTopRankedRequest,
    SecurityRankingContext,
)
from valuescope_api.application.use_cases.analytics.resolve_selection import (
    ResolvedSelection,
    ResolveSelectionRequest,
    SelectionOutcome,
    TransitionSelectionRequest,
)
from valuescope_api.domain.entities.ranking import RankedSecurity, RankingBoard
from valuescope_api.domain.entities.selection import SelectionState
from valuescope_api.domain.entities.share_class import ShareClass
from valuescope_api.domain.enums.resample_period import ResamplePeriod
from valuescope_api.domain.enums.valuation_metric import ValuationMetric
from valuescope_api.domain.services.cross_security_aggregator import composition
from valuescope_api.domain.services.selection_state_machine import (
    highlighted_entity_id,
    parse_focus_signal,
)


class CompanyHistoryUseCase(Protocol):
    """Protocol for the company aggregated-history use case."""

    async def execute(self, req: GetCompanyAggregatedHistoryRequest) -> CompanyAggregatedHistory:
        ...


class PeriodAnalysisUseCase(Protocol):
    """Protocol for the period analysis use case."""

    async def execute(self, req: GetPeriodAnalysisRequest) -> SecurityPeriodAnalysis:
        ...


class DistributionUseCase(Protocol):
    """Protocol for the distribution use case."""

    async def execute(self, req: GetDistributionRequest) -> SecurityDistribution:
        ...


class RankingContextUseCase(Protocol):
    """Protocol for the ranking-neighbourhood use case."""

    async def execute(self, req: GetRankingContextRequest) -> SecurityRankingContext:
        ...


class TopRankedUseCase(Protocol):
    """Protocol for the top-of-board use case."""

    async def execute(self, req: GetTopRankedRequest) -> RankingBoard:
        ...


class SelectionUseCase(Protocol):
    """Protocol for the initial-selection use case."""

    async def execute(self, req: ResolveSelectionRequest) -> ResolvedSelection:
        ...


class SelectionTransitionUseCase(Protocol):
    """Protocol for the selection-transition use case."""

    async def execute(self, req: TransitionSelectionRequest) -> SelectionOutcome:
        ...


def _share_class_dto(share_class: ShareClass) -> ShareClassDTO:
    return ShareClassDTO(
        security_id=share_class.security_id,
        type=share_class.type,
        ticker=share_class.ticker,
        exchange=share_class.exchange,
        name=share_class.name,
        type_label=share_class.type_label,
    )


def _ranked_security_dto(entry: RankedSecurity) -> RankedSecurityDTO:
    return RankedSecurityDTO(
        security_id=entry.security_id,
        rank=entry.rank,
        ticker=entry.ticker,
        exchange=entry.exchange,
        name=entry.name,
        value=entry.value,
    )


def _selection_dto(state: SelectionState) -> SelectionDTO:
    return SelectionDTO(
        mode="aggregate" if state.is_aggregate else "focused",
        focused_security_id=state.focused_id,
        highlighted_entity_id=highlighted_entity_id(state),
        source=state.source.value,
    )


class AnalyticsController(BaseController):
    """Controller orchestrating the valuation analytics flows.

    Each use case is optional so routers can be wired (and tested) one
    endpoint at a time; calling an unwired flow raises ``RuntimeError``.
    """

    __slots__ = (
        "_history",
        "_analysis",
        "_distribution",
        "_selection",
        "_transition",
        "_ranking_context",
        "_top_ranked",
    )

    def __init__(
        self,
        *,
        history: CompanyHistoryUseCase | None = None,
        analysis: PeriodAnalysisUseCase | None = None,
        distribution: DistributionUseCase | None = None,
        selection: SelectionUseCase | None = None,
        transition: SelectionTransitionUseCase | None = None,
        ranking_context: RankingContextUseCase | None = None,
        top_ranked: TopRankedUseCase | None = None,
    ) -> None:
        self._history = history
        self._analysis = analysis
        self._distribution = distribution
        self._selection = selection
        self._transition = transition
        self._ranking_context = ranking_context
        self._top_ranked = top_ranked

    async def company_history(
        self,
        *,
        company_id: str,
        metric: ValuationMetric,
    ) -> AggregatedHistoryDTO:
        """Return a company's aggregated history with its latest composition.

        Args:
            company_id: Issuing company identifier.
            metric: Metric to aggregate.

        Returns:
            AggregatedHistoryDTO: Merged points plus share-class metadata.
        """
        if self._history is None:
            raise RuntimeError("AnalyticsController.company_history is not wired.")

        result = await self._history.execute(
            GetCompanyAggregatedHistoryRequest(company_id=company_id.strip(), metric=metric),
        )
        latest = result.history.latest()
        return AggregatedHistoryDTO(
            company_id=result.company_id,
            metric=result.metric,
            share_classes=[_share_class_dto(sc) for sc in result.share_classes],
            points=[
                AggregatedPointDTO(date=p.date, total=p.total, breakdown=dict(p.breakdown))
                for p in result.history.points
            ],
            composition=composition(latest) if latest is not None else {},
            composition_date=latest.date if latest is not None else None,
            failed_security_ids=list(result.failed_security_ids),
        )

    async def period_analysis(
        self,
        *,
        sec_code: str,
        metric: ValuationMetric,
        focus: str | bool | None = None,
        as_of: date | None = None,
        windows: Sequence[str] | None = None,
    ) -> PeriodAnalysisDTO:
        """Return trailing-period statistics for a security page."""
        if self._analysis is None:
            raise RuntimeError("AnalyticsController.period_analysis is not wired.")

        result = await self._analysis.execute(
            GetPeriodAnalysisRequest(
                sec_code=sec_code,
                metric=metric,
                focus=parse_focus_signal(focus),
                as_of=as_of,
                windows=tuple(windows) if windows else None,
            ),
        )
        analysis = result.analysis
        rank = analysis.rank
        return PeriodAnalysisDTO(
            security_id=result.context.security_id,
            company_id=result.context.company_id,
            metric=result.metric,
            selection=_selection_dto(result.selection),
            entity_id=result.entity_id,
            as_of=analysis.as_of,
            latest_value=analysis.latest_value,
            periods=[
                PeriodValueDTO(label=p.label, months=p.months, value=p.value)
                for p in analysis.periods
            ],
            min=analysis.min_max.min if analysis.min_max else None,
            max=analysis.min_max.max if analysis.min_max else None,
            overall_average=analysis.overall_average,
            rank=(
                RankDTO(current=rank.current, prior=rank.prior, delta=rank.delta)
                if rank is not None
                else None
            ),
        )

    async def distribution(
        self,
        *,
        sec_code: str,
        metric: ValuationMetric,
        kind: DistributionKind = "heatmap",
        focus: str | bool | None = None,
        bin_width: Decimal | None = None,
        period: ResamplePeriod = ResamplePeriod.MONTH,
    ) -> DistributionDTO:
        """Return a heatmap, histogram, growth or resampled view for a security page."""
        if self._distribution is None:
            raise RuntimeError("AnalyticsController.distribution is not wired.")

        result = await self._distribution.execute(
            GetDistributionRequest(
                sec_code=sec_code,
                metric=metric,
                kind=kind,
                focus=parse_focus_signal(focus),
                bin_width=bin_width,
                period=period,
            ),
        )
        return DistributionDTO(
            security_id=result.context.security_id,
            metric=result.metric,
            entity_id=result.entity_id,
            kind=result.kind,
            heatmap=(
                [
                    HeatmapRowDTO(
                        month=row.month,
                        cells=[
                            HeatmapCellDTO(year=c.year, date=c.date, value=c.value)
                            for c in row.cells
                        ],
                    )
                    for row in result.heatmap
                ]
                if result.heatmap is not None
                else None
            ),
            histogram=(
                [HistogramBinDTO(start=b.start, end=b.end, count=b.count) for b in result.histogram]
                if result.histogram is not None
                else None
            ),
            bin_width=result.bin_width,
            growth=(
                [GrowthPointDTO(date=g.date, value=g.value, rate=g.rate) for g in result.growth]
                if result.growth is not None
                else None
            ),
            resampled=(
                [ResampledPointDTO(date=p.date, value=p.value) for p in result.resampled]
                if result.resampled is not None
                else None
            ),
            period=result.period,
        )

    async def selection(
        self,
        *,
        sec_code: str,
        focus: str | bool | None = None,
    ) -> SelectionDTO:
        """Return the selection state derived from a page's navigation context."""
        if self._selection is None:
            raise RuntimeError("AnalyticsController.selection is not wired.")

        result = await self._selection.execute(
            ResolveSelectionRequest(sec_code=sec_code, focus=parse_focus_signal(focus)),
        )
        return _selection_dto(result.state)

    async def select(
        self,
        *,
        sec_code: str,
        target: str,
        metric: ValuationMetric,
    ) -> SelectionTransitionDTO:
        """Apply a user selection and return the new state plus navigation."""
        if self._transition is None:
            raise RuntimeError("AnalyticsController.select is not wired.")

        result = await self._transition.execute(
            TransitionSelectionRequest(sec_code=sec_code, target=target.strip(), metric=metric),
        )
        intent = result.transition.intent
        return SelectionTransitionDTO(
            selection=_selection_dto(result.transition.state),
            path=intent.path if intent is not None else None,
            focus=intent.focus if intent is not None else False,
            target=intent.target if intent is not None else None,
        )

    async def ranking_context(
        self,
        *,
        sec_code: str,
        metric: ValuationMetric,
        radius: int,
    ) -> RankingDTO:
        """Return the ranks surrounding a security on the latest board."""
        if self._ranking_context is None:
            raise RuntimeError("AnalyticsController.ranking_context is not wired.")

        result = await self._ranking_context.execute(
            GetRankingContextRequest(sec_code=sec_code, metric=metric, radius=radius),
        )
        board = result.board
        return RankingDTO(
            metric=board.metric,
            rank_date=board.rank_date,
            security_id=result.context.security_id,
            current_rank=result.current_rank,
            entries=[_ranked_security_dto(e) for e in board.entries],
        )

    async def top_ranked(self, *, metric: ValuationMetric, limit: int) -> RankingDTO:
        """Return the top ``limit`` securities for ``metric``."""
        if self._top_ranked is None:
            raise RuntimeError("AnalyticsController.top_ranked is not wired.")

        board = await self._top_ranked.execute(GetTopRankedRequest(metric=metric, limit=limit))
        return RankingDTO(
            metric=board.metric,
            rank_date=board.rank_date,
            entries=[_ranked_security_dto(e) for e in board.entries],
        )
