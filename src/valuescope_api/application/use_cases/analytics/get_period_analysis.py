# src/valuescope_api/application/use_cases/analytics/get_period_analysis.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Use case: Trailing-period analysis for a security page.

Purpose:
    Resolve the analytical focus for a security page (company aggregate or a
    single share class), build the company's aggregated history, and compute
    the current value, trailing-window averages, min/max and ranking for the
    highlighted entity.

Layer:
    application

Notes:
    - The ranking shown follows the analysed entity: the company rank for
      the aggregate, otherwise the security's own rank.
    - Non-additive metrics never analyse the company total. On the aggregate
      view they read the page's own security instead.
    - When no windows are requested the metric's canonical windows are used.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from valuescope_api.application.use_cases.analytics.get_company_aggregated_history import (
    DEFAULT_FETCH_CONCURRENCY,
    GetCompanyAggregatedHistoryUseCase,
)
from valuescope_api.application.use_cases.analytics.security_context import (
    SecurityContext,
    resolve_security_context,
)
from valuescope_api.domain.entities.period_analysis import PeriodAnalysis, RankSnapshot
from valuescope_api.domain.entities.selection import SelectionState
from valuescope_api.domain.entities.valuation_series import AGGREGATE_ENTITY_ID
from valuescope_api.domain.enums.valuation_metric import ValuationMetric
from valuescope_api.domain.interfaces.repositories.company_repository import CompanyRepository
from valuescope_api.domain.interfaces.repositories.ranking_repository import RankingRepository
from valuescope_api.domain.interfaces.repositories.security_series_repository import (
    SecuritySeriesRepository,
)
from valuescope_api.domain.services.period_analytics import analyze
from valuescope_api.domain.services.period_windows import resolve_windows, windows_for_metric
from valuescope_api.domain.services.selection_state_machine import (
    analysed_entity_id,
    resolve_initial,
)
from valuescope_api.infrastructure.observability.metrics_analytics import observe_usecase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GetPeriodAnalysisRequest:
    """Request parameters for a period analysis.

    Attributes:
        sec_code: ``EXCHANGE.TICKER`` of the page's security.
        metric: Metric to analyse.
        focus: Whether the page URL carried the focus signal.
        as_of: Optional reference date; defaults to the latest point.
        windows: Optional window labels; defaults to the metric's canonical set.
    """

    sec_code: str
    metric: ValuationMetric
    focus: bool = False
    as_of: date | None = None
    windows: Sequence[str] | None = None


@dataclass(frozen=True)
class SecurityPeriodAnalysis:
    """Period analysis along with the focus it was computed for."""

    context: SecurityContext
    metric: ValuationMetric
    selection: SelectionState
    entity_id: str
    analysis: PeriodAnalysis
    failed_security_ids: tuple[str, ...] = ()


class GetPeriodAnalysisUseCase:
    """Compute period statistics for the entity highlighted on a security page."""

    def __init__(
        self,
        companies: CompanyRepository,
        series: SecuritySeriesRepository,
        ranking: RankingRepository,
        *,
        max_concurrency: int = DEFAULT_FETCH_CONCURRENCY,
    ) -> None:
        self._companies = companies
        self._ranking = ranking
        self._history = GetCompanyAggregatedHistoryUseCase(
            companies,
            series,
            max_concurrency=max_concurrency,
        )

    async def execute(self, req: GetPeriodAnalysisRequest) -> SecurityPeriodAnalysis:
        """Resolve focus, aggregate the company history and analyse it.

        Raises:
            InvalidSecurityCodeError: If ``sec_code`` is malformed.
            SecurityNotFound: If the security is unknown.
            InvalidPeriodWindowError: If an unknown window label is requested.
        """
        logger.info(
            "analytics.period_analysis.start",
            extra={
                "extra": {
                    "sec_code": req.sec_code,
                    "metric": req.metric.value,
                    "focus": req.focus,
                    "as_of": req.as_of.isoformat() if req.as_of else None,
                },
            },
        )

        with observe_usecase("period_analysis") as obs:
            windows = resolve_windows(req.windows) if req.windows else windows_for_metric(req.metric)

            context = await resolve_security_context(self._companies, req.sec_code)
            selection = resolve_initial(context.share_classes, context.security_id, req.focus)
            entity_id = analysed_entity_id(selection, req.metric, context.security_id)

            aggregated = await self._history.aggregate(
                context.company_id,
                context.share_classes,
                req.metric,
            )
            rank = await self._rank_for(context, entity_id, req.metric)

            analysis = analyze(
                aggregated.history,
                windows,
                as_of=req.as_of,
                rank=rank,
                entity_id=entity_id,
            )
            obs.points = len(analysis.periods)

        logger.info(
            "analytics.period_analysis.success",
            extra={
                "extra": {
                    "sec_code": req.sec_code,
                    "metric": req.metric.value,
                    "entity_id": entity_id,
                    "periods": len(analysis.periods),
                },
            },
        )
        return SecurityPeriodAnalysis(
            context=context,
            metric=req.metric,
            selection=selection,
            entity_id=entity_id,
            analysis=analysis,
            failed_security_ids=aggregated.failed_security_ids,
        )

    async def _rank_for(
        self,
        context: SecurityContext,
        entity_id: str,
        metric: ValuationMetric,
    ) -> RankSnapshot | None:
        if entity_id == AGGREGATE_ENTITY_ID:
            return await self._ranking.get_company_rank_snapshot(context.company_id, metric)
        return await self._ranking.get_rank_snapshot(entity_id, metric)
