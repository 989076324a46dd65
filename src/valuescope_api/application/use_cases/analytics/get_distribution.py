# src/valuescope_api/application/use_cases/analytics/get_distribution.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Use case: Distribution views for a security page.

Purpose:
    Build a calendar heatmap, a value histogram, a period-over-period growth
    series or a weekly/monthly/yearly resampled series for the entity
    analysed on a security page.

Layer:
    application

Notes:
    - Histogram width precedence: explicit request, metric default, then a
      width derived from the series range and ``default_bins``.
    - Widths producing more than ``max_bins`` bins over the series range are
      rejected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from valuescope_api.application.schemas.dto.analytics import DistributionKind
from valuescope_api.application.use_cases.analytics.get_company_aggregated_history import (
    DEFAULT_FETCH_CONCURRENCY,
    GetCompanyAggregatedHistoryUseCase,
)
from valuescope_api.application.use_cases.analytics.security_context import (
    SecurityContext,
    resolve_security_context,
)
from valuescope_api.domain.entities.distribution import GrowthPoint, HeatmapRow, HistogramBin
from valuescope_api.domain.entities.selection import SelectionState
from valuescope_api.domain.entities.valuation_series import DatedPoint, SecuritySeries
from valuescope_api.domain.enums.resample_period import ResamplePeriod
from valuescope_api.domain.enums.valuation_metric import ValuationMetric
from valuescope_api.domain.interfaces.repositories.company_repository import CompanyRepository
from valuescope_api.domain.interfaces.repositories.security_series_repository import (
    SecuritySeriesRepository,
)
from valuescope_api.domain.services.distribution_transformer import (
    DEFAULT_MAX_BINS,
    calendar_heatmap,
    derive_bin_width,
    growth_rates,
    resample,
    value_histogram,
)
from valuescope_api.domain.services.period_windows import default_bin_width
from valuescope_api.domain.services.selection_state_machine import (
    analysed_entity_id,
    resolve_initial,
)
from valuescope_api.infrastructure.observability.metrics_analytics import observe_usecase

logger = logging.getLogger(__name__)

DEFAULT_HISTOGRAM_BINS = 10


@dataclass(frozen=True)
class GetDistributionRequest:
    """Request parameters for a distribution view.

    Attributes:
        sec_code: ``EXCHANGE.TICKER`` of the page's security.
        metric: Metric to transform.
        kind: ``"heatmap"``, ``"histogram"``, ``"growth"`` or ``"resampled"``.
        focus: Whether the page URL carried the focus signal.
        bin_width: Explicit histogram bin width.
        period: Bucket size for the resampled view.
    """

    sec_code: str
    metric: ValuationMetric
    kind: DistributionKind = "heatmap"
    focus: bool = False
    bin_width: Decimal | None = None
    period: ResamplePeriod = ResamplePeriod.MONTH


@dataclass(frozen=True)
class SecurityDistribution:
    """Distribution view; only the member matching ``kind`` is set."""

    context: SecurityContext
    metric: ValuationMetric
    selection: SelectionState
    entity_id: str
    kind: DistributionKind
    heatmap: tuple[HeatmapRow, ...] | None = None
    histogram: tuple[HistogramBin, ...] | None = None
    bin_width: Decimal | None = None
    growth: tuple[GrowthPoint, ...] | None = None
    resampled: tuple[DatedPoint, ...] | None = None
    period: ResamplePeriod | None = None


class GetDistributionUseCase:
    """Transform the highlighted entity's series into a distribution view."""

    def __init__(
        self,
        companies: CompanyRepository,
        series: SecuritySeriesRepository,
        *,
        max_concurrency: int = DEFAULT_FETCH_CONCURRENCY,
        default_bins: int = DEFAULT_HISTOGRAM_BINS,
        max_bins: int = DEFAULT_MAX_BINS,
    ) -> None:
        self._companies = companies
        self._default_bins = default_bins
        self._max_bins = max_bins
        self._history = GetCompanyAggregatedHistoryUseCase(
            companies,
            series,
            max_concurrency=max_concurrency,
        )

    async def execute(self, req: GetDistributionRequest) -> SecurityDistribution:
        """Resolve focus, aggregate the company history and transform it.

        Raises:
            InvalidSecurityCodeError: If ``sec_code`` is malformed.
            SecurityNotFound: If the security is unknown.
            InvalidBinWidthError: If ``bin_width`` is not positive or would
                need more than ``max_bins`` bins.
        """
        logger.info(
            "analytics.distribution.start",
            extra={
                "extra": {
                    "sec_code": req.sec_code,
                    "metric": req.metric.value,
                    "kind": req.kind,
                    "focus": req.focus,
                },
            },
        )

        with observe_usecase("distribution") as obs:
            context = await resolve_security_context(self._companies, req.sec_code)
            selection = resolve_initial(context.share_classes, context.security_id, req.focus)
            entity_id = analysed_entity_id(selection, req.metric, context.security_id)

            aggregated = await self._history.aggregate(
                context.company_id,
                context.share_classes,
                req.metric,
            )
            series = aggregated.history.column(entity_id)
            result = self._transform(req, series, context, selection, entity_id)
            obs.points = len(series)

        logger.info(
            "analytics.distribution.success",
            extra={
                "extra": {
                    "sec_code": req.sec_code,
                    "metric": req.metric.value,
                    "kind": req.kind,
                    "entity_id": entity_id,
                    "points": len(series),
                },
            },
        )
        return result

    def _transform(
        self,
        req: GetDistributionRequest,
        series: SecuritySeries,
        context: SecurityContext,
        selection: SelectionState,
        entity_id: str,
    ) -> SecurityDistribution:
        common = {
            "context": context,
            "metric": req.metric,
            "selection": selection,
            "entity_id": entity_id,
            "kind": req.kind,
        }
        if req.kind == "histogram":
            width = req.bin_width
            if width is None:
                width = default_bin_width(req.metric) or derive_bin_width(series, self._default_bins)
            return SecurityDistribution(
                **common,
                histogram=value_histogram(series, width, max_bins=self._max_bins),
                bin_width=width,
            )
        if req.kind == "growth":
            return SecurityDistribution(**common, growth=growth_rates(series))
        if req.kind == "resampled":
            return SecurityDistribution(
                **common,
                resampled=resample(series, req.period),
                period=req.period,
            )
        return SecurityDistribution(**common, heatmap=calendar_heatmap(series))
