# src/valuescope_api/application/use_cases/analytics/get_company_aggregated_history.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Use case: Company-level aggregated metric history.

Purpose:
    Fetch the raw history of every share class of a company concurrently,
    normalize each one, and merge them into a single
    :class:`~valuescope_api.domain.entities.valuation_series.AggregatedHistory`.

Layer:
    application

Notes:
    - Fetches fan out with a bounded :class:`asyncio.Semaphore` and join at a
      single barrier (``asyncio.gather``) before anything is merged, so a
      class that answers late is never under-counted.
    - A failed fetch degrades to "that security contributes no data": it is
      logged, counted in Prometheus and reported in ``failed_security_ids``,
      but never aborts the aggregation.
    - This use case is read-only.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from valuescope_api.domain.entities.share_class import ShareClass
from valuescope_api.domain.entities.valuation_series import AggregatedHistory, SecuritySeries
from valuescope_api.domain.enums.valuation_metric import ValuationMetric
from valuescope_api.domain.exceptions.analytics import CompanyNotFound
from valuescope_api.domain.interfaces.repositories.company_repository import CompanyRepository
from valuescope_api.domain.interfaces.repositories.security_series_repository import (
    SecuritySeriesRepository,
)
from valuescope_api.domain.services.cross_security_aggregator import aggregate_series
from valuescope_api.domain.services.series_normalizer import normalize_series
from valuescope_api.domain.services.share_classes import order_share_classes
from valuescope_api.infrastructure.observability.metrics_analytics import (
    inc_fetch_failure,
    observe_usecase,
)

logger = logging.getLogger(__name__)

DEFAULT_FETCH_CONCURRENCY = 8


@dataclass(frozen=True)
class GetCompanyAggregatedHistoryRequest:
    """Request parameters for a company's aggregated history.

    Attributes:
        company_id: Issuing company identifier.
        metric: Metric to aggregate across share classes.
    """

    company_id: str
    metric: ValuationMetric


@dataclass(frozen=True)
class CompanyAggregatedHistory:
    """Aggregated history together with the share classes it was built from.

    Attributes:
        company_id: Issuing company identifier.
        metric: Aggregated metric.
        share_classes: Share classes in display order (common first).
        history: Merged history.
        failed_security_ids: Securities whose fetch failed.
    """

    company_id: str
    metric: ValuationMetric
    share_classes: tuple[ShareClass, ...]
    history: AggregatedHistory
    failed_security_ids: tuple[str, ...] = ()


class GetCompanyAggregatedHistoryUseCase:
    """Build a company's aggregated history from its share classes.

    Args:
        companies: Reference-data repository for share-class membership.
        series: Raw metric history repository; called once per share class.
        max_concurrency: Upper bound on in-flight history fetches.
    """

    def __init__(
        self,
        companies: CompanyRepository,
        series: SecuritySeriesRepository,
        *,
        max_concurrency: int = DEFAULT_FETCH_CONCURRENCY,
    ) -> None:
        self._companies = companies
        self._series = series
        self._max_concurrency = max(1, max_concurrency)

    async def execute(self, req: GetCompanyAggregatedHistoryRequest) -> CompanyAggregatedHistory:
        """Load, normalize and merge the company's share-class histories.

        Raises:
            CompanyNotFound: If the company has no listed share classes.
        """
        logger.info(
            "analytics.company_history.start",
            extra={"extra": {"company_id": req.company_id, "metric": req.metric.value}},
        )

        with observe_usecase("company_history") as obs:
            share_classes = order_share_classes(
                await self._companies.list_share_classes(req.company_id),
            )
            if not share_classes:
                raise CompanyNotFound(
                    f"No share classes found for company {req.company_id!r}.",
                    details={"company_id": req.company_id},
                )

            result = await self.aggregate(req.company_id, share_classes, req.metric)
            obs.points = len(result.history.points)

        logger.info(
            "analytics.company_history.success",
            extra={
                "extra": {
                    "company_id": req.company_id,
                    "metric": req.metric.value,
                    "securities": len(share_classes),
                    "failed": list(result.failed_security_ids),
                    "points": len(result.history.points),
                },
            },
        )
        return result

    async def aggregate(
        self,
        company_id: str,
        share_classes: Sequence[ShareClass],
        metric: ValuationMetric,
    ) -> CompanyAggregatedHistory:
        """Fetch and merge histories for already-resolved share classes.

        Other analytics use cases call this directly once they have resolved
        the company's share classes themselves.
        """
        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def _fetch(security_id: str) -> Sequence[Mapping[str, Any]]:
            async with semaphore:
                return await self._series.list_metric_rows(security_id, metric)

        results = await asyncio.gather(
            *(_fetch(sc.security_id) for sc in share_classes),
            return_exceptions=True,
        )

        series_list: list[SecuritySeries] = []
        failed: list[str] = []
        for share_class, outcome in zip(share_classes, results, strict=True):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                failed.append(share_class.security_id)
                inc_fetch_failure(metric.value)
                logger.warning(
                    "analytics.company_history.fetch_failed",
                    extra={
                        "extra": {
                            "company_id": company_id,
                            "security_id": share_class.security_id,
                            "metric": metric.value,
                            "error": type(outcome).__name__,
                        },
                    },
                )
                continue
            series_list.append(normalize_series(share_class.security_id, outcome))

        return CompanyAggregatedHistory(
            company_id=company_id,
            metric=metric,
            share_classes=tuple(share_classes),
            history=aggregate_series(series_list),
            failed_security_ids=tuple(failed),
        )
