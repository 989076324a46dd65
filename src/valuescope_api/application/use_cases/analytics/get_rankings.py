# src/valuescope_api/application/use_cases/analytics/get_rankings.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Use cases: Market-wide ranking boards.

Purpose:
    Serve the ranking panels of the product: the top of the board for a
    metric, and the neighbourhood of a security (the ranks just above and
    below it) on the latest ranking date.

Layer:
    application

Notes:
    - An unranked security yields an empty neighbourhood, never an error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from valuescope_api.application.use_cases.analytics.security_context import (
    SecurityContext,
    resolve_security_context,
)
from valuescope_api.domain.entities.ranking import RankingBoard
from valuescope_api.domain.enums.valuation_metric import ValuationMetric
from valuescope_api.domain.interfaces.repositories.company_repository import CompanyRepository
from valuescope_api.domain.interfaces.repositories.ranking_repository import RankingRepository
from valuescope_api.domain.services.ranking_window import (
    DEFAULT_CONTEXT_RADIUS,
    DEFAULT_TOP_LIMIT,
)
from valuescope_api.infrastructure.observability.metrics_analytics import observe_usecase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GetRankingContextRequest:
    """Neighbourhood request for the security behind ``sec_code``."""

    sec_code: str
    metric: ValuationMetric
    radius: int = DEFAULT_CONTEXT_RADIUS


@dataclass(frozen=True)
class SecurityRankingContext:
    context: SecurityContext
    board: RankingBoard

    @property
    def current_rank(self) -> int | None:
        return self.board.rank_of(self.context.security_id)


@dataclass(frozen=True)
class GetTopRankedRequest:
    metric: ValuationMetric
    limit: int = DEFAULT_TOP_LIMIT


class GetRankingContextUseCase:
    """Return the ranks surrounding a security on the latest board."""

    def __init__(self, companies: CompanyRepository, ranking: RankingRepository) -> None:
        self._companies = companies
        self._ranking = ranking

    async def execute(self, req: GetRankingContextRequest) -> SecurityRankingContext:
        """Resolve the security and read its ranking neighbourhood.

        Raises:
            InvalidSecurityCodeError: If ``sec_code`` is malformed.
            SecurityNotFound: If the security is unknown.
        """
        logger.info(
            "analytics.ranking_context.start",
            extra={
                "extra": {
                    "sec_code": req.sec_code,
                    "metric": req.metric.value,
                    "radius": req.radius,
                },
            },
        )

        with observe_usecase("ranking_context") as obs:
            context = await resolve_security_context(self._companies, req.sec_code)
            board = await self._ranking.list_ranking_context(
                context.security_id,
                req.metric,
                radius=req.radius,
            )
            obs.points = len(board.entries)

        result = SecurityRankingContext(context=context, board=board)
        logger.info(
            "analytics.ranking_context.success",
            extra={
                "extra": {
                    "sec_code": req.sec_code,
                    "metric": req.metric.value,
                    "rank_date": board.rank_date.isoformat() if board.rank_date else None,
                    "current_rank": result.current_rank,
                    "entries": len(board.entries),
                },
            },
        )
        return result


class GetTopRankedUseCase:
    """Return the top of the ranking board for a metric."""

    def __init__(self, ranking: RankingRepository) -> None:
        self._ranking = ranking

    async def execute(self, req: GetTopRankedRequest) -> RankingBoard:
        with observe_usecase("top_ranked") as obs:
            board = await self._ranking.list_top_ranked(req.metric, limit=req.limit)
            obs.points = len(board.entries)

        logger.info(
            "analytics.top_ranked.success",
            extra={
                "extra": {
                    "metric": req.metric.value,
                    "limit": req.limit,
                    "entries": len(board.entries),
                },
            },
        )
        return board
