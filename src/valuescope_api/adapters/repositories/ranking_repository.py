# src/valuescope_api/adapters/repositories/ranking_repository.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""SQLAlchemy ranking repository.

Security ranks live in ``security_rank``; the row with the latest
``rank_date`` for a (security, metric) pair is the effective snapshot.
Ranking boards use the latest ``rank_date`` recorded for the metric across
all securities. Company ranks exist only for market value and live on
``company``.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from typing import Any

from sqlalchemy import Row, Select, func, select

from valuescope_api.adapters.repositories.base_repository import BaseRepository
from valuescope_api.domain.entities.period_analysis import RankSnapshot
from valuescope_api.domain.entities.ranking import RankedSecurity, RankingBoard
from valuescope_api.domain.enums.valuation_metric import ValuationMetric
from valuescope_api.domain.services.ranking_window import neighbour_window
from valuescope_api.infrastructure.database.models.valuation import (
    Company,
    Security,
    SecurityRank,
)


def _ranked_security(row: Row[Any]) -> RankedSecurity:
    security_id, rank, value, ticker, exchange, name = row
    return RankedSecurity(
        security_id=security_id,
        rank=rank,
        ticker=ticker.strip(),
        exchange=exchange.strip().upper(),
        name=name or "",
        value=value,
    )


class SqlAlchemyRankingRepository(BaseRepository[SecurityRank]):
    """Ranking snapshots and boards backed by PostgreSQL."""

    async def get_rank_snapshot(
        self,
        security_id: str,
        metric: ValuationMetric,
    ) -> RankSnapshot | None:
        stmt = self.order_by_latest(
            select(SecurityRank).where(
                SecurityRank.security_id == security_id,
                SecurityRank.metric == metric.value,
            ),
            SecurityRank.rank_date,
            SecurityRank.security_id,
        ).limit(1)
        row = await self.fetch_optional(stmt)
        if row is None or row.rank is None:
            return None
        return RankSnapshot(current=row.rank, prior=row.prior_rank)

    async def get_company_rank_snapshot(
        self,
        company_id: str,
        metric: ValuationMetric,
    ) -> RankSnapshot | None:
        if not metric.is_additive:
            return None
        stmt = select(Company.marketcap_rank, Company.marketcap_prior_rank).where(
            Company.company_id == company_id,
        )
        rows = await self.fetch_rows(stmt)
        if not rows or rows[0][0] is None:
            return None
        current, prior = rows[0]
        return RankSnapshot(current=current, prior=prior)

    async def list_top_ranked(self, metric: ValuationMetric, *, limit: int) -> RankingBoard:
        rank_date = await self._effective_rank_date(metric)
        if rank_date is None:
            return RankingBoard(metric=metric)
        rows = await self.fetch_rows(self._board(metric, rank_date).limit(limit))
        return RankingBoard(
            metric=metric,
            rank_date=rank_date,
            entries=tuple(_ranked_security(r) for r in rows),
        )

    async def list_ranking_context(
        self,
        security_id: str,
        metric: ValuationMetric,
        *,
        radius: int,
    ) -> RankingBoard:
        rank_date = await self._effective_rank_date(metric)
        if rank_date is None:
            return RankingBoard(metric=metric)

        current = await self.fetch_rows(
            select(SecurityRank.rank).where(
                SecurityRank.security_id == security_id,
                SecurityRank.metric == metric.value,
                SecurityRank.rank_date == rank_date,
            ),
        )
        if not current or current[0][0] is None:
            return RankingBoard(metric=metric, rank_date=rank_date)

        first, last = neighbour_window(current[0][0], radius)
        rows = await self.fetch_rows(
            self._board(metric, rank_date).where(SecurityRank.rank.between(first, last)),
        )
        return RankingBoard(
            metric=metric,
            rank_date=rank_date,
            entries=tuple(_ranked_security(r) for r in rows),
        )

    async def _effective_rank_date(self, metric: ValuationMetric) -> date | None:
        rows: Sequence[Row[Any]] = await self.fetch_rows(
            select(func.max(SecurityRank.rank_date)).where(SecurityRank.metric == metric.value),
        )
        return rows[0][0] if rows else None

    @staticmethod
    def _board(metric: ValuationMetric, rank_date: date) -> Select[Any]:
        return (
            select(
                SecurityRank.security_id,
                SecurityRank.rank,
                SecurityRank.value,
                Security.ticker,
                Security.exchange,
                Security.name,
            )
            .join(Security, Security.security_id == SecurityRank.security_id)
            .where(
                SecurityRank.metric == metric.value,
                SecurityRank.rank_date == rank_date,
                SecurityRank.rank.is_not(None),
            )
            .order_by(SecurityRank.rank.asc(), SecurityRank.security_id.asc())
        )
