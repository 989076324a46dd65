# src/valuescope_api/domain/interfaces/repositories/ranking_repository.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Domain-facing interface for market-wide rankings."""

from __future__ import annotations

from typing import Protocol

from valuescope_api.domain.entities.period_analysis import RankSnapshot
from valuescope_api.domain.entities.ranking import RankingBoard
from valuescope_api.domain.enums.valuation_metric import ValuationMetric


class RankingRepository(Protocol):
    """Domain-level contract for ranking lookups."""

    async def get_rank_snapshot(
        self,
        security_id: str,
        metric: ValuationMetric,
    ) -> RankSnapshot | None:
        """Return the latest ranking snapshot for a security and metric.

        Returns:
            ``None`` when the security is not ranked for ``metric``.
        """
        raise NotImplementedError

    async def get_company_rank_snapshot(
        self,
        company_id: str,
        metric: ValuationMetric,
    ) -> RankSnapshot | None:
        """Return the company-level ranking snapshot for ``metric``.

        Only additive metrics (market value) are ranked per company;
        implementations return ``None`` for the rest.
        """
        raise NotImplementedError

    async def list_top_ranked(self, metric: ValuationMetric, *, limit: int) -> RankingBoard:
        """Return the first ``limit`` ranks for ``metric`` on its latest ranking date."""
        raise NotImplementedError

    async def list_ranking_context(
        self,
        security_id: str,
        metric: ValuationMetric,
        *,
        radius: int,
    ) -> RankingBoard:
        """Return the ranks ``radius`` places above and below a security.

        The board is taken on the latest ranking date for ``metric``. When
        the security is not ranked on that date the board has no entries.
        """
        raise NotImplementedError
