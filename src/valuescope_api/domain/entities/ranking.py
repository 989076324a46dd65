# src/valuescope_api/domain/entities/ranking.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Market-wide ranking boards.

Purpose:
    Describe a slice of the market-wide ranking for one metric as of one
    ranking date: the top of the board, or the neighbourhood of a security.

Layer:
    domain
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from valuescope_api.domain.enums.valuation_metric import ValuationMetric


@dataclass(frozen=True)
class RankedSecurity:
    """One row of a ranking board.

    Attributes:
        security_id: Ranked security.
        rank: Position on the board (1 = highest).
        ticker: Exchange ticker.
        exchange: Exchange code.
        name: Display name.
        value: Metric value the rank was computed from, when stored.
    """

    security_id: str
    rank: int
    ticker: str
    exchange: str
    name: str = ""
    value: Decimal | None = None

    def __post_init__(self) -> None:
        if self.rank < 1:
            raise ValueError(f"rank must be >= 1 (got {self.rank})")

    @property
    def sec_code(self) -> str:
        return f"{self.exchange}.{self.ticker}"


@dataclass(frozen=True)
class RankingBoard:
    """Ranked securities for one metric on the effective ranking date.

    Attributes:
        metric: Metric the board ranks.
        rank_date: Latest ranking date for ``metric``; ``None`` when the
            metric has never been ranked.
        entries: Rows in ascending rank order.
    """

    metric: ValuationMetric
    rank_date: date | None = None
    entries: tuple[RankedSecurity, ...] = ()

    def __post_init__(self) -> None:
        for prev, cur in zip(self.entries, self.entries[1:], strict=False):
            if cur.rank < prev.rank:
                raise ValueError("entries must be in ascending rank order")

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def rank_of(self, security_id: str) -> int | None:
        """Return the rank of ``security_id`` on this board, if listed."""
        return next((e.rank for e in self.entries if e.security_id == security_id), None)


__all__ = ["RankedSecurity", "RankingBoard"]
