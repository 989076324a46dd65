# src/valuescope_api/adapters/repositories/security_series_repository.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""SQLAlchemy daily metric history repository.

Returns raw ``{"date", "value"}`` rows for one security and metric. Rows are
not validated here; the series normalizer owns that.

Notes:
    The aggregation use case calls :meth:`list_metric_rows` concurrently for
    every share class of a company; each call runs in its own session.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy import select

from valuescope_api.adapters.repositories.base_repository import BaseRepository
from valuescope_api.domain.enums.valuation_metric import ValuationMetric
from valuescope_api.infrastructure.database.models.valuation import SecurityMetricDaily


class SqlAlchemySecuritySeriesRepository(BaseRepository[SecurityMetricDaily]):
    """Daily metric history backed by ``security_metric_daily``."""

    async def list_metric_rows(
        self,
        security_id: str,
        metric: ValuationMetric,
    ) -> Sequence[Mapping[str, Any]]:
        stmt = (
            select(SecurityMetricDaily.trade_date, SecurityMetricDaily.value)
            .where(
                SecurityMetricDaily.security_id == security_id,
                SecurityMetricDaily.metric == metric.value,
            )
            .order_by(SecurityMetricDaily.trade_date.asc())
        )
        rows = await self.fetch_rows(stmt)
        return [{"date": trade_date, "value": value} for trade_date, value in rows]
