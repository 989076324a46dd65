# src/valuescope_api/domain/interfaces/repositories/security_series_repository.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Domain-facing interface for per-security metric history.

Notes:
    * Rows are returned raw (``{"date": ..., "value": ...}``) and are only
      turned into domain values by the series normalizer. Implementations
      must not filter or fill rows.
    * Implementations must be safe to call concurrently for different
      securities; use cases fan out one call per share class.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from valuescope_api.domain.enums.valuation_metric import ValuationMetric


class SecuritySeriesRepository(Protocol):
    """Domain-level contract for raw metric history reads."""

    async def list_metric_rows(
        self,
        security_id: str,
        metric: ValuationMetric,
    ) -> Sequence[Mapping[str, Any]]:
        """Return raw dated rows for one security and metric.

        Args:
            security_id: Internal security identifier.
            metric: Metric to read.

        Returns:
            Rows with at least ``date`` and ``value`` keys, in any order.
            ``value`` may be ``None`` or a string.
        """
        raise NotImplementedError
