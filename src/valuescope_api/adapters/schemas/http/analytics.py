# src/valuescope_api/adapters/schemas/http/analytics.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""HTTP Schemas: Valuation analytics.

Purpose:
    HTTP-facing projections of the analytics DTOs:
        * Company aggregated history (merged share-class series).
        * Period analysis for the focused entity.
        * Distribution views (calendar heatmap, histogram, growth, resampled).
        * Selection state and selection transitions.
        * Ranking boards (top of board, neighbourhood of a security).

Design:
    * Strict Pydantic models with extra="forbid".
    * Numeric values are decimal strings on the wire, dates are ISO dates.

Layer:
    adapters/schemas/http
"""

from __future__ import annotations

import datetime
from datetime import date
from typing import Literal

from pydantic import ConfigDict, Field

from valuescope_api.adapters.schemas.http.base import BaseHTTPSchema


class ShareClassHTTP(BaseHTTPSchema):
    """One listed share class of a company."""

    model_config = ConfigDict(title="ShareClassHTTP", extra="forbid")

    security_id: str
    type: Literal["common", "preferred", "other"]
    ticker: str
    exchange: str
    sec_code: str = Field(..., description="EXCHANGE.TICKER, e.g. KRX.005930.")
    name: str = ""
    type_label: str | None = None


class AggregatedPointHTTP(BaseHTTPSchema):
    """Aggregated point with the per-security breakdown behind its total."""

    model_config = ConfigDict(title="AggregatedPointHTTP", extra="forbid")

    date: date
    total: str = Field(..., description="Sum of the breakdown values (decimal string).")
    breakdown: dict[str, str] = Field(
        ...,
        description="Value per security id; securities without data that day are absent.",
    )


class AggregatedHistoryHTTP(BaseHTTPSchema):
    """Company-level merged history for one metric."""

    model_config = ConfigDict(title="AggregatedHistoryHTTP", extra="forbid")

    company_id: str
    metric: str
    share_classes: list[ShareClassHTTP]
    points: list[AggregatedPointHTTP]
    composition: dict[str, str] = Field(
        default_factory=dict,
        description="Percent of the latest total contributed by each security.",
    )
    composition_date: date | None = None
    failed_security_ids: list[str] = Field(default_factory=list)


class SelectionHTTP(BaseHTTPSchema):
    """Resolved analytical focus."""

    model_config = ConfigDict(title="SelectionHTTP", extra="forbid")

    mode: Literal["aggregate", "focused"]
    focused_security_id: str | None = None
    highlighted_entity_id: str = Field(
        ...,
        description='Security id, or "aggregate" for the company total.',
    )
    source: Literal["url", "click"]


class SelectionTransitionHTTP(BaseHTTPSchema):
    """New focus after a user selection plus the navigation it requires."""

    model_config = ConfigDict(title="SelectionTransitionHTTP", extra="forbid")

    selection: SelectionHTTP
    path: str | None = None
    focus: bool = False
    target: str | None = Field(
        default=None,
        description="Navigation target including the focus query, if any.",
    )


class PeriodValueHTTP(BaseHTTPSchema):
    model_config = ConfigDict(title="PeriodValueHTTP", extra="forbid")

    label: str
    months: int
    value: str


class RankHTTP(BaseHTTPSchema):
    model_config = ConfigDict(title="RankHTTP", extra="forbid")

    current: int
    prior: int | None = None
    delta: int | None = Field(
        default=None,
        description="current - prior; negative means the entity moved up.",
    )


class PeriodAnalysisHTTP(BaseHTTPSchema):
    """Trailing-period statistics for the focused entity."""

    model_config = ConfigDict(title="PeriodAnalysisHTTP", extra="forbid")

    security_id: str
    company_id: str
    metric: str
    selection: SelectionHTTP
    entity_id: str = Field(
        ...,
        description="Entity whose series was analysed: \"aggregate\" or a security id.",
    )
    as_of: date | None = None
    latest_value: str | None = None
    periods: list[PeriodValueHTTP] = Field(default_factory=list)
    min: str | None = None
    max: str | None = None
    overall_average: str | None = None
    rank: RankHTTP | None = None


class HeatmapCellHTTP(BaseHTTPSchema):
    model_config = ConfigDict(title="HeatmapCellHTTP", extra="forbid")

    year: int
    date: date
    value: str


class HeatmapRowHTTP(BaseHTTPSchema):
    model_config = ConfigDict(title="HeatmapRowHTTP", extra="forbid")

    month: int = Field(..., ge=1, le=12)
    cells: list[HeatmapCellHTTP]


class HistogramBinHTTP(BaseHTTPSchema):
    model_config = ConfigDict(title="HistogramBinHTTP", extra="forbid")

    start: str
    end: str
    count: int = Field(..., ge=1)


class GrowthPointHTTP(BaseHTTPSchema):
    model_config = ConfigDict(title="GrowthPointHTTP", extra="forbid")

    date: date
    value: str
    rate: str | None = Field(default=None, description="Percent change from the prior point.")


class ResampledPointHTTP(BaseHTTPSchema):
    model_config = ConfigDict(title="ResampledPointHTTP", extra="forbid")

    date: datetime.date = Field(..., description="Middle observation date of the bucket.")
    value: str = Field(..., description="Mean of the bucket values (decimal string).")


class DistributionHTTP(BaseHTTPSchema):
    """Distribution view; only the member matching ``kind`` is populated."""

    model_config = ConfigDict(title="DistributionHTTP", extra="forbid")

    security_id: str
    metric: str
    entity_id: str
    kind: Literal["heatmap", "histogram", "growth", "resampled"]
    heatmap: list[HeatmapRowHTTP] | None = None
    histogram: list[HistogramBinHTTP] | None = None
    bin_width: str | None = None
    growth: list[GrowthPointHTTP] | None = None
    resampled: list[ResampledPointHTTP] | None = None
    period: Literal["1D", "1W", "1M", "1Y"] | None = None


class RankedSecurityHTTP(BaseHTTPSchema):
    model_config = ConfigDict(title="RankedSecurityHTTP", extra="forbid")

    security_id: str
    rank: int = Field(..., ge=1)
    ticker: str
    exchange: str
    sec_code: str = Field(..., description="EXCHANGE.TICKER, e.g. KRX.005930.")
    name: str = ""
    value: str | None = Field(default=None, description="Metric value behind the rank.")


class RankingHTTP(BaseHTTPSchema):
    """Slice of the market-wide ranking board on its latest ranking date."""

    model_config = ConfigDict(title="RankingHTTP", extra="forbid")

    metric: str
    rank_date: date | None = None
    security_id: str | None = Field(
        default=None,
        description="Security the neighbourhood is centred on (neighbourhood view only).",
    )
    current_rank: int | None = None
    entries: list[RankedSecurityHTTP] = Field(default_factory=list)
