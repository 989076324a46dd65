# src/valuescope_api/adapters/routers/securities_router.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Security page analytics HTTP router (v1).

Purpose:
    Expose the analytics shown on a security page:

        * GET /v1/securities/{sec_code}/metrics/{metric}/analysis
        * GET /v1/securities/{sec_code}/metrics/{metric}/distribution
        * GET /v1/securities/{sec_code}/metrics/{metric}/ranking
        * GET /v1/securities/{sec_code}/selection
        * GET /v1/securities/{sec_code}/selection/transition

    ``sec_code`` is ``EXCHANGE.TICKER`` (e.g. ``KRX.005930``). The optional
    ``focus`` query parameter carries the page's focus signal (``stock``).

Layer:
    adapters/routers
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Annotated, Literal

from fastapi import Depends, Query, Request
from fastapi.responses import JSONResponse

from valuescope_api.adapters.controllers.analytics_controller import AnalyticsController
from valuescope_api.adapters.presenters.analytics_presenter import (
    present_distribution,
    present_period_analysis,
    present_ranking,
    present_selection,
    present_selection_transition,
)
from valuescope_api.adapters.routers.base_router import (
    BaseRouter,
    domain_error_response,
    error_response,
    request_trace_id,
)
from valuescope_api.adapters.schemas.http.analytics import (
    DistributionHTTP,
    PeriodAnalysisHTTP,
    RankingHTTP,
    SelectionHTTP,
    SelectionTransitionHTTP,
)
from valuescope_api.adapters.schemas.http.envelopes import SuccessEnvelope
from valuescope_api.dependencies.analytics import get_analytics_controller
from valuescope_api.domain.enums.resample_period import ResamplePeriod
from valuescope_api.domain.enums.valuation_metric import ValuationMetric
from valuescope_api.domain.exceptions.base import DomainError
from valuescope_api.domain.services.ranking_window import DEFAULT_CONTEXT_RADIUS
from valuescope_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)

router = BaseRouter(version="v1", resource="securities", tags=["Analytics"])

Controller = Annotated[AnalyticsController, Depends(get_analytics_controller)]
FocusParam = Annotated[
    str | None,
    Query(description='Focus signal; "stock" focuses the common share class itself.'),
]


def _failure(
    exc: Exception,
    *,
    event: str,
    trace_id: str | None,
    context: dict[str, object],
) -> JSONResponse:
    """Translate a handler failure into an ErrorEnvelope response."""
    if isinstance(exc, DomainError):
        return domain_error_response(exc, trace_id=trace_id)
    logger.exception(event, extra={"extra": context})
    return error_response(
        http_status=500,
        code="INTERNAL_ERROR",
        message="Analytics endpoint failed unexpectedly.",
        trace_id=trace_id,
        details={"reason": type(exc).__name__},
    )


@router.get(
    "/{sec_code}/metrics/{metric}/analysis",
    summary="Trailing-period analysis",
    description=(
        "Current value, trailing-window averages, all-history min/max/average "
        "and ranking for the entity highlighted on the page: the company "
        "aggregate, or the focused share class. Ratio and per-share metrics "
        "have no company total, so on the aggregate view they describe the "
        "page's own security (see `entity_id`)."
    ),
    response_model=SuccessEnvelope[PeriodAnalysisHTTP],
    responses=BaseRouter.std_error_responses(),
)
async def get_period_analysis(
    request: Request,
    sec_code: str,
    metric: ValuationMetric,
    controller: Controller,
    focus: FocusParam = None,
    as_of: Annotated[
        date | None,
        Query(description="Reference date (YYYY-MM-DD); defaults to the latest data point."),
    ] = None,
    windows: Annotated[
        list[str] | None,
        Query(description="Window labels (e.g. current, 12m, 3y); defaults per metric."),
    ] = None,
) -> SuccessEnvelope[PeriodAnalysisHTTP] | JSONResponse:
    """HTTP handler for /v1/securities/{sec_code}/metrics/{metric}/analysis."""
    trace_id = request_trace_id(request)
    try:
        dto = await controller.period_analysis(
            sec_code=sec_code,
            metric=metric,
            focus=focus,
            as_of=as_of,
            windows=windows,
        )
    except Exception as exc:
        return _failure(
            exc,
            event="analytics.api.period_analysis.unhandled",
            trace_id=trace_id,
            context={"sec_code": sec_code, "metric": metric.value},
        )
    return present_period_analysis(dto)


@router.get(
    "/{sec_code}/metrics/{metric}/distribution",
    summary="Distribution view",
    description=(
        "Calendar heatmap (month x year), value histogram, period-over-period "
        "growth series, or a series resampled to weekly, monthly or yearly means. "
        "Ratio and per-share metrics always describe a single security."
    ),
    response_model=SuccessEnvelope[DistributionHTTP],
    responses=BaseRouter.std_error_responses(),
)
async def get_distribution(
    request: Request,
    sec_code: str,
    metric: ValuationMetric,
    controller: Controller,
    kind: Annotated[
        Literal["heatmap", "histogram", "growth", "resampled"],
        Query(description="Distribution view to build."),
    ] = "heatmap",
    focus: FocusParam = None,
    bin_width: Annotated[
        Decimal | None,
        Query(gt=0, description="Histogram bin width; defaults per metric."),
    ] = None,
    period: Annotated[
        ResamplePeriod,
        Query(description="Bucket size for the resampled view (1D, 1W, 1M, 1Y)."),
    ] = ResamplePeriod.MONTH,
) -> SuccessEnvelope[DistributionHTTP] | JSONResponse:
    """HTTP handler for /v1/securities/{sec_code}/metrics/{metric}/distribution."""
    trace_id = request_trace_id(request)
    try:
        dto = await controller.distribution(
            sec_code=sec_code,
            metric=metric,
            kind=kind,
            focus=focus,
            bin_width=bin_width,
            period=period,
        )
    except Exception as exc:
        return _failure(
            exc,
            event="analytics.api.distribution.unhandled",
            trace_id=trace_id,
            context={"sec_code": sec_code, "metric": metric.value, "kind": kind},
        )
    return present_distribution(dto)


@router.get(
    "/{sec_code}/metrics/{metric}/ranking",
    summary="Ranking neighbourhood",
    description=(
        "Securities ranked up to `radius` places above and below this security "
        "on the latest ranking date for the metric. An unranked security gets "
        "an empty list."
    ),
    response_model=SuccessEnvelope[RankingHTTP],
    responses=BaseRouter.std_error_responses(),
)
async def get_ranking_context(
    request: Request,
    sec_code: str,
    metric: ValuationMetric,
    controller: Controller,
    radius: Annotated[
        int,
        Query(ge=0, le=50, description="Places shown above and below the security."),
    ] = DEFAULT_CONTEXT_RADIUS,
) -> SuccessEnvelope[RankingHTTP] | JSONResponse:
    """HTTP handler for /v1/securities/{sec_code}/metrics/{metric}/ranking."""
    trace_id = request_trace_id(request)
    try:
        dto = await controller.ranking_context(sec_code=sec_code, metric=metric, radius=radius)
    except Exception as exc:
        return _failure(
            exc,
            event="analytics.api.ranking_context.unhandled",
            trace_id=trace_id,
            context={"sec_code": sec_code, "metric": metric.value},
        )
    return present_ranking(dto)


@router.get(
    "/{sec_code}/selection",
    summary="Selection state on page load",
    response_model=SuccessEnvelope[SelectionHTTP],
    responses=BaseRouter.std_error_responses(),
)
async def get_selection(
    request: Request,
    sec_code: str,
    controller: Controller,
    focus: FocusParam = None,
) -> SuccessEnvelope[SelectionHTTP] | JSONResponse:
    """HTTP handler for /v1/securities/{sec_code}/selection."""
    trace_id = request_trace_id(request)
    try:
        dto = await controller.selection(sec_code=sec_code, focus=focus)
    except Exception as exc:
        return _failure(
            exc,
            event="analytics.api.selection.unhandled",
            trace_id=trace_id,
            context={"sec_code": sec_code},
        )
    return present_selection(dto)


@router.get(
    "/{sec_code}/selection/transition",
    summary="Apply a user selection",
    description=(
        'Select a share class by security id, or the company summary with "aggregate". '
        "Returns the new selection and the page to navigate to."
    ),
    response_model=SuccessEnvelope[SelectionTransitionHTTP],
    responses=BaseRouter.std_error_responses(),
)
async def get_selection_transition(
    request: Request,
    sec_code: str,
    controller: Controller,
    target: Annotated[str, Query(min_length=1, description='Security id or "aggregate".')],
    metric: Annotated[
        ValuationMetric,
        Query(description="Metric of the current page, kept on navigation."),
    ] = ValuationMetric.MARKETCAP,
) -> SuccessEnvelope[SelectionTransitionHTTP] | JSONResponse:
    """HTTP handler for /v1/securities/{sec_code}/selection/transition."""
    trace_id = request_trace_id(request)
    try:
        dto = await controller.select(sec_code=sec_code, target=target, metric=metric)
    except Exception as exc:
        return _failure(
            exc,
            event="analytics.api.selection_transition.unhandled",
            trace_id=trace_id,
            context={"sec_code": sec_code, "target": target},
        )
    return present_selection_transition(dto)
