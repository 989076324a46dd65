# src/valuescope_api/adapters/routers/rankings_router.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Market-wide ranking HTTP router (v1).

Purpose:
    Expose the top of the ranking board for a metric:

        * GET /v1/rankings/{metric}

Layer:
    adapters/routers
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Query, Request
from fastapi.responses import JSONResponse

from valuescope_api.adapters.controllers.analytics_controller import AnalyticsController
from valuescope_api.adapters.presenters.analytics_presenter import present_ranking
from valuescope_api.adapters.routers.base_router import (
    BaseRouter,
    domain_error_response,
    error_response,
    request_trace_id,
)
from valuescope_api.adapters.schemas.http.analytics import RankingHTTP
from valuescope_api.adapters.schemas.http.envelopes import SuccessEnvelope
from valuescope_api.dependencies.analytics import get_analytics_controller
from valuescope_api.domain.enums.valuation_metric import ValuationMetric
from valuescope_api.domain.exceptions.base import DomainError
from valuescope_api.domain.services.ranking_window import DEFAULT_TOP_LIMIT
from valuescope_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)

router = BaseRouter(version="v1", resource="rankings", tags=["Analytics"])


@router.get(
    "/{metric}",
    summary="Top-ranked securities",
    description="Highest-ranked securities for a metric on its latest ranking date.",
    response_model=SuccessEnvelope[RankingHTTP],
    responses=BaseRouter.std_error_responses(),
)
async def get_top_ranked(
    request: Request,
    metric: ValuationMetric,
    controller: Annotated[AnalyticsController, Depends(get_analytics_controller)],
    limit: Annotated[
        int,
        Query(ge=1, le=100, description="Number of ranks to return."),
    ] = DEFAULT_TOP_LIMIT,
) -> SuccessEnvelope[RankingHTTP] | JSONResponse:
    """HTTP handler for /v1/rankings/{metric}."""
    trace_id = request_trace_id(request)
    try:
        dto = await controller.top_ranked(metric=metric, limit=limit)
    except DomainError as exc:
        return domain_error_response(exc, trace_id=trace_id)
    except Exception as exc:
        logger.exception(
            "analytics.api.top_ranked.unhandled",
            extra={"extra": {"metric": metric.value, "limit": limit}},
        )
        return error_response(
            http_status=500,
            code="INTERNAL_ERROR",
            message="Ranking endpoint failed unexpectedly.",
            trace_id=trace_id,
            details={"reason": type(exc).__name__},
        )
    return present_ranking(dto)
