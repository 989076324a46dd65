# src/valuescope_api/adapters/routers/companies_router.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Company analytics HTTP router (v1).

Purpose:
    Expose the company-level aggregated metric history:

        * GET /v1/companies/{company_id}/metrics/{metric}/history

Layer:
    adapters/routers
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Path, Request
from fastapi.responses import JSONResponse

from valuescope_api.adapters.controllers.analytics_controller import AnalyticsController
from valuescope_api.adapters.presenters.analytics_presenter import present_company_history
from valuescope_api.adapters.routers.base_router import (
    BaseRouter,
    domain_error_response,
    error_response,
    request_trace_id,
)
from valuescope_api.adapters.schemas.http.analytics import AggregatedHistoryHTTP
from valuescope_api.adapters.schemas.http.envelopes import SuccessEnvelope
from valuescope_api.dependencies.analytics import get_analytics_controller
from valuescope_api.domain.enums.valuation_metric import ValuationMetric
from valuescope_api.domain.exceptions.base import DomainError
from valuescope_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)

router = BaseRouter(version="v1", resource="companies", tags=["Analytics"])


@router.get(
    "/{company_id}/metrics/{metric}/history",
    summary="Company aggregated metric history",
    description=(
        "Merge the history of every listed share class of a company into one "
        "series. Each point carries the total and the per-security breakdown; "
        "a security only contributes on dates where it has its own data. "
        "The composition of the latest point is returned alongside."
    ),
    response_model=SuccessEnvelope[AggregatedHistoryHTTP],
    responses=BaseRouter.std_error_responses(),
)
async def get_company_history(
    request: Request,
    company_id: Annotated[str, Path(min_length=1, max_length=32)],
    metric: ValuationMetric,
    controller: Annotated[AnalyticsController, Depends(get_analytics_controller)],
) -> SuccessEnvelope[AggregatedHistoryHTTP] | JSONResponse:
    """HTTP handler for /v1/companies/{company_id}/metrics/{metric}/history."""
    trace_id = request_trace_id(request)
    try:
        dto = await controller.company_history(company_id=company_id, metric=metric)
    except DomainError as exc:
        return domain_error_response(exc, trace_id=trace_id)
    except Exception as exc:
        logger.exception(
            "analytics.api.company_history.unhandled",
            extra={"extra": {"company_id": company_id, "metric": metric.value}},
        )
        return error_response(
            http_status=500,
            code="INTERNAL_ERROR",
            message="Company history endpoint failed unexpectedly.",
            trace_id=trace_id,
            details={"reason": type(exc).__name__},
        )
    return present_company_history(dto)
