# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Health endpoints (Adapters Layer).

Purpose:
    Expose liveness and readiness signals for container orchestrators and
    load balancers while keeping this layer decoupled from infrastructure.

Design:
    * No direct DB imports here; the check is injected through
      ``health_check_provider`` so tests override it by identity.
    * Check latency is recorded to Prometheus in seconds.
"""

from __future__ import annotations

import asyncio
import typing as t
from enum import Enum
from typing import Annotated, Protocol

from fastapi import APIRouter, Depends, Response, status
from pydantic import Field

from valuescope_api.adapters.schemas.http.base import BaseHTTPSchema
from valuescope_api.infrastructure.logging.logger import get_json_logger
from valuescope_api.infrastructure.observability.metrics_analytics import (
    get_readyz_db_latency_seconds,
)

logger = get_json_logger(__name__)
router = APIRouter()


class HealthState(str, Enum):
    """Overall service health classification."""

    OK = "ok"
    DEGRADED = "degraded"


class CheckResult(BaseHTTPSchema):
    """Result of a single dependency check."""

    name: str = Field(..., examples=["db"])
    status: t.Literal["ok", "down"]
    detail: str | None = None
    duration_ms: float


class ReadinessResponse(BaseHTTPSchema):
    """Aggregated readiness response."""

    status: HealthState
    checks: list[CheckResult] = Field(default_factory=list)


class LivenessResponse(BaseHTTPSchema):
    """Liveness response indicating the process is running."""

    status: t.Literal["ok"] = "ok"


class HealthCheck(Protocol):
    """Minimal, non-destructive dependency check returning ``(is_ok, detail)``."""

    async def db(self) -> tuple[bool, str | None]:
        ...


class HealthCheckProvider:
    """Dependency token for the readiness route.

    The default implementation builds a :class:`DbHealthCheck` over the global
    session factory.
    """

    def __call__(self) -> HealthCheck:
        from valuescope_api.infrastructure.database.session import get_sessionmaker
        from valuescope_api.infrastructure.health.db_check import DbHealthCheck

        return DbHealthCheck(get_sessionmaker())


health_check_provider = HealthCheckProvider()


@router.get(
    "/z",
    summary="Liveness",
    operation_id="health_liveness",
    response_model=LivenessResponse,
    status_code=status.HTTP_200_OK,
)
async def liveness() -> LivenessResponse:
    """Return a fast liveness signal (no external I/O)."""
    return LivenessResponse()


@router.get(
    "/readiness",
    summary="Readiness",
    operation_id="health_readiness",
    response_model=ReadinessResponse,
    responses={503: {"description": "Service degraded", "model": ReadinessResponse}},
)
async def readiness(
    response: Response,
    health: Annotated[HealthCheck, Depends(health_check_provider, use_cache=False)],
) -> ReadinessResponse:
    """Check the database and derive readiness; 503 when any check is down."""
    loop = asyncio.get_running_loop()
    start = loop.time()
    ok, detail = await health.db()
    elapsed = loop.time() - start
    get_readyz_db_latency_seconds().observe(elapsed)

    check = CheckResult(
        name="db",
        status="ok" if ok else "down",
        detail=detail,
        duration_ms=elapsed * 1000.0,
    )
    if not ok:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    payload = ReadinessResponse(
        status=HealthState.OK if ok else HealthState.DEGRADED,
        checks=[check],
    )
    logger.info(
        "readiness_check",
        extra={"extra": {"overall": payload.status, "checks": [check.model_dump_http()]}},
    )
    if check.duration_ms > 200.0:
        logger.warning(
            "readiness_check_slow",
            extra={"extra": {"slow": [check.model_dump_http()]}},
        )
    return payload
