# src/valuescope_api/adapters/routers/metrics_router.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Prometheus scrape endpoint (``/metrics``).

Histograms are warmed with a 0.0s observation so their ``_bucket``,
``_count`` and ``_sum`` series appear on the very first scrape.
"""

from __future__ import annotations

from collections.abc import Callable

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, Histogram, generate_latest

from valuescope_api.infrastructure.logging.logger import get_json_logger
from valuescope_api.infrastructure.middleware.request_metrics import (
    get_http_server_request_duration_seconds,
)
from valuescope_api.infrastructure.observability.metrics_analytics import (
    get_readyz_db_latency_seconds,
)

logger = get_json_logger(__name__)
router = APIRouter()


def _ensure_observed_once(getter: Callable[[], Histogram], name: str) -> None:
    try:
        getter().observe(0.0)
    except Exception as exc:  # pragma: no cover
        logger.debug(
            "metrics_router: failed warming histogram",
            extra={"extra": {"metric": name, "error": str(exc)}},
        )


@router.get("/metrics", include_in_schema=False)
async def metrics_scrape() -> Response:
    """Expose Prometheus metrics in text format."""
    _ensure_observed_once(get_readyz_db_latency_seconds, "valuescope_readyz_db_latency_seconds")
    get_http_server_request_duration_seconds().labels("GET", "/metrics", "200").observe(0.0)
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
