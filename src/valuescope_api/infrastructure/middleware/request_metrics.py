# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Request latency middleware (Prometheus).

Records server-side request latency to the
``http_server_request_duration_seconds`` histogram, labelled by method,
templated route and status. Errors in metrics code never affect the
request.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any

from prometheus_client import Histogram
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from valuescope_api.infrastructure.observability.metrics_analytics import (
    _get_or_create_histogram,
)

__all__ = ["RequestLatencyMiddleware", "get_http_server_request_duration_seconds"]

logger = logging.getLogger(__name__)

_BUCKETS = (0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)
_SERVER_HIST: Histogram | None = None


def get_http_server_request_duration_seconds() -> Histogram:
    """Return the server request-duration histogram (created once)."""
    global _SERVER_HIST
    if _SERVER_HIST is None:
        _SERVER_HIST = _get_or_create_histogram(
            "http_server_request_duration_seconds",
            "Request duration (seconds), server side.",
            labelnames=("method", "handler", "status"),
            buckets=_BUCKETS,
        )
    return _SERVER_HIST


class RequestLatencyMiddleware(BaseHTTPMiddleware):
    """Record request latency to Prometheus."""

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._hist = get_http_server_request_duration_seconds()

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration = time.perf_counter() - start
            # Prefer the templated route so path parameters don't explode cardinality.
            route_obj = request.scope.get("route")
            handler = (
                getattr(route_obj, "path_format", None)
                or getattr(route_obj, "path", None)
                or request.url.path
            )
            try:
                self._hist.labels(request.method.upper(), handler, str(status_code)).observe(
                    duration
                )
            except Exception:
                logger.debug("prom.histogram_observe_failed", exc_info=True)
