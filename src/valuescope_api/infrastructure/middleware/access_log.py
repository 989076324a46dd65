# src/valuescope_api/infrastructure/middleware/access_log.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""Access Log Middleware.

Emits one structured ``access_log`` record per request. Besides the raw
path, the record carries the matched route template (for example
``/v1/securities/{sec_code}/metrics/{metric}/analysis``) so requests for
different securities group under one key. Server errors are logged at
WARNING; an exception escaping the app is recorded as status 500 and
re-raised.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from valuescope_api.infrastructure.logging.logger import get_json_logger

_logger: logging.Logger = get_json_logger(__name__)


def _route_template(request: Request) -> str | None:
    route = request.scope.get("route")
    return getattr(route, "path", None)


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Structured access logging middleware."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            record: dict[str, Any] = {
                "method": request.method,
                "path": request.url.path,
                "route": _route_template(request),
                "query": request.url.query or None,
                "status": status_code,
                "elapsed_ms": round((time.perf_counter() - started) * 1000.0, 2),
                "request_id": getattr(request.state, "request_id", None),
            }
            level = logging.WARNING if status_code >= 500 else logging.INFO
            _logger.log(level, "access_log", extra={"extra": record})
