# src/valuescope_api/main.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""
Application Entry (Adapters Bootstrap)

Synopsis:
    FastAPI bootstrap that wires middleware, exception handlers and routers.
    Provides an application factory (`create_app`) and a module-level eager
    app (`app`) for tooling and ASGI servers.

Design:
    * Bootstrap only (no business logic): routers + middleware + handlers.
    * Lifespan initializes the database engine and disposes it on shutdown.
    * Root JSON logging configured at import time.
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute
from starlette.middleware.gzip import GZipMiddleware
from starlette.requests import Request
from starlette.responses import Response as StarletteResponse

from valuescope_api.adapters.routers import api_router
from valuescope_api.adapters.routers.metrics_router import router as metrics_router
from valuescope_api.config.settings import Settings, get_settings
from valuescope_api.infrastructure.database.session import (
    dispose_engine,
    init_engine_and_sessionmaker,
)
from valuescope_api.infrastructure.http.errors import (
    handle_http_exception,
    handle_unhandled_exception,
    handle_validation_error,
)
from valuescope_api.infrastructure.logging.logger import (
    configure_root_logging,
    get_json_logger,
)
from valuescope_api.infrastructure.middleware.access_log import AccessLogMiddleware
from valuescope_api.infrastructure.middleware.request_id import RequestIdMiddleware
from valuescope_api.infrastructure.middleware.request_metrics import (
    RequestLatencyMiddleware,
)
from valuescope_api.infrastructure.observability.metrics_analytics import (
    get_readyz_db_latency_seconds,
)

configure_root_logging()
logger = get_json_logger(__name__)


def _stable_operation_id(route: APIRoute) -> str:
    """Deterministic operationId, e.g. ``get__v1_securities_sec_code_selection``."""
    methods = ",".join(sorted(route.methods or []))
    path = route.path_format.replace("/", "_").replace("{", "").replace("}", "")
    return f"{methods.lower()}_{path.lower()}"


@asynccontextmanager
async def runtime_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Initialize the database engine for the app's lifetime.

    Args:
        app: FastAPI application instance.

    Yields:
        None: Control back to FastAPI to serve requests.
    """
    settings = get_settings()
    init_engine_and_sessionmaker(settings)
    app.state.settings = settings
    logger.info("service_ready", extra={"extra": {"env": settings.environment.value}})
    try:
        yield
    finally:
        await dispose_engine()
        logger.info("service_shutdown")


def _attach_middlewares(app: FastAPI) -> None:
    """Attach core middleware.

    Starlette runs the last-added middleware first, so the request id is
    assigned before access logging and latency measurement see the request.
    """
    app.add_middleware(GZipMiddleware, minimum_size=1024)
    app.add_middleware(RequestLatencyMiddleware)
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIdMiddleware)


def _attach_cors(app: FastAPI, settings: Settings) -> None:
    """Attach CORS middleware based on settings."""
    allow_origins = settings.cors_allow_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        # Credentials cannot be combined with a wildcard origin.
        allow_credentials="*" not in allow_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )


def _patch_exception_handlers(app: FastAPI) -> None:
    """Replace default exception handlers with ErrorEnvelope equivalents."""

    async def _http_error_handler(request: Request, exc: Exception) -> StarletteResponse:
        if not isinstance(exc, HTTPException):
            raise exc
        return await handle_http_exception(request, exc)

    async def _validation_error_handler(request: Request, exc: Exception) -> StarletteResponse:
        if not isinstance(exc, RequestValidationError):
            raise exc
        return await handle_validation_error(request, exc)

    async def _unhandled_error_handler(request: Request, exc: Exception) -> StarletteResponse:
        return await handle_unhandled_exception(request, exc)

    app.add_exception_handler(HTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: Fully configured application instance.
    """
    settings: Settings = get_settings()
    service_version = settings.service_version or "0.0.0"

    app = FastAPI(
        title="ValueScope API",
        version=service_version,
        description="Valuation analytics for listed Korean companies and their share classes.",
        lifespan=runtime_lifespan,
        generate_unique_id_function=_stable_operation_id,
        docs_url=settings.docs_url,
        openapi_url=settings.openapi_url,
    )

    _patch_exception_handlers(app)

    get_readyz_db_latency_seconds().observe(0.0)

    _attach_middlewares(app)
    _attach_cors(app, settings)

    app.include_router(api_router)
    app.include_router(metrics_router)

    logger.info(
        "service_startup",
        extra={
            "extra": {
                "service": settings.service_name,
                "env": settings.environment.value,
                "version": service_version,
                "status": "starting",
            }
        },
    )
    return app


# Eager app for ASGI servers and tooling.
app: FastAPI = create_app()


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run(
        "valuescope_api.main:create_app",
        factory=True,
        host="127.0.0.1",
        port=int(os.getenv("PORT", "8080")),
        reload=True,
    )
