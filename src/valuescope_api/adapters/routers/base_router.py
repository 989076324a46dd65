# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""
Base Router (Adapters Layer)

Purpose:
    Provide a canonical APIRouter wrapper and shared utilities for HTTP endpoints:
      - Versioned routing with stable prefixes (e.g., "/v1/securities").
      - Standard error response mapping using ErrorEnvelope.
      - Translation of domain errors into ErrorEnvelope responses.

Layer:
    adapters/routers
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from valuescope_api.adapters.schemas.http.envelopes import ErrorEnvelope, ErrorObject
from valuescope_api.domain.exceptions.analytics import (
    CompanyNotFound,
    InvalidBinWidthError,
    InvalidPeriodWindowError,
    InvalidSecurityCodeError,
    SecurityNotFound,
)
from valuescope_api.domain.exceptions.base import DomainError
from valuescope_api.infrastructure.logging.logger import get_json_logger

_LOGGER = get_json_logger(__name__)

# Tag type accepted by FastAPI for APIRouter.tags
TagType = str | Enum

_DOMAIN_ERROR_STATUS: tuple[tuple[type[DomainError], int], ...] = (
    (SecurityNotFound, 404),
    (CompanyNotFound, 404),
    (InvalidSecurityCodeError, 400),
    (InvalidBinWidthError, 400),
    (InvalidPeriodWindowError, 400),
)


def request_trace_id(request: Request) -> str | None:
    """Return the correlation id assigned by ``RequestIdMiddleware``, if any."""
    return getattr(request.state, "request_id", None)


def error_response(
    *,
    http_status: int,
    code: str,
    message: str,
    trace_id: str | None,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Build a JSONResponse carrying a canonical ErrorEnvelope."""
    envelope = ErrorEnvelope(
        error=ErrorObject(
            code=code,
            http_status=http_status,
            message=message,
            details=details or {},
            trace_id=trace_id,
        ),
    )
    return JSONResponse(status_code=http_status, content=envelope.model_dump(mode="json"))


def domain_error_response(exc: DomainError, *, trace_id: str | None) -> JSONResponse:
    """Map a domain error onto its HTTP status and ErrorEnvelope.

    Unknown domain errors surface as 500 with their stable code.
    """
    http_status = 500
    for exc_type, mapped in _DOMAIN_ERROR_STATUS:
        if isinstance(exc, exc_type):
            http_status = mapped
            break
    return error_response(
        http_status=http_status,
        code=exc.code,
        message=str(exc),
        trace_id=trace_id,
        details=dict(exc.details),
    )


class BaseRouter(APIRouter):
    """Canonical router wrapper for versioned HTTP endpoints.

    Args:
        version: API version segment (e.g., "v1").
        resource: Plural resource segment (e.g., "securities").
        prefix: Optional explicit prefix (overrides version/resource).
        tags: Default tags applied to all routes mounted on this router.
        dependencies: Optional global dependencies for all routes.
        **kwargs: Additional APIRouter kwargs.
    """

    def __init__(
        self,
        *,
        version: str,
        resource: str,
        prefix: str | None = None,
        tags: Sequence[TagType] | None = None,
        dependencies: Sequence[Any] | None = None,
        **kwargs: Any,
    ) -> None:
        computed_prefix = prefix or f"/{version}/{resource}"
        super().__init__(
            prefix=computed_prefix,
            tags=list(tags) if tags is not None else None,
            dependencies=list(dependencies) if dependencies is not None else None,
            **kwargs,
        )
        _LOGGER.debug(
            "router_initialized",
            extra={"extra": {"prefix": computed_prefix, "tags": [str(t) for t in tags or []]}},
        )

    @staticmethod
    def std_error_responses() -> dict[int | str, dict[str, Any]]:
        """Return the canonical error response mapping for endpoints.

        Use in routes via:

            responses=BaseRouter.std_error_responses()
        """
        return {
            400: {"model": ErrorEnvelope, "description": "Bad request (validation or parameter)."},
            404: {"model": ErrorEnvelope, "description": "Not found."},
            422: {"model": ErrorEnvelope, "description": "Unprocessable content."},
            500: {"model": ErrorEnvelope, "description": "Internal server error."},
        }
