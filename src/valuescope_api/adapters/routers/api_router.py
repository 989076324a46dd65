# src/valuescope_api/adapters/routers/api_router.py
# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""API Router Aggregator (Adapters Layer).

Responsibilities:
    * Mount health endpoints under ``/health``.
    * Mount company analytics under ``/v1/companies/...``.
    * Mount security page analytics under ``/v1/securities/...``.
    * Mount market-wide rankings under ``/v1/rankings/...``.
"""

from __future__ import annotations

from fastapi import APIRouter

from valuescope_api.adapters.routers.companies_router import router as companies_router
from valuescope_api.adapters.routers.health_router import router as health_router
from valuescope_api.adapters.routers.rankings_router import router as rankings_router
from valuescope_api.adapters.routers.securities_router import router as securities_router

router = APIRouter()

router.include_router(health_router, prefix="/health", tags=["Health"])

# BaseRouter already carries the /v1/<resource> prefix.
router.include_router(companies_router)
router.include_router(securities_router)
router.include_router(rankings_router)
