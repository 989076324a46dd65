# Copyright (c) ValueScope.
# SPDX-License-Identifier: MIT
"""HTTP Schemas package (Adapters Layer).

Purpose:
    Public, adapter-facing HTTP schema surface. Re-exports the canonical
    envelopes and resource schemas used by routers and presenters. It does
    NOT expose BaseHTTPSchema, which stays internal to this package.

Layer:
    adapters/schemas/http
"""

from __future__ import annotations

from valuescope_api.adapters.schemas.http.analytics import (
    AggregatedHistoryHTTP,
    DistributionHTTP,
    PeriodAnalysisHTTP,
    SelectionHTTP,
    SelectionTransitionHTTP,
)
from valuescope_api.adapters.schemas.http.envelopes import (
    ErrorEnvelope,
    ErrorObject,
    SuccessEnvelope,
)

__all__ = [
    # Envelopes
    "ErrorObject",
    "ErrorEnvelope",
    "SuccessEnvelope",
    # Analytics schemas
    "AggregatedHistoryHTTP",
    "DistributionHTTP",
    "PeriodAnalysisHTTP",
    "SelectionHTTP",
    "SelectionTransitionHTTP",
]
