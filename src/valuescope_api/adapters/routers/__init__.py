"""Routers Package Export (Adapters Layer).

Re-exports the application router aggregator and the health router so the
bootstrap does not depend on router file layout.
"""

from __future__ import annotations

from .api_router import router as api_router  # noqa: F401
from .health_router import router as health  # noqa: F401

__all__ = ["api_router", "health"]
